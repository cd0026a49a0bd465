"""
mockhttp Configuration

Settings for the resolver and the client wrappers. Values come from code,
environment variables (MOCKHTTP_*) or a YAML file.
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .errors import ConfigurationError

ENV_PREFIX = 'MOCKHTTP_'

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off')


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


def _parse_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return [item.strip() for item in str(value).split(',') if item.strip()]


@dataclass
class MockConfig:
    """Configuration for mock resolution and client behavior."""

    # Definitions
    definitions_dir: Optional[str] = None  # Directory for FileDefinitionSource
    case_sensitive: bool = True  # Case-sensitive path matching

    # Client behavior
    enabled: bool = True  # False forwards every request to the real upstream
    honor_delay: bool = True  # Sleep the response's configured delay before returning

    # Mock policy (same semantics as RequestFilter)
    filter_hosts: List[str] = field(default_factory=list)  # Exact hosts or "*.domain"
    filter_regex: Optional[str] = None  # Regex matched against URL or host

    # Logging
    log_level: str = "info"
    verbose_mode: bool = False  # Log every match decision at INFO

    _BOOL_FIELDS = ('case_sensitive', 'enabled', 'honor_delay', 'verbose_mode')

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'MockConfig':
        """
        Create MockConfig from a mapping of field names to values.

        Unknown keys raise ConfigurationError.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for name, value in data.items():
            if value is None:
                continue
            if name in cls._BOOL_FIELDS:
                values[name] = _parse_bool(name, value)
            elif name == 'filter_hosts':
                values[name] = _parse_list(value)
            else:
                values[name] = str(value)

        config = cls(**values)
        config.validate()
        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'MockConfig':
        """
        Read configuration from MOCKHTTP_* environment variables.

        Variables: MOCKHTTP_DIR, MOCKHTTP_CASE_SENSITIVE, MOCKHTTP_ENABLED,
        MOCKHTTP_HONOR_DELAY, MOCKHTTP_FILTER_HOSTS (comma-separated),
        MOCKHTTP_FILTER_REGEX, MOCKHTTP_LOG_LEVEL, MOCKHTTP_VERBOSE.

        Args:
            environ: Environment mapping (defaults to os.environ)
        """
        environ = os.environ if environ is None else environ
        names = {
            'DIR': 'definitions_dir',
            'CASE_SENSITIVE': 'case_sensitive',
            'ENABLED': 'enabled',
            'HONOR_DELAY': 'honor_delay',
            'FILTER_HOSTS': 'filter_hosts',
            'FILTER_REGEX': 'filter_regex',
            'LOG_LEVEL': 'log_level',
            'VERBOSE': 'verbose_mode',
        }
        data = {
            field_name: environ[ENV_PREFIX + suffix]
            for suffix, field_name in names.items()
            if ENV_PREFIX + suffix in environ
        }
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'MockConfig':
        """Load configuration from a YAML mapping."""
        with open(yaml_path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Unable to parse {yaml_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping in {yaml_path}, got {type(data).__name__}")
        return cls.from_dict(data)

    def validate(self):
        """Raise ConfigurationError for unusable values."""
        level = self.log_level.upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ConfigurationError(f"Invalid log level: {self.log_level!r}")
