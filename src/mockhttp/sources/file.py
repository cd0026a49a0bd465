"""
mockhttp File Source

Loads definitions from a directory of YAML or JSON files.
"""

import json
from pathlib import Path
from typing import Any, List

import yaml

from ..errors import ConfigurationError, DefinitionError
from ..mock.models import Definition
from .base import build_definitions, extract_records

SUPPORTED_SUFFIXES = ('.yaml', '.yml', '.json')


class FileDefinitionSource:
    """
    Loader for definition files.

    Every .yaml/.yml/.json file directly inside the directory is read in
    name order; sub-directories and other files are skipped. A file may hold
    one definition, a list of definitions, or a mapping with a
    "definitions" list.

    Example:
        source = FileDefinitionSource('./mock-data')
        definitions = source.load()

        # mock-data/inquiry.yaml
        # host: google.com
        # path: /inquiry
        # method: POST
        # responses:
        #   - status_code: 200
        #     response_body: '{"status": "ok"}'
    """

    def __init__(self, directory: str, case_sensitive: bool = True):
        """
        Initialize file source.

        Args:
            directory: Directory containing definition files
            case_sensitive: Compile path templates case-sensitively
        """
        self.directory = Path(directory)
        self.case_sensitive = case_sensitive

    def files(self) -> List[Path]:
        """Definition files in load order."""
        if not self.directory.is_dir():
            raise ConfigurationError(f"Definition directory not found: {self.directory}")

        return sorted(
            item for item in self.directory.iterdir()
            if item.is_file() and item.suffix.lower() in SUPPORTED_SUFFIXES
        )

    def load(self) -> List[Definition]:
        """
        Load all definitions.

        Returns:
            Definitions in file order, then document order

        Raises:
            ConfigurationError: If the directory does not exist
            DefinitionError: If a file cannot be parsed or holds an invalid record
        """
        definitions = []
        for path in self.files():
            data = self._read(path)
            definitions.extend(
                build_definitions(extract_records(data, path.name), path.name, case_sensitive=self.case_sensitive)
            )
        return definitions

    @staticmethod
    def _read(path: Path) -> Any:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.suffix.lower() == '.json':
                    return json.load(f)
                return yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
            raise DefinitionError(f"Unable to parse {path.name}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Unable to read {path.name}: {e}") from e
