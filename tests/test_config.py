"""
Tests for mockhttp Configuration

Tests MockConfig defaults and loading from mappings, environment variables
and YAML files.
"""

import pytest

from mockhttp.config import MockConfig
from mockhttp.errors import ConfigurationError


@pytest.fixture
def sample_yaml_config():
    return """
definitions_dir: ./mock-data
case_sensitive: false
honor_delay: no
filter_hosts:
  - api.example.com
  - "*.internal.example.com"
filter_regex: "/v[0-9]+/"
log_level: debug
verbose_mode: true
"""


class TestMockConfigDefaults:
    """Test suite for MockConfig defaults."""

    def test_defaults(self):
        """Test default values."""
        config = MockConfig()

        assert config.definitions_dir is None
        assert config.case_sensitive is True
        assert config.enabled is True
        assert config.honor_delay is True
        assert config.filter_hosts == []
        assert config.filter_regex is None
        assert config.log_level == 'info'
        assert config.verbose_mode is False


class TestMockConfigFromDict:
    """Test suite for MockConfig.from_dict()."""

    def test_parses_types(self):
        """Test booleans and lists are parsed from strings."""
        config = MockConfig.from_dict({
            'enabled': 'off',
            'case_sensitive': 'YES',
            'filter_hosts': 'a.com, *.b.com,,',
        })

        assert config.enabled is False
        assert config.case_sensitive is True
        assert config.filter_hosts == ['a.com', '*.b.com']

    def test_unknown_key(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigurationError, match='matching_strategy'):
            MockConfig.from_dict({'matching_strategy': 'fuzzy'})

    def test_invalid_boolean(self):
        """Test unparseable booleans are rejected."""
        with pytest.raises(ConfigurationError):
            MockConfig.from_dict({'enabled': 'maybe'})

    def test_invalid_log_level(self):
        """Test log levels are validated."""
        with pytest.raises(ConfigurationError):
            MockConfig.from_dict({'log_level': 'loud'})


class TestMockConfigFromEnv:
    """Test suite for MockConfig.from_env()."""

    def test_reads_prefixed_variables(self):
        """Test MOCKHTTP_* variables map onto fields."""
        config = MockConfig.from_env({
            'MOCKHTTP_DIR': '/srv/mocks',
            'MOCKHTTP_ENABLED': '0',
            'MOCKHTTP_CASE_SENSITIVE': 'false',
            'MOCKHTTP_HONOR_DELAY': 'true',
            'MOCKHTTP_FILTER_HOSTS': 'api.example.com,*.example.org',
            'MOCKHTTP_FILTER_REGEX': 'internal',
            'MOCKHTTP_LOG_LEVEL': 'WARNING',
            'MOCKHTTP_VERBOSE': '1',
            'UNRELATED': 'ignored',
        })

        assert config.definitions_dir == '/srv/mocks'
        assert config.enabled is False
        assert config.case_sensitive is False
        assert config.honor_delay is True
        assert config.filter_hosts == ['api.example.com', '*.example.org']
        assert config.filter_regex == 'internal'
        assert config.log_level == 'WARNING'
        assert config.verbose_mode is True

    def test_empty_environment(self):
        """Test defaults when nothing is set."""
        assert MockConfig.from_env({}) == MockConfig()

    def test_os_environ(self, monkeypatch):
        """Test os.environ is used by default."""
        monkeypatch.setenv('MOCKHTTP_DIR', '/tmp/defs')

        assert MockConfig.from_env().definitions_dir == '/tmp/defs'


class TestMockConfigFromYaml:
    """Test suite for MockConfig.from_yaml()."""

    def test_load(self, tmp_path, sample_yaml_config):
        """Test loading every field from YAML."""
        path = tmp_path / 'mockhttp.yaml'
        path.write_text(sample_yaml_config)

        config = MockConfig.from_yaml(str(path))

        assert config.definitions_dir == './mock-data'
        assert config.case_sensitive is False
        assert config.honor_delay is False
        assert config.filter_hosts == ['api.example.com', '*.internal.example.com']
        assert config.filter_regex == '/v[0-9]+/'
        assert config.log_level == 'debug'
        assert config.verbose_mode is True

    def test_empty_file(self, tmp_path):
        """Test an empty file yields defaults."""
        path = tmp_path / 'empty.yaml'
        path.write_text('')

        assert MockConfig.from_yaml(str(path)) == MockConfig()

    def test_not_a_mapping(self, tmp_path):
        """Test a YAML list is rejected."""
        path = tmp_path / 'list.yaml'
        path.write_text('- a\n- b\n')

        with pytest.raises(ConfigurationError):
            MockConfig.from_yaml(str(path))

    def test_invalid_yaml(self, tmp_path):
        """Test YAML syntax errors are reported as ConfigurationError."""
        path = tmp_path / 'bad.yaml'
        path.write_text('key: [unclosed')

        with pytest.raises(ConfigurationError):
            MockConfig.from_yaml(str(path))
