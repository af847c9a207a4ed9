"""
Unit tests for configuration parser.

Tests the YAML configuration parsing, validation, and error handling
functionality of the ConfigParser class.
"""

import pytest
import tempfile
import os
import shutil
import yaml
from pathlib import Path
from unittest.mock import patch

from filescout.config.parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    validate_config_file,
    create_config_template
)
from filescout.models.config import SearchConfig, MEGABYTE


class TestConfigParser:
    """Test cases for ConfigParser class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_dir = Path(self.temp_dir)

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write_yaml(self, data, name='filescout.yaml'):
        path = self.config_dir / name
        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f)
        return path

    def test_init_default(self):
        """Test default initialization."""
        parser = ConfigParser()
        assert parser.strict_mode is False
        assert parser.DEFAULT_CONFIG_NAMES == [
            '.filescout.yaml',
            '.filescout.yml',
            'filescout.yaml',
            'filescout.yml'
        ]

    def test_init_strict_mode(self):
        """Test initialization with strict mode."""
        parser = ConfigParser(strict_mode=True)
        assert parser.strict_mode is True

    def test_load_config_with_valid_file(self):
        """Test loading configuration from valid YAML file."""
        path = self._write_yaml({
            'default_root': self.temp_dir,
            'limits': {'live_content_max_bytes': 1024}
        })

        result = ConfigParser().load_config(path)

        assert isinstance(result, ConfigParseResult)
        assert isinstance(result.config, SearchConfig)
        assert result.config_path == path
        assert result.is_default is False
        assert result.config.limits.live_content_max_bytes == 1024
        assert result.config.default_root == str(self.config_dir.resolve())

    def test_sections_merge_with_defaults(self):
        """Keys missing from a section keep their default values."""
        path = self._write_yaml({
            'filters': {'index_skip_directories': ['vendor']},
            'content': {'pdf_extensions': ['PDF']}
        })

        config = ConfigParser().load_config(path).config

        assert config.filters.index_skip_directories == ['vendor']
        assert config.filters.live_case_sensitive is True
        assert config.limits.index_content_max_bytes == 50 * MEGABYTE
        assert config.content.pdf_extensions == ['.pdf']
        assert '.txt' in config.content.index_text_extensions

    def test_load_config_file_not_found(self):
        """Test loading configuration from non-existent file."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            ConfigParser().load_config("/nonexistent/config.yaml")

    def test_load_config_invalid_yaml(self):
        """Test loading configuration with invalid YAML syntax."""
        path = self.config_dir / 'broken.yaml'
        path.write_text("filters: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML syntax"):
            ConfigParser().load_config(path)

    def test_load_config_non_mapping(self):
        path = self.config_dir / 'list.yaml'
        path.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError, match="must contain a YAML object"):
            ConfigParser().load_config(path)

    def test_load_config_empty_file(self):
        """An empty file yields the defaults."""
        path = self.config_dir / 'empty.yaml'
        path.write_text("")

        result = ConfigParser().load_config(path)
        assert result.config.limits.progress_interval == 100
        assert result.is_default is False

    def test_unknown_key_rejected(self):
        path = self._write_yaml({'roots': ['.']})

        with pytest.raises(ConfigurationError, match="Unknown configuration key: roots"):
            ConfigParser().load_config(path)

    def test_section_must_be_mapping(self):
        path = self._write_yaml({'limits': [1, 2]})

        with pytest.raises(ConfigurationError, match="Section 'limits' must be a mapping"):
            ConfigParser().load_config(path)

    def test_invalid_values_rejected(self):
        """Pydantic validation errors surface as ConfigurationError."""
        path = self._write_yaml({'limits': {'index_content_max_bytes': 0}})

        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            ConfigParser().load_config(path)

    def test_strict_mode_turns_warnings_into_errors(self):
        path = self._write_yaml({'limits': {'live_content_max_bytes': 100 * MEGABYTE}})

        result = ConfigParser().load_config(path)
        assert "live_content_max_bytes exceeds index_content_max_bytes" in result.warnings

        with pytest.raises(ConfigurationError, match="strict mode"):
            ConfigParser(strict_mode=True).load_config(path)

    def test_discovery_uses_defaults_when_nothing_found(self):
        """With no file in any search location the defaults are used."""
        with patch('filescout.config.parser.Path.cwd', return_value=self.config_dir), \
             patch('filescout.config.parser.Path.home', return_value=self.config_dir):
            result = ConfigParser().load_config()

        assert result.is_default is True
        assert result.config_path is None
        assert "No configuration file found, using default settings" in result.warnings

    def test_discovery_finds_file_in_cwd(self):
        path = self._write_yaml({'limits': {'progress_interval': 7}}, name='.filescout.yml')

        with patch('filescout.config.parser.Path.cwd', return_value=self.config_dir):
            result = ConfigParser().load_config()

        assert result.config_path == path
        assert result.is_default is False
        assert result.config.limits.progress_interval == 7

    def test_save_and_reload(self):
        """A saved configuration loads back to the same settings."""
        parser = ConfigParser()
        config = SearchConfig(default_root=self.temp_dir)
        config.filters.index_skip_directories = ['vendor', 'dist']
        output = self.config_dir / 'nested' / 'saved.yaml'

        parser.save_config(config, output)
        content = output.read_text()
        loaded = parser.load_config(output).config

        assert content.startswith("# filescout configuration")
        assert loaded.filters.index_skip_directories == ['vendor', 'dist']
        assert loaded.default_root == config.default_root

    def test_validate_config_file(self):
        good = self._write_yaml({'limits': {'max_concurrent': 4}}, name='good.yaml')
        bad = self._write_yaml({'limits': {'max_concurrent': -1}}, name='bad.yaml')

        assert validate_config_file(good) == []
        errors = validate_config_file(bad)
        assert len(errors) == 1
        assert "max_concurrent" in errors[0]
        assert validate_config_file(self.config_dir / 'missing.yaml') == [
            f"Configuration file not found: {self.config_dir / 'missing.yaml'}"
        ]

    def test_template_is_valid_configuration(self):
        """The generated template parses and lists every section."""
        output = self.config_dir / 'template.yaml'
        create_config_template(output)

        text = output.read_text()
        for section in ('default_root', 'filters', 'limits', 'content'):
            assert f"{section}:" in text

        result = load_config(output)
        assert result.config.default_root == str(Path.home().resolve())
