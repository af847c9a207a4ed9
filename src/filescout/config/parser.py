"""
YAML configuration parser for filescout.

This module provides functionality to load, parse, and validate YAML
configuration files. It handles configuration file discovery, merging with
defaults, validation, and provides helpful error messages for configuration
issues.
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from pydantic import ValidationError

from ..models.config import SearchConfig


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of configuration parsing operation.

    Attributes:
        config: The parsed and validated configuration
        warnings: List of non-fatal warnings
        config_path: Path to the configuration file used
        is_default: Whether default configuration was used
    """
    config: SearchConfig
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


class ConfigParser:
    """
    YAML configuration parser with validation and error handling.

    Loads a configuration file (explicit or discovered), merges it over the
    defaults section by section and validates the result into a SearchConfig.
    """

    DEFAULT_CONFIG_NAMES = [
        '.filescout.yaml',
        '.filescout.yml',
        'filescout.yaml',
        'filescout.yml'
    ]

    SECTIONS = ('filters', 'limits', 'content')

    def __init__(self, strict_mode: bool = False):
        """
        Initialize the configuration parser.

        Args:
            strict_mode: If True, treat warnings as errors
        """
        self.strict_mode = strict_mode
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load and parse configuration from file or use defaults.

        Args:
            config_path: Path to configuration file. If None, searches for default files.

        Returns:
            ConfigParseResult containing parsed configuration and metadata

        Raises:
            ConfigurationError: If configuration is invalid or file cannot be read
        """
        if config_path:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            config_data = self._load_yaml_file(config_path)
            is_default = False
        else:
            config_path, config_data = self._find_and_load_config()
            is_default = config_data is None

        merged = self._merge_with_defaults(config_data or {})
        config = self._validate_config_data(merged)

        warnings = config.validate_configuration()
        if is_default:
            warnings.append("No configuration file found, using default settings")

        if self.strict_mode and warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

        self.logger.info(f"Configuration loaded successfully from {config_path or 'defaults'}")

        return ConfigParseResult(
            config=config,
            warnings=warnings,
            config_path=config_path,
            is_default=is_default
        )

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load configuration file from default locations.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        search_paths = [
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'filescout',
        ]

        for search_path in search_paths:
            for config_name in self.DEFAULT_CONFIG_NAMES:
                config_file = search_path / config_name
                if config_file.exists() and config_file.is_file():
                    try:
                        config_data = self._load_yaml_file(config_file)
                        self.logger.info(f"Found configuration file: {config_file}")
                        return config_file, config_data
                    except ConfigurationError as e:
                        self.logger.warning(f"Failed to load {config_file}: {e}")
                        continue

        self.logger.info("No configuration file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

        if not content.strip():
            self.logger.warning(f"Configuration file is empty: {file_path}")
            return {}

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

        return data

    def _merge_with_defaults(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Overlay user values on the defaults; sections merge key by key."""
        merged = self._get_default_config()
        for key, value in config_data.items():
            if key in self.SECTIONS:
                if not isinstance(value, dict):
                    raise ConfigurationError(f"Section '{key}' must be a mapping, got {type(value).__name__}")
                merged[key].update(value)
            elif key == 'default_root':
                merged[key] = value
            else:
                raise ConfigurationError(f"Unknown configuration key: {key}")
        return merged

    def _validate_config_data(self, config_data: Dict[str, Any]) -> SearchConfig:
        """
        Validate configuration data structure and values.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            return SearchConfig.from_dict(config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration as a plain dictionary.

        Returns:
            Default configuration dictionary
        """
        return copy.deepcopy(SearchConfig().to_dict())

    def save_config(self, config: SearchConfig, output_path: Union[str, Path]) -> None:
        """
        Save configuration to YAML file.

        Raises:
            ConfigurationError: If file cannot be written
        """
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(self._generate_yaml_with_comments(config.to_dict()))
        except OSError as e:
            raise ConfigurationError(f"Cannot write configuration file {output_path}: {e}") from e

        self.logger.info(f"Configuration saved to {output_path}")

    def _generate_yaml_with_comments(self, config_dict: Dict[str, Any]) -> str:
        """
        Generate YAML content with helpful comments.

        Args:
            config_dict: Configuration dictionary

        Returns:
            YAML content with comments
        """
        lines = [
            "# filescout configuration",
            "# Traversal pruning, size ceilings and content-bearing file types",
            "",
        ]

        sections = [
            ("default_root", "Directory searched when none is given (default: home directory)"),
            ("filters", "Directories never descended into"),
            ("limits", "Size ceilings (bytes) and live search workers"),
            ("content", "File extensions whose content is searchable"),
        ]

        for section_name, comment in sections:
            if section_name in config_dict:
                lines.append(f"# {comment}")
                section_yaml = yaml.dump({section_name: config_dict[section_name]},
                                         default_flow_style=False,
                                         sort_keys=False)
                lines.append(section_yaml.rstrip())
                lines.append("")

        return "\n".join(lines)

    def validate_config_file(self, config_path: Union[str, Path]) -> List[str]:
        """
        Validate a configuration file without installing it.

        Returns:
            List of validation errors (empty if valid)
        """
        config_path = Path(config_path)
        if not config_path.exists():
            return [f"Configuration file not found: {config_path}"]

        try:
            config_data = self._load_yaml_file(config_path)
            self._validate_config_data(self._merge_with_defaults(config_data))
        except ConfigurationError as e:
            return [str(e)]

        return []

    def get_config_template(self) -> str:
        """
        Get a template configuration file with all options and comments.

        Returns:
            YAML template as string
        """
        template = SearchConfig().to_dict()
        template['default_root'] = '~'
        return self._generate_yaml_with_comments(template)


def load_config(config_path: Optional[Union[str, Path]] = None, strict_mode: bool = False) -> ConfigParseResult:
    """
    Convenience function to load configuration.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser(strict_mode=strict_mode)
    return parser.load_config(config_path)


def validate_config_file(config_path: Union[str, Path]) -> List[str]:
    """
    Convenience function to validate a configuration file.

    Returns:
        List of validation errors (empty if valid)
    """
    parser = ConfigParser()
    return parser.validate_config_file(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Create a template configuration file.

    Raises:
        ConfigurationError: If template cannot be created
    """
    parser = ConfigParser()
    template_content = parser.get_config_template()

    try:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template_content)

    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
