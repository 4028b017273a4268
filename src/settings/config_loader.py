"""YAML configuration loading and validation.

This module handles loading and saving the review configuration from YAML
files. Every key is optional; anything left out keeps the built-in default,
so an empty file is a valid configuration.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml

from src.content_review.highlight import HighlightStyle
from src.content_review.models import DetectorSettings, NormalizerSettings

from .errors import ConfigError, FilesystemError
from .models import ReviewConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        detector:
          min_index_length: 10
          min_fuzzy_length: 20
          min_word_length: 3
          similarity_threshold: 0.92
          max_different_words: 4
          highlight_short_blocks: false
          highlight_tag: div
          highlight_style: "background-color: #e0f2fe; ..."
        normalizer:
          sub_item_marker: "—"
          max_flatten_passes: 5
          max_rounds: 10
          list_role: list
          list_item_role: listitem
    """

    # Looked up in the working directory when no path is given
    DEFAULT_CONFIG_FILE = '.post-review.yaml'

    # field -> (type, minimum) for numeric settings
    DETECTOR_NUMBERS = {
        'min_index_length': (int, 0),
        'min_fuzzy_length': (int, 0),
        'min_word_length': (int, 0),
        'max_different_words': (int, 0),
        'similarity_threshold': (float, 0.0),
    }
    DETECTOR_STRINGS = {'highlight_tag', 'highlight_style'}
    DETECTOR_FLAGS = {'highlight_short_blocks'}

    NORMALIZER_NUMBERS = {
        'max_flatten_passes': (int, 1),
        'max_rounds': (int, 1),
    }
    NORMALIZER_STRINGS = {'sub_item_marker', 'list_role', 'list_item_role'}

    @classmethod
    def load(cls, config_path: str) -> ReviewConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ReviewConfig object with parsed configuration

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        # Empty file means "all defaults"
        if config_dict is None:
            return ReviewConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        config = cls._parse_config(config_dict)
        logger.debug(f"Loaded configuration from {config_path}")
        return config

    @classmethod
    def load_or_default(cls, config_path: Optional[str] = None) -> ReviewConfig:
        """Load an explicit config file, or the default file if present.

        An explicit path must exist. Without one, DEFAULT_CONFIG_FILE is
        used when it exists in the working directory, otherwise defaults.

        Args:
            config_path: Optional explicit configuration path

        Returns:
            ReviewConfig object
        """
        if config_path:
            return cls.load(config_path)
        if os.path.exists(cls.DEFAULT_CONFIG_FILE):
            return cls.load(cls.DEFAULT_CONFIG_FILE)
        return ReviewConfig()

    @classmethod
    def save(cls, config_path: str, config: ReviewConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            config: ReviewConfig object to save

        Raises:
            FilesystemError: If file cannot be written
        """
        detector = config.detector
        normalizer = config.normalizer
        config_dict = {
            'detector': {
                'min_index_length': detector.min_index_length,
                'min_fuzzy_length': detector.min_fuzzy_length,
                'min_word_length': detector.min_word_length,
                'similarity_threshold': detector.similarity_threshold,
                'max_different_words': detector.max_different_words,
                'highlight_short_blocks': detector.highlight_short_blocks,
                'highlight_tag': detector.highlight.tag,
                'highlight_style': detector.highlight.style,
            },
            'normalizer': {
                'sub_item_marker': normalizer.sub_item_marker,
                'max_flatten_passes': normalizer.max_flatten_passes,
                'max_rounds': normalizer.max_rounds,
                'list_role': normalizer.list_role,
                'list_item_role': normalizer.list_item_role,
            },
        }

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ReviewConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated ReviewConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown = set(config_dict.keys()) - {'detector', 'normalizer'}
        if unknown:
            raise ConfigError(
                f"Unknown sections: {', '.join(sorted(str(k) for k in unknown))}"
            )

        detector_raw = cls._section(config_dict, 'detector')
        normalizer_raw = cls._section(config_dict, 'normalizer')

        return ReviewConfig(
            detector=cls._parse_detector(detector_raw),
            normalizer=cls._parse_normalizer(normalizer_raw),
        )

    @classmethod
    def _section(cls, config_dict: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = config_dict.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigError(
                f"Must be a dictionary, got {type(section).__name__}",
                config_field=name
            )
        return section

    @classmethod
    def _parse_detector(cls, raw: Dict[str, Any]) -> DetectorSettings:
        known = set(cls.DETECTOR_NUMBERS) | cls.DETECTOR_STRINGS | cls.DETECTOR_FLAGS
        cls._reject_unknown(raw, known, 'detector')

        values: Dict[str, Any] = {}
        for key, (kind, minimum) in cls.DETECTOR_NUMBERS.items():
            if key in raw:
                values[key] = cls._number(raw[key], kind, minimum, f"detector.{key}")
        for key in cls.DETECTOR_FLAGS:
            if key in raw:
                if not isinstance(raw[key], bool):
                    raise ConfigError(
                        f"Must be a boolean, got {type(raw[key]).__name__}",
                        config_field=f"detector.{key}"
                    )
                values[key] = raw[key]

        if values.get('similarity_threshold', 0.0) > 1.0:
            raise ConfigError(
                f"Must be between 0 and 1, got {values['similarity_threshold']}",
                config_field='detector.similarity_threshold'
            )

        default_highlight = HighlightStyle()
        highlight = HighlightStyle(
            tag=cls._string(raw, 'highlight_tag', default_highlight.tag, 'detector'),
            style=cls._string(raw, 'highlight_style', default_highlight.style, 'detector'),
        )
        return DetectorSettings(highlight=highlight, **values)

    @classmethod
    def _parse_normalizer(cls, raw: Dict[str, Any]) -> NormalizerSettings:
        known = set(cls.NORMALIZER_NUMBERS) | cls.NORMALIZER_STRINGS
        cls._reject_unknown(raw, known, 'normalizer')

        values: Dict[str, Any] = {}
        for key, (kind, minimum) in cls.NORMALIZER_NUMBERS.items():
            if key in raw:
                values[key] = cls._number(raw[key], kind, minimum, f"normalizer.{key}")

        defaults = NormalizerSettings()
        for key in sorted(cls.NORMALIZER_STRINGS):
            values[key] = cls._string(raw, key, getattr(defaults, key), 'normalizer')

        return NormalizerSettings(**values)

    @staticmethod
    def _reject_unknown(raw: Dict[str, Any], known: set, section: str) -> None:
        unknown = set(raw.keys()) - known
        if unknown:
            raise ConfigError(
                f"Unknown fields: {', '.join(sorted(str(k) for k in unknown))}",
                config_field=section
            )

    @staticmethod
    def _number(value: Any, kind: type, minimum: float, field_name: str):
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(
                f"Must be a number, got {type(value).__name__}",
                config_field=field_name
            )
        if kind is int and not isinstance(value, int):
            raise ConfigError(
                f"Must be an integer, got {value}",
                config_field=field_name
            )
        if value < minimum:
            raise ConfigError(
                f"Must be at least {minimum}, got {value}",
                config_field=field_name
            )
        return kind(value)

    @staticmethod
    def _string(raw: Dict[str, Any], key: str, default: str, section: str) -> str:
        if key not in raw:
            return default
        value = raw[key]
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(
                "Must be a non-empty string",
                config_field=f"{section}.{key}"
            )
        return value
