"""
Crawler Configuration Management - Centralized configuration loading and validation.
Supports loading from YAML files with validation and defaults.
"""

import logging
import yaml
from typing import Dict, Any
from pathlib import Path
from dataclasses import asdict

from ..pipeline.stages.fetch_stage import FetchConfig
from ..pipeline.stages.parse_stage import ParseConfig, SUPPORTED_PARSERS
from ..pipeline.stages.storage_stage import DATABASE_PATH_ENV, StorageConfig, apply_database_env
from ..core.paper_crawler import CrawlerConfig


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""
    pass


class ConfigLoader:
    """Loads and validates crawler configuration from YAML files."""

    @staticmethod
    def load_from_yaml(config_path: str) -> CrawlerConfig:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            CrawlerConfig object

        Raises:
            ConfigurationError: If configuration is invalid
        """
        logger = logging.getLogger(__name__)

        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read {config_path}: {e}")

        if not config_dict:
            raise ConfigurationError(f"Empty configuration file: {config_path}")
        if not isinstance(config_dict, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {config_path}")

        logger.info(f"Loaded configuration from {config_path}")

        try:
            config = ConfigLoader._parse_config(config_dict)
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"Failed to parse configuration: {e}")

        return ConfigLoader.apply_environment(config)

    @staticmethod
    def _parse_config(config_dict: Dict[str, Any]) -> CrawlerConfig:
        """Parse configuration dictionary into CrawlerConfig object."""
        stages = config_dict.get('stages') or {}

        fetch_cfg = stages.get('fetch') or {}
        fetch = FetchConfig(
            timeout_seconds=float(fetch_cfg.get('timeout_seconds', 30.0)),
            verify_ssl=bool(fetch_cfg.get('verify_ssl', True)),
        )

        parse_cfg = stages.get('parse') or {}
        parse = ParseConfig(
            parser=parse_cfg.get('parser', 'html.parser'),
            max_html_size_mb=int(parse_cfg.get('max_html_size_mb', 10)),
        )

        storage_cfg = stages.get('storage') or {}
        storage = StorageConfig(
            database_path=str(storage_cfg.get('database_path', 'data/papers.sqlite')),
            create_indexes=bool(storage_cfg.get('create_indexes', True)),
        )

        return CrawlerConfig(fetch=fetch, parse=parse, storage=storage)

    @staticmethod
    def apply_environment(config: CrawlerConfig) -> CrawlerConfig:
        """Apply environment overrides (DATABASE_PATH)."""
        apply_database_env(config.storage)
        return config

    @staticmethod
    def save_to_yaml(config: CrawlerConfig, output_path: str):
        """Save configuration to YAML file."""
        logger = logging.getLogger(__name__)

        config_dict = {
            'stages': {
                'fetch': asdict(config.fetch),
                'parse': asdict(config.parse),
                'storage': asdict(config.storage),
            }
        }

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, 'w') as f:
                yaml.dump(config_dict, f, default_flow_style=False, indent=2, sort_keys=False)
            logger.info(f"Configuration saved to {output_path}")
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration: {e}")

    @staticmethod
    def create_default_config() -> CrawlerConfig:
        """Create a default configuration."""
        return ConfigLoader.apply_environment(CrawlerConfig(
            fetch=FetchConfig(),
            parse=ParseConfig(),
            storage=StorageConfig(),
        ))


def validate_config(config: CrawlerConfig) -> bool:
    """Validate crawler configuration."""
    logger = logging.getLogger(__name__)

    if config.fetch.timeout_seconds <= 0:
        raise ConfigurationError("fetch timeout_seconds must be positive")

    if config.parse.parser not in SUPPORTED_PARSERS:
        raise ConfigurationError(
            f"parse.parser must be one of {', '.join(SUPPORTED_PARSERS)}"
        )

    if config.parse.max_html_size_mb < 1:
        raise ConfigurationError("parse max_html_size_mb must be at least 1")

    if not config.storage.database_path:
        raise ConfigurationError("storage database_path cannot be empty")

    logger.info("Configuration validated successfully")
    return True
