"""
Configuration Module - Configuration management and loading.

This module handles loading, saving, and validating crawler configurations.
It supports YAML-based configuration files with validation.

Components:
-----------
- ConfigLoader: Loads and saves configurations from/to YAML files
- validate_config: Validates configuration objects
- ConfigurationError: Exception raised for invalid configurations

Usage:
------
from paper_crawler.config import ConfigLoader, validate_config

# Load from YAML file
config = ConfigLoader.load_from_yaml('config/default.yaml')

# Validate configuration
validate_config(config)

# Create default configuration
config = ConfigLoader.create_default_config()
config.storage.database_path = 'data/papers.sqlite'

# Save to YAML file
ConfigLoader.save_to_yaml(config, 'config/my_config.yaml')

Configuration File Format:
-------------------------
stages:
  fetch:
    timeout_seconds: 30
    verify_ssl: true
  parse:
    parser: html.parser
  storage:
    database_path: data/papers.sqlite

The DATABASE_PATH environment variable, when set, overrides
stages.storage.database_path.
"""

from .crawler_config import (
    ConfigLoader,
    validate_config,
    ConfigurationError
)

__all__ = [
    'ConfigLoader',
    'validate_config',
    'ConfigurationError',
]
