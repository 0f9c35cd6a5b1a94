"""
Tests for YAML configuration loading and validation.
"""

import pytest

from paper_crawler.config.crawler_config import (
    DATABASE_PATH_ENV,
    ConfigLoader,
    ConfigurationError,
    validate_config,
)


@pytest.fixture(autouse=True)
def no_database_env(monkeypatch):
    monkeypatch.delenv(DATABASE_PATH_ENV, raising=False)


def write_config(tmp_path, text):
    path = tmp_path / "crawler.yaml"
    path.write_text(text)
    return str(path)


def test_load_from_yaml(tmp_path):
    path = write_config(tmp_path, """
stages:
  fetch:
    timeout_seconds: 12
    verify_ssl: false
  parse:
    parser: lxml
  storage:
    database_path: /var/lib/papers.sqlite
    create_indexes: false
""")

    config = ConfigLoader.load_from_yaml(path)

    assert config.fetch.timeout_seconds == 12.0
    assert config.fetch.verify_ssl is False
    assert config.parse.parser == "lxml"
    assert config.parse.max_html_size_mb == 10
    assert config.storage.database_path == "/var/lib/papers.sqlite"
    assert config.storage.create_indexes is False


def test_missing_sections_use_defaults(tmp_path):
    config = ConfigLoader.load_from_yaml(write_config(tmp_path, "stages: {}\n"))

    assert config.fetch.timeout_seconds == 30.0
    assert config.parse.parser == "html.parser"
    assert config.storage.database_path == "data/papers.sqlite"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        ConfigLoader.load_from_yaml(str(tmp_path / "nope.yaml"))


def test_invalid_yaml(tmp_path):
    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        ConfigLoader.load_from_yaml(write_config(tmp_path, "stages: [unclosed\n"))


def test_empty_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Empty"):
        ConfigLoader.load_from_yaml(write_config(tmp_path, ""))


def test_bad_value_type(tmp_path):
    path = write_config(tmp_path, "stages:\n  fetch:\n    timeout_seconds: soon\n")

    with pytest.raises(ConfigurationError, match="Failed to parse"):
        ConfigLoader.load_from_yaml(path)


def test_environment_overrides_database_path(tmp_path, monkeypatch):
    monkeypatch.setenv(DATABASE_PATH_ENV, str(tmp_path / "env.sqlite"))
    path = write_config(tmp_path, "stages:\n  storage:\n    database_path: file.sqlite\n")

    assert ConfigLoader.load_from_yaml(path).storage.database_path == str(tmp_path / "env.sqlite")
    assert ConfigLoader.create_default_config().storage.database_path == str(tmp_path / "env.sqlite")


def test_save_then_load(tmp_path):
    config = ConfigLoader.create_default_config()
    config.fetch.timeout_seconds = 7.5
    config.storage.database_path = "papers.sqlite"
    output = tmp_path / "out" / "config.yaml"

    ConfigLoader.save_to_yaml(config, str(output))
    loaded = ConfigLoader.load_from_yaml(str(output))

    assert loaded == config


class TestValidation:

    def test_defaults_are_valid(self):
        assert validate_config(ConfigLoader.create_default_config())

    def test_non_positive_timeout(self):
        config = ConfigLoader.create_default_config()
        config.fetch.timeout_seconds = 0

        with pytest.raises(ConfigurationError, match="timeout"):
            validate_config(config)

    def test_unknown_html_parser(self):
        config = ConfigLoader.create_default_config()
        config.parse.parser = "regex"

        with pytest.raises(ConfigurationError, match="parse.parser"):
            validate_config(config)

    def test_empty_database_path(self):
        config = ConfigLoader.create_default_config()
        config.storage.database_path = ""

        with pytest.raises(ConfigurationError, match="database_path"):
            validate_config(config)
