"""
Tests for the command line interface.
"""

from unittest.mock import patch

import pytest

from paper_crawler import cli
from paper_crawler.config.crawler_config import DATABASE_PATH_ENV, ConfigLoader
from paper_crawler.models import CrawlReport, Paper
from paper_crawler.pipeline.stages.storage_stage import SQLiteStorage, StorageConfig


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda verbose=False: None)
    monkeypatch.delenv(DATABASE_PATH_ENV, raising=False)


def test_create_default_config(tmp_path, capsys):
    output = tmp_path / "default.yaml"

    cli.main(["config", "--create-default", "-o", str(output)])

    assert output.exists()
    assert "Default configuration created" in capsys.readouterr().out
    assert ConfigLoader.load_from_yaml(str(output)).parse.parser == "html.parser"


def test_validate_invalid_config(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("stages:\n  parse:\n    parser: regex\n")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["config", "--validate", str(path)])

    assert exc_info.value.code == 1
    assert "Configuration error" in capsys.readouterr().out


def test_conferences_on_empty_database(tmp_path, capsys):
    cli.main(["conferences", "--database", str(tmp_path / "papers.sqlite")])

    assert "No conferences stored yet." in capsys.readouterr().out


def test_conferences_lists_stored(tmp_path, capsys):
    database = str(tmp_path / "papers.sqlite")
    storage = SQLiteStorage(StorageConfig(database_path=database))
    conn = storage.begin()
    storage.insert_papers(conn, [
        Paper("OSDI", 2024, "T", "https://www.usenix.org/t", "A", "B"),
    ])
    storage.commit(conn)

    cli.main(["conferences", "--database", database])

    assert "2024  OSDI" in capsys.readouterr().out


def test_crawl_prints_report(tmp_path, capsys):
    report = CrawlReport(ok=True, message="Crawl complete. Total papers found: 2. Total new papers inserted: 2.")

    with patch("paper_crawler.cli.PaperCrawler") as crawler_cls:
        crawler_cls.return_value.run_crawl.return_value = report
        cli.main(["crawl", "https://www.usenix.org/x", "--database", str(tmp_path / "p.sqlite"), "-t", "5"])

    config = crawler_cls.call_args.args[0]
    assert config.fetch.timeout_seconds == 5.0
    crawler_cls.return_value.run_crawl.assert_called_once_with(["https://www.usenix.org/x"])
    crawler_cls.return_value.close.assert_called_once()
    assert report.message in capsys.readouterr().out


def test_crawl_failure_exits_nonzero(tmp_path):
    report = CrawlReport(ok=False, message="Database error: disk I/O error")

    with patch("paper_crawler.cli.PaperCrawler") as crawler_cls:
        crawler_cls.return_value.run_crawl.return_value = report
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["crawl", "https://www.usenix.org/x", "--database", str(tmp_path / "p.sqlite")])

    assert exc_info.value.code == 1


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])

    assert exc_info.value.code == 0
    assert "paper-crawler" in capsys.readouterr().out
