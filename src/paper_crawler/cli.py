"""
Command Line Interface for the Paper Crawler.

Usage Examples:
--------------

# Crawl one or more conference listings
python -m paper_crawler.cli crawl https://www.usenix.org/conference/usenixsecurity24/technical-sessions

# Crawl with custom configuration
python -m paper_crawler.cli crawl URL -c config/production.yaml

# Crawl into a specific database
python -m paper_crawler.cli crawl URL --database data/papers.sqlite

# List stored conferences
python -m paper_crawler.cli conferences --database data/papers.sqlite

# Create default configuration
python -m paper_crawler.cli config --create-default -o config/default.yaml

# Validate configuration
python -m paper_crawler.cli config --validate config/my_config.yaml

# Verbose logging
python -m paper_crawler.cli -v crawl URL
"""

import argparse
import logging
import sys
from pathlib import Path

from .core.paper_crawler import PaperCrawler
from .config.crawler_config import ConfigLoader, validate_config, ConfigurationError
from .errors import StorageError
from .pipeline.stages.storage_stage import SQLiteStorage


def setup_logging(verbose: bool = False):
    """
    Setup logging configuration.

    Args:
        verbose: Enable debug-level logging if True
    """
    level = logging.DEBUG if verbose else logging.INFO

    log_dir = Path('logs')
    log_dir.mkdir(exist_ok=True)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_dir / 'crawler.log')
        ]
    )

    # Set third-party loggers to WARNING to reduce noise
    if not verbose:
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('requests').setLevel(logging.WARNING)


def load_config(args):
    """Load configuration from -c, apply CLI overrides and validate."""
    logger = logging.getLogger(__name__)

    if getattr(args, 'config', None):
        logger.info(f"Loading configuration from {args.config}")
        config = ConfigLoader.load_from_yaml(args.config)
    else:
        logger.info("Using default configuration")
        config = ConfigLoader.create_default_config()

    if getattr(args, 'database', None):
        config.storage.database_path = args.database
        logger.info(f"Set database_path to {args.database}")

    if getattr(args, 'timeout', None) is not None:
        config.fetch.timeout_seconds = args.timeout
        logger.info(f"Set fetch timeout to {args.timeout} seconds")

    validate_config(config)
    return config


def crawl_command(args):
    """
    Execute the crawl command.

    Args:
        args: Parsed command-line arguments
    """
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        logger.error(f"Configuration validation failed: {e}")
        sys.exit(1)

    try:
        crawler = PaperCrawler(config)
    except StorageError as e:
        logger.error(f"Crawl failed: {e}")
        sys.exit(1)

    logger.info(f"Starting crawl with {len(args.urls)} URL(s):")
    for url in args.urls:
        logger.info(f"  - {url}")

    try:
        report = crawler.run_crawl(args.urls)
    finally:
        crawler.close()

    crawler.print_status()
    print(report.message)

    if not report.ok:
        sys.exit(1)


def conferences_command(args):
    """
    List the conferences stored in the database.

    Args:
        args: Parsed command-line arguments
    """
    try:
        config = load_config(args)
        conferences = SQLiteStorage(config.storage).list_conferences()
    except (ConfigurationError, StorageError) as e:
        print(f"✗ Error: {e}")
        sys.exit(1)

    if not conferences:
        print("No conferences stored yet.")
        return

    for conference in conferences:
        print(f"{conference.year}  {conference.name}")


def config_command(args):
    """
    Execute the config command.

    Args:
        args: Parsed command-line arguments
    """
    logger = logging.getLogger(__name__)

    try:
        if args.create_default:
            config = ConfigLoader.create_default_config()
            output_path = args.output or 'config/default.yaml'

            ConfigLoader.save_to_yaml(config, output_path)
            print(f"✓ Default configuration created at: {output_path}")

        elif args.validate:
            print(f"Validating configuration: {args.validate}")
            config = ConfigLoader.load_from_yaml(args.validate)
            validate_config(config)
            print(f"✓ Configuration is valid: {args.validate}")

        else:
            print("Error: Please specify --create-default or --validate")
            sys.exit(1)

    except ConfigurationError as e:
        print(f"✗ Configuration error: {e}")
        logger.error(f"Configuration error: {e}")
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='paper-crawler',
        description='Paper Crawler - ingest conference papers into SQLite',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s crawl https://www.usenix.org/conference/usenixsecurity24/technical-sessions
  %(prog)s crawl URL -c config/production.yaml
  %(prog)s conferences --database data/papers.sqlite
  %(prog)s config --create-default -o config/default.yaml
  %(prog)s config --validate config/my_config.yaml
        """
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose (debug) logging'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ========================================================================
    # CRAWL COMMAND
    # ========================================================================
    crawl_parser = subparsers.add_parser(
        'crawl',
        help='Crawl conference pages and store their papers',
        description='Fetch each URL once, extract papers and store them in one transaction'
    )
    crawl_parser.add_argument('urls', nargs='+', help='Page URL(s) to crawl')
    crawl_parser.add_argument(
        '-c', '--config',
        help='Path to YAML configuration file (default: use built-in defaults)'
    )
    crawl_parser.add_argument('--database', metavar='PATH', help='SQLite database path')
    crawl_parser.add_argument(
        '-t', '--timeout',
        type=float,
        metavar='SECONDS',
        help='HTTP request timeout in seconds'
    )
    crawl_parser.set_defaults(func=crawl_command)

    # ========================================================================
    # CONFERENCES COMMAND
    # ========================================================================
    conf_parser = subparsers.add_parser(
        'conferences',
        help='List stored conferences',
        description='List distinct conference names and years in the database'
    )
    conf_parser.add_argument('-c', '--config', help='Path to YAML configuration file')
    conf_parser.add_argument('--database', metavar='PATH', help='SQLite database path')
    conf_parser.set_defaults(func=conferences_command)

    # ========================================================================
    # CONFIG COMMAND
    # ========================================================================
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Create or validate configuration files'
    )
    config_parser.add_argument(
        '--create-default',
        action='store_true',
        help='Create a default configuration file'
    )
    config_parser.add_argument('--validate', metavar='FILE', help='Validate a configuration file')
    config_parser.add_argument(
        '-o', '--output',
        metavar='FILE',
        help='Output path for created configuration (default: config/default.yaml)'
    )
    config_parser.set_defaults(func=config_command)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if hasattr(args, 'func'):
        args.func(args)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == '__main__':
    main()
