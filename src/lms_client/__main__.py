"""LM Studio client entry point.

Usage:
    python -m lms_client [OPTIONS] [COMMAND]

Options:
    --config PATH    Path to YAML config file
    --profile NAME   Profile name (dev, prod, test)
    --dry-run        Load config and exit
    --version        Show version

Commands:
    check-binary NAME   Check that a companion executable is installed
"""

# Load .env file before anything else
try:
    from pathlib import Path as _Path

    from dotenv import load_dotenv

    _project_root = _Path(__file__).parent.parent.parent
    _env_file = _project_root / ".env"
    if _env_file.exists():
        load_dotenv(_env_file)
    else:
        load_dotenv()
except ImportError:
    pass  # python-dotenv not installed, skip

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .common.errors import UtilBinaryNotFoundError
from .common.logger import setup_logging
from .config.loader import load_config
from .config.profiles import detect_profile
from .utils.binary import UtilBinary


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="lms-client",
        description="LM Studio client utilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m lms_client --dry-run                 # Load auto-detected profile
  python -m lms_client --profile prod --dry-run  # Load production profile
  python -m lms_client check-binary lms-tool     # Check a companion executable

Environment:
  LMS_CLIENT_PROFILE    Set profile (dev, prod, test)
""",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML config file",
        metavar="PATH",
    )

    parser.add_argument(
        "--profile",
        choices=["dev", "prod", "test"],
        help="Configuration profile to use",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"LM Studio client v{__version__}",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load config and exit (for testing)",
    )

    subparsers = parser.add_subparsers(dest="command")
    check_parser = subparsers.add_parser(
        "check-binary",
        help="Check that a companion executable is installed",
    )
    check_parser.add_argument("name", help="Executable name without extension")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parse_args(argv)

    try:
        if args.config:
            config = load_config(path=args.config)
        else:
            config = load_config(profile=args.profile or detect_profile().value)
    except FileNotFoundError as e:
        print(f"Error: Config file not found: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.level, config.logging.format, config.logging.datefmt)
    logger = logging.getLogger("lms_client")

    logger.info(f"LM Studio client v{__version__}")
    logger.info(f"Log level: {config.logging.level}")

    if args.dry_run:
        logger.info("Dry run - configuration loaded successfully")
        return 0

    if args.command == "check-binary":
        binary = UtilBinary(args.name, cache_dir=config.utils.cache_dir)
        try:
            binary.check()
        except UtilBinaryNotFoundError as e:
            logger.error(str(e))
            return 1
        print(binary.path)
        return 0

    logger.error("No command given. Use --help for usage.")
    return 2


if __name__ == "__main__":
    sys.exit(main())
