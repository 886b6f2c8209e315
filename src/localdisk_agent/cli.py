"""Command-line interface for the local disk agent."""

import argparse
import json
import logging
import sys
from dataclasses import asdict

from . import __version__
from .config import ConfigManager, ScanConfig
from .collectors import collect_disks

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("localdisk-agent")

DEFAULT_CONFIG_PATH = "/etc/localdisk/config.json"


def _load_config(args: argparse.Namespace) -> ScanConfig:
    config_mgr = ConfigManager(args.config)
    if args.config != DEFAULT_CONFIG_PATH:
        # An explicit path must exist
        return config_mgr.load()
    return config_mgr.load_or_default()


def cmd_scan(args: argparse.Namespace) -> int:
    """Scan the mount table and report local disk capacity."""
    try:
        config = _load_config(args)

        logger.info("Scanning mount table...")
        disks = collect_disks(config)

        if args.json:
            print(json.dumps(disks, indent=2))
            return 0

        print(f"Total:      {disks['total_kb']:.0f} kB")
        print(f"Free:       {disks['free_kb']:.0f} kB")
        print(f"Used:       {disks['used_kb']:.0f} kB")
        print(f"Max usage:  {disks['max_usage_pct']}%")
        print(f"Mounts:     {', '.join(disks['mounts']) or '-'}")
        return 0

    except (FileNotFoundError, ValueError, TypeError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Show the effective configuration, optionally writing the defaults."""
    try:
        config_mgr = ConfigManager(args.config)

        if args.write:
            if config_mgr.exists():
                logger.error(f"Config file already exists: {config_mgr.config_path}")
                return 1
            config_mgr.save(ScanConfig())
            logger.info(f"Default configuration written to {config_mgr.config_path}")

        print(json.dumps(asdict(_load_config(args)), indent=2))
        return 0

    except (FileNotFoundError, ValueError, TypeError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except OSError as e:
        logger.error(f"Failed to write configuration: {e}")
        return 1


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Local disk agent - aggregate local disk capacity",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=f"localdisk-agent {__version__}")
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log skipped mounts and other details",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scan command
    scan_parser = subparsers.add_parser("scan", help="Report local disk capacity")
    scan_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    # Config command
    config_parser = subparsers.add_parser("config", help="Show the effective configuration")
    config_parser.add_argument(
        "--write",
        action="store_true",
        help="Write the default configuration if none exists",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.command:
        parser.print_help()
        return 1

    # Route to command handler
    if args.command == "scan":
        return cmd_scan(args)
    elif args.command == "config":
        return cmd_config(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
