"""Command-line entry point for the NAS bridge client."""

import argparse
import os
from pathlib import Path
from typing import List, Optional

from cli import commands
from cli.repl import repl_loop
from common.logging_config import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="nas-bridge-cli",
        description="Interactive client for the NAS bridge gateway",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=commands.DEFAULT_CONFIG_PATH,
        help="Path to the JSON config file (default: ~/.nasbridge/config.json)",
    )
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logger = setup_logging('cli', log_level='DEBUG' if args.debug else os.getenv('LOG_LEVEL', 'WARNING'))

    commands.use_config(args.config.expanduser())
    logger.info(f"Using config {args.config}")

    try:
        repl_loop()
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
