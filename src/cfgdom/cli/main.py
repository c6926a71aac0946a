"""Main CLI dispatcher for cfgdom.

This module provides the command-line interface for cfgdom, dispatching
subcommands to the dominators module.
"""

import sys
import argparse
import logging

from cfgdom import __version__
from . import dominators

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_handler = None


def configure_logging(verbose):
    """Route cfgdom's loggers to stderr; DEBUG when verbose, else WARNING."""
    global _handler

    logger = logging.getLogger("cfgdom")
    if _handler is not None:
        logger.removeHandler(_handler)

    # Bind to the current stderr, which may have been swapped since last time.
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def build_parser():
    parser = argparse.ArgumentParser(
        description="cfgdom - dominator sets for control flow graphs", prog="cfgdom"
    )

    parser.add_argument("--version", action="version", version=f"cfgdom {__version__}")

    subparsers = parser.add_subparsers(
        dest="command", help="Available commands", required=True
    )

    dominators.add_dom_parser(subparsers)
    dominators.add_rpo_parser(subparsers)
    dominators.add_dot_parser(subparsers)

    return parser


def main(argv=None):
    """Main entry point for the cfgdom CLI.

    Returns:
        int: Exit code (0 for success, non-zero for error).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    return dominators.COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
