"""Command line entry point.

Usage:
    agentsmd [-o OUTPUT] [--root DIR] [--config FILE] [-v]

Without --output the document is printed to stdout.
"""

import argparse
import logging
import sys

from agentsmd.cli.generate import cmd_generate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agentsmd",
        description="Assemble AGENTS.md from guideline fragments, project files and dependency docs",
    )
    parser.add_argument(
        "-o", "--output", default=None,
        help="Write the document to this file instead of stdout",
    )
    parser.add_argument(
        "--root", default=None,
        help="Project root (default: $AGENTSMD_ROOT or the current directory)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to the section manifest (default: <root>/agentsmd.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log progress to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return cmd_generate(args)


if __name__ == "__main__":
    sys.exit(main())
