#!/usr/bin/env python3
"""CLI entrypoint for the subtitle release-name tool."""

from __future__ import annotations

from cli import parse_cli
from config import load_config
from core.languages import LanguageTableError
from core.run import run_clean, run_pair
from logger import get_logger


def main(argv: list[str] | None = None) -> int:
    """Run the CLI entrypoint.

    Args:
        argv: Optional argument list; defaults to ``sys.argv[1:]``.

    Returns:
        Process exit code.
    """
    command, options = parse_cli(argv)
    if command == "pair":
        if options.file:
            if not options.file.exists() or not options.file.is_file():
                print(f"Not a file: {options.file}")
                return 2
        elif not options.root or not options.root.exists() or not options.root.is_dir():
            print(f"Not a directory: {options.root}")
            return 2

    if options.config_path:
        if not options.config_path.exists():
            print(f"Config path not found: {options.config_path}")
            return 2
        if options.config_path.is_dir():
            print(f"Config path must be a file: {options.config_path}")
            return 2

    try:
        cfg = load_config(options.config_path)
    except ValueError as exc:
        print(f"Invalid config file {options.config_path}: {exc}")
        return 2

    log = get_logger()
    log.set_level("DEBUG" if options.verbose else cfg.logging.level)

    try:
        if command == "pair":
            return run_pair(options, cfg)
        return run_clean(options, cfg)
    except LanguageTableError as exc:
        print(str(exc))
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
