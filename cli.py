"""Command-line parsing helpers."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to a config.json file")
    parser.add_argument("--languages", help="Path to a JSON language table (overrides config)")
    parser.add_argument("--verbose", action="store_true", help="Log debug details")


@dataclass
class CleanOptions:
    """Parsed CLI options used by the clean command."""

    names: list[str]
    config_path: Path | None
    languages_path: Path | None
    release_name_mode: bool
    raw: bool
    as_json: bool
    verbose: bool


@dataclass
class PairOptions:
    """Parsed CLI options used by the pair command."""

    root: Path | None
    file: Path | None
    config_path: Path | None
    languages_path: Path | None
    verbose: bool


def _parse_clean_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract release names from subtitle filenames.",
        epilog="A name that is literally 'pair' or 'clean' must follow an explicit 'clean' command.",
    )
    _add_common_args(parser)
    parser.add_argument("names", nargs="+", help="Subtitle filenames or release names")
    parser.add_argument(
        "--release-name",
        action="store_true",
        help="Treat inputs as release names (do not strip a file extension)",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the raw extractor result, including its leading space",
    )
    parser.add_argument("--json", action="store_true", help="Print results as a JSON list")
    return parser.parse_args(argv)


def _parse_pair_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pair subtitle files with video files by release name.")
    _add_common_args(parser)
    parser.add_argument("--root", help="Root directory to scan (default: current directory)")
    parser.add_argument("--file", help="Single subtitle file to pair against videos in its directory")
    return parser.parse_args(argv)


def _resolve_path(value: str | None) -> Path | None:
    if not value:
        return None
    return Path(value).expanduser().resolve()


def resolve_config_path(args: argparse.Namespace) -> Path | None:
    """Resolve the config path from CLI arguments.

    Args:
        args: Parsed argparse namespace.

    Returns:
        Explicit ``--config`` path, else ``./config.json`` if present, else None.
    """
    if args.config:
        return _resolve_path(args.config)
    default_file = Path.cwd() / "config.json"
    if default_file.exists():
        return default_file.resolve()
    return None


def get_clean_options(argv: list[str] | None = None) -> CleanOptions:
    """Build a CleanOptions instance from CLI arguments."""
    args = _parse_clean_args(argv)
    return CleanOptions(
        names=list(args.names),
        config_path=resolve_config_path(args),
        languages_path=_resolve_path(args.languages),
        release_name_mode=bool(args.release_name),
        raw=bool(args.raw),
        as_json=bool(args.json),
        verbose=bool(args.verbose),
    )


def get_pair_options(argv: list[str] | None = None) -> PairOptions:
    """Build a PairOptions instance from CLI arguments."""
    args = _parse_pair_args(argv)
    file_path = _resolve_path(args.file)
    if file_path:
        root = file_path.parent
    else:
        root = _resolve_path(args.root) or Path.cwd().resolve()
    return PairOptions(
        root=root,
        file=file_path,
        config_path=resolve_config_path(args),
        languages_path=_resolve_path(args.languages),
        verbose=bool(args.verbose),
    )


def parse_cli(argv: list[str] | None = None) -> tuple[str, CleanOptions | PairOptions]:
    """Parse command-line arguments and return the command name and options."""
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] == "pair":
        return "pair", get_pair_options(args[1:])
    if args and args[0] == "clean":
        return "clean", get_clean_options(args[1:])
    return "clean", get_clean_options(args)
