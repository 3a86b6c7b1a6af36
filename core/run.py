"""Command pipelines for cleaning names and pairing subtitles."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from cli import CleanOptions, PairOptions
from config import Config
from core.files.scanner import find_media_files, normalize_extensions, split_media_files
from core.languages import LanguageEntry, load_language_table
from core.pairing import SubtitlePair, pair_subtitles
from core.release_name import (
    DEFAULT_EXTRA_NAMES,
    Found,
    clean_release_name,
    get_release_from_sub_filename,
)
from logger import get_logger

log = get_logger()


@dataclass
class PairSummary:
    """Aggregate results for a pairing run."""

    paired: int
    unpaired: int
    videos: int


def resolve_languages_path(languages_path: Path | None, cfg: Config) -> Path | None:
    """Pick the language table file: CLI override, then config, then bundled."""
    if languages_path:
        return languages_path
    if cfg.languages.table_path:
        return Path(cfg.languages.table_path).expanduser().resolve()
    return None


def resolve_extra_names(cfg: Config) -> Tuple[str, ...]:
    """Combine built-in trailing watermarks with configured ones."""
    names = list(DEFAULT_EXTRA_NAMES)
    for name in cfg.languages.extra_names:
        if name and name not in names:
            names.append(name)
    return tuple(names)


def load_languages(languages_path: Path | None, cfg: Config) -> Dict[str, LanguageEntry]:
    """Load the language table for a command run."""
    path = resolve_languages_path(languages_path, cfg)
    table = load_language_table(path)
    log.debug(f"Loaded {len(table)} language(s) from {path or 'bundled table'}")
    return table


def run_clean(options: CleanOptions, cfg: Config) -> int:
    """Print the release name of each input name.

    Args:
        options: Parsed clean options.
        cfg: Loaded configuration.

    Returns:
        Process exit code.
    """
    table = load_languages(options.languages_path, cfg)
    extra = resolve_extra_names(cfg)
    release_name_mode = options.release_name_mode or cfg.pairing.release_name_mode

    records: List[Dict[str, object]] = []
    for name in options.names:
        outcome = get_release_from_sub_filename(name, table, release_name_mode, extra_names=extra)
        found = isinstance(outcome, Found)
        if options.raw:
            release = outcome.value if found else None
        else:
            release = clean_release_name(name, table, release_name_mode=release_name_mode, extra_names=extra)
        if not found:
            log.debug(f"No release name in {name!r} ({outcome.reason})")
        records.append({"input": name, "release": release, "found": found})

    if options.as_json:
        print(json.dumps(records, ensure_ascii=False, indent=2))
        return 0
    for record in records:
        if options.raw:
            print(f'"{record["release"]}"' if record["found"] else "NOT FOUND")
        else:
            print(record["release"])
    return 0


def _format_pair(pair: SubtitlePair) -> str:
    if pair.video is None:
        return f"{pair.subtitle.name} -> (no match) [{pair.release_name}]"
    return f"{pair.subtitle.name} -> {pair.video.name} ({pair.score:.2f})"


def run_pair(options: PairOptions, cfg: Config) -> int:
    """Scan a directory and pair subtitle files with video files.

    Args:
        options: Parsed pair options.
        cfg: Loaded configuration.

    Returns:
        Process exit code.
    """
    table = load_languages(options.languages_path, cfg)
    subtitle_exts = normalize_extensions(cfg.scan.subtitle_extensions)
    video_exts = normalize_extensions(cfg.scan.video_extensions)

    if options.file:
        if options.file.suffix.lower() not in subtitle_exts:
            print(f"Not a subtitle file: {options.file}")
            return 2
        files = find_media_files(options.root, video_exts, cfg.scan.ignore_substrings, 0)
        subtitles, videos = [options.file], files
    else:
        files = find_media_files(
            options.root,
            subtitle_exts + video_exts,
            cfg.scan.ignore_substrings,
            cfg.scan.max_files,
        )
        subtitles, videos = split_media_files(files, subtitle_exts, video_exts)

    log.info(f"Found {len(subtitles)} subtitle(s) and {len(videos)} video(s).")
    pairs = pair_subtitles(subtitles, videos, table, cfg.pairing.min_score, resolve_extra_names(cfg))
    for pair in pairs:
        log.info(_format_pair(pair))

    summary = PairSummary(
        paired=sum(1 for p in pairs if p.video is not None),
        unpaired=sum(1 for p in pairs if p.video is None),
        videos=len(videos),
    )
    log.info(f"Summary: {summary.paired} paired, {summary.unpaired} unpaired, {summary.videos} video(s).")
    return 0
