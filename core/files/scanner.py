"""Filesystem scanning helpers for subtitle and video files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple


def normalize_extensions(exts: Iterable[str]) -> List[str]:
    """Normalize extensions to lowercase dot-prefixed values.

    Args:
        exts: Iterable of extensions to normalize.

    Returns:
        Sorted list of unique normalized extensions.
    """
    out = []
    for e in exts:
        e = e.strip().lower()
        if not e:
            continue
        if not e.startswith("."):
            e = "." + e
        out.append(e)
    return sorted(set(out))


def should_ignore(path: Path, ignore_substrings: List[str]) -> bool:
    """Check whether a file name contains any ignored substring."""
    name = path.name.lower()
    return any(s.lower() in name for s in ignore_substrings)


def find_media_files(root: Path, extensions: List[str], ignore_substrings: List[str], max_files: int) -> List[Path]:
    """Find subtitle and video files under a root directory.

    Args:
        root: Root directory to scan.
        extensions: Allowed normalized file extensions.
        ignore_substrings: Substrings to skip.
        max_files: Maximum number of files to return (0 for no limit).

    Returns:
        Matching file paths, sorted for stable output.
    """
    files: List[Path] = []
    for p in sorted(root.rglob("*")):
        if not p.is_file():
            continue
        if p.suffix.lower() not in extensions:
            continue
        if should_ignore(p, ignore_substrings):
            continue
        files.append(p)
        if max_files and len(files) >= max_files:
            break
    return files


def split_media_files(
    paths: Iterable[Path],
    subtitle_exts: List[str],
    video_exts: List[str],
) -> Tuple[List[Path], List[Path]]:
    """Split paths into (subtitles, videos) by extension; others are dropped."""
    subtitles: List[Path] = []
    videos: List[Path] = []
    for path in paths:
        suffix = path.suffix.lower()
        if suffix in subtitle_exts:
            subtitles.append(path)
        elif suffix in video_exts:
            videos.append(path)
    return subtitles, videos
