"""Pair subtitle files with the video files of the same release."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from rapidfuzz import fuzz

from core.languages import LanguageTable
from core.release_name import DEFAULT_EXTRA_NAMES, clean_release_name
from logger import get_logger

log = get_logger()


@dataclass(frozen=True)
class SubtitlePair:
    """A subtitle and the video it was matched to, if any."""

    subtitle: Path
    video: Path | None
    release_name: str
    score: float


def normalize_release(name: str) -> str:
    """Normalize a release name for fuzzy comparison.

    Args:
        name: Release name or filename stem.

    Returns:
        Lowercase, accent-free string with separators collapsed to spaces.
    """
    lowered = unicodedata.normalize("NFKD", name.lower())
    lowered = "".join(ch for ch in lowered if not unicodedata.combining(ch))
    lowered = re.sub(r"[^a-z0-9]+", " ", lowered)
    return re.sub(r"\s+", " ", lowered).strip()


def release_similarity(left: str, right: str) -> float:
    """Compute a fuzzy similarity score in [0, 1] between two release names."""
    if not left or not right:
        return 0.0
    return fuzz.QRatio(normalize_release(left), normalize_release(right)) / 100.0


def best_video_for(release_name: str, videos: List[Path], min_score: float) -> tuple[Path | None, float]:
    """Choose the video whose stem best matches a release name.

    An exact, case-insensitive stem match always wins with score 1.0. Otherwise
    the highest fuzzy score at or above ``min_score`` wins; ties keep the
    earlier video.

    Args:
        release_name: Cleaned release name of a subtitle.
        videos: Candidate video paths.
        min_score: Minimum fuzzy score in [0, 1] to accept a match.

    Returns:
        Tuple of (video, score); video is None when nothing qualifies.
    """
    target = release_name.lower()
    for video in videos:
        if video.stem.lower() == target:
            return video, 1.0

    best: Path | None = None
    best_score = 0.0
    for video in videos:
        score = release_similarity(release_name, video.stem)
        if score > best_score:
            best, best_score = video, score
    if best is None or best_score < min_score:
        return None, best_score
    return best, best_score


def pair_subtitles(
    subtitles: Iterable[Path],
    videos: Iterable[Path],
    languages: LanguageTable,
    min_score: float,
    extra_names: Iterable[str] = DEFAULT_EXTRA_NAMES,
) -> List[SubtitlePair]:
    """Pair each subtitle with the video of the same release.

    Args:
        subtitles: Subtitle file paths.
        videos: Video file paths.
        languages: Language table used to clean subtitle names.
        min_score: Minimum fuzzy score in [0, 1] to accept a match.
        extra_names: Additional trailing names to strip like language names.

    Returns:
        One SubtitlePair per subtitle, in input order.
    """
    video_list = list(videos)
    extra = tuple(extra_names)
    pairs: List[SubtitlePair] = []
    for subtitle in subtitles:
        release = clean_release_name(subtitle.name, languages, extra_names=extra)
        video, score = best_video_for(release, video_list, min_score)
        if video is None:
            log.warn(f"No video matched {subtitle.name} (release {release!r}, best score {score:.2f})")
        else:
            log.debug(f"{subtitle.name} -> {video.name} ({score:.2f})")
        pairs.append(SubtitlePair(subtitle=subtitle, video=video, release_name=release, score=score))
    return pairs
