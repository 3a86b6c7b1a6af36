"""Configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


DEFAULT_SUBTITLE_EXTENSIONS = [".srt", ".sub", ".ssa", ".ass", ".vtt", ".smi"]
DEFAULT_VIDEO_EXTENSIONS = [".mkv", ".mp4", ".m4v", ".avi", ".mov", ".wmv", ".ts"]


@dataclass
class ScanConfig:
    """File scanning configuration settings."""

    subtitle_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_SUBTITLE_EXTENSIONS))
    video_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_VIDEO_EXTENSIONS))
    ignore_substrings: List[str] = field(default_factory=list)
    max_files: int = 0


@dataclass
class LanguagesConfig:
    """Language table settings."""

    table_path: str = ""
    extra_names: List[str] = field(default_factory=list)


@dataclass
class PairingConfig:
    """Subtitle-to-video pairing settings."""

    min_score: float = 0.85
    release_name_mode: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"


@dataclass
class Config:
    """Top-level configuration container."""

    scan: ScanConfig
    languages: LanguagesConfig
    pairing: PairingConfig
    logging: LoggingConfig
