"""Configuration loading and normalization."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from config.models import (
    DEFAULT_SUBTITLE_EXTENSIONS,
    DEFAULT_VIDEO_EXTENSIONS,
    Config,
    LanguagesConfig,
    LoggingConfig,
    PairingConfig,
    ScanConfig,
)


BASE_DIR = Path(__file__).resolve().parent
DEFAULTS_PATH = BASE_DIR / "defaults.json"

_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _as_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    return [str(value)]


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    return default


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_level(value: Any, default: str) -> str:
    level = str(value or default).upper()
    if level == "WARNING":
        level = "WARN"
    return level if level in _LEVELS else default


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name)
    return value if isinstance(value, dict) else {}


def _load_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a JSON object, got {type(raw).__name__}")
    return raw


def merge_dicts(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into base, returning a new dict."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def config_from_dict(raw: Dict[str, Any]) -> Config:
    """Build a Config instance from a raw dictionary.

    Args:
        raw: Raw config dictionary with ``scan``, ``languages``, ``pairing``
            and ``logging`` sections; missing sections use defaults.

    Returns:
        Normalized Config instance.
    """
    scan_raw = _section(raw, "scan")
    languages_raw = _section(raw, "languages")
    pairing_raw = _section(raw, "pairing")
    logging_raw = _section(raw, "logging")

    scan = ScanConfig(
        subtitle_extensions=_as_list(scan_raw.get("subtitle_extensions")) or list(DEFAULT_SUBTITLE_EXTENSIONS),
        video_extensions=_as_list(scan_raw.get("video_extensions")) or list(DEFAULT_VIDEO_EXTENSIONS),
        ignore_substrings=_as_list(scan_raw.get("ignore_substrings")),
        max_files=_as_int(scan_raw.get("max_files", 0), 0),
    )
    languages = LanguagesConfig(
        table_path=str(languages_raw.get("table_path") or ""),
        extra_names=_as_list(languages_raw.get("extra_names")),
    )
    min_score = _as_float(pairing_raw.get("min_score", 0.85), 0.85)
    pairing = PairingConfig(
        min_score=min(max(min_score, 0.0), 1.0),
        release_name_mode=_as_bool(pairing_raw.get("release_name_mode"), False),
    )
    logging = LoggingConfig(level=_as_level(logging_raw.get("level"), "INFO"))
    return Config(scan=scan, languages=languages, pairing=pairing, logging=logging)


def load_config(path: Path | None) -> Config:
    """Load config data into a Config instance.

    Args:
        path: Optional path to a JSON config file containing overrides.

    Returns:
        Parsed Config instance.
    """
    raw: Dict[str, Any] = _load_json(DEFAULTS_PATH) if DEFAULTS_PATH.exists() else {}
    if path is not None:
        raw = merge_dicts(raw, _load_json(path))
    return config_from_dict(raw)
