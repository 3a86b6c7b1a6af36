"""Language table model and loaders."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Tuple


BUNDLED_TABLE_PATH = Path(__file__).resolve().parent / "languages.json"

_TWO_LETTER_KEYS = ("two_letter_code", "language_code", "iso639_1")
_THREE_LETTER_KEYS = ("three_letter_code", "iso639", "iso639_2")
_NAME_KEYS = ("language_name", "languageName", "name")
_DISPLAY_KEYS = ("display_name", "displayName")
_NATIVE_KEYS = ("native_name", "originalName")


class LanguageTableError(ValueError):
    """Raised when a language table cannot be read or is malformed."""


@dataclass(frozen=True)
class LanguageEntry:
    """Codes and names a subtitle language is known by."""

    two_letter_code: str
    three_letter_code: str
    language_name: str
    display_name: str
    native_name: str = ""
    alternate_codes: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "LanguageEntry":
        """Build an entry from a raw mapping.

        Both snake-case keys and the upload catalog's keys (``iso639``,
        ``language_code``, ``languageName``, ``displayName``, ``originalName``)
        are accepted.

        Args:
            raw: Raw language mapping.

        Returns:
            Normalized LanguageEntry.

        Raises:
            LanguageTableError: If the mapping has no language code at all.
        """
        if not isinstance(raw, Mapping):
            raise LanguageTableError(f"Language entry must be an object, got {type(raw).__name__}")
        two = _first_value(raw, _TWO_LETTER_KEYS)
        three = _first_value(raw, _THREE_LETTER_KEYS)
        if not two and not three:
            raise LanguageTableError(f"Language entry has no code: {dict(raw)!r}")
        name = _first_value(raw, _NAME_KEYS)
        display = _first_value(raw, _DISPLAY_KEYS) or name
        alternates = []
        iso639_3 = _first_value(raw, ("iso639_3",))
        if iso639_3 and iso639_3.lower() != three.lower():
            alternates.append(iso639_3)
        for code in raw.get("alternate_codes") or []:
            if str(code).strip():
                alternates.append(str(code).strip())
        return cls(
            two_letter_code=two,
            three_letter_code=three,
            language_name=name,
            display_name=display,
            native_name=_first_value(raw, _NATIVE_KEYS),
            alternate_codes=tuple(alternates),
        )

    def codes(self) -> List[str]:
        """Return every code of this entry, lowercased."""
        values = [self.two_letter_code, self.three_letter_code, *self.alternate_codes]
        return [v.lower() for v in values if v]

    def names(self) -> List[str]:
        """Return every non-empty name of this entry."""
        return [v for v in (self.language_name, self.display_name, self.native_name) if v]


LanguageTable = Mapping[str, LanguageEntry]


def _first_value(raw: Mapping[str, Any], keys: Iterable[str]) -> str:
    for key in keys:
        value = raw.get(key)
        if value:
            return str(value).strip()
    return ""


def language_table_from_dict(raw: Mapping[str, Any]) -> Dict[str, LanguageEntry]:
    """Build a language table from a raw ``key -> entry`` mapping.

    Args:
        raw: Mapping of language keys to raw entries.

    Returns:
        Dictionary of LanguageEntry values keyed by language key.
    """
    if not isinstance(raw, Mapping):
        raise LanguageTableError("Language table must be a JSON object")
    return {str(key): LanguageEntry.from_dict(value) for key, value in raw.items()}


def load_language_table(path: Path | None = None) -> Dict[str, LanguageEntry]:
    """Load a language table from JSON.

    Args:
        path: JSON file to read; the bundled table is used when None.

    Returns:
        Dictionary of LanguageEntry values keyed by language key.

    Raises:
        LanguageTableError: If the file is missing, not JSON, or malformed.
    """
    target = path or BUNDLED_TABLE_PATH
    try:
        with target.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as exc:
        raise LanguageTableError(f"Cannot read language table {target}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise LanguageTableError(f"Language table {target} is not valid JSON: {exc}") from exc
    return language_table_from_dict(raw)


def short_codes(table: LanguageTable) -> frozenset[str]:
    """Return all two- and three-letter codes of a table, lowercased."""
    return frozenset(code for entry in table.values() for code in entry.codes() if 2 <= len(code) <= 3)


def two_letter_codes(table: LanguageTable) -> frozenset[str]:
    """Return the two-letter codes of a table, lowercased."""
    return frozenset(entry.two_letter_code.lower() for entry in table.values() if len(entry.two_letter_code) == 2)


def full_names(table: LanguageTable, extra: Iterable[str] = ()) -> List[str]:
    """Return the unique language names of a table, longest first.

    Args:
        table: Language table to read.
        extra: Additional trailing names to include (e.g. site watermarks).

    Returns:
        Names sorted by descending length, deduplicated case-insensitively.
    """
    seen: set[str] = set()
    names: List[str] = []
    for name in [n for entry in table.values() for n in entry.names()] + list(extra):
        key = name.lower()
        if key in seen:
            continue
        seen.add(key)
        names.append(name)
    return sorted(names, key=len, reverse=True)
