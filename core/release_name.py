"""Release-name extraction from subtitle filenames.

A subtitle file is usually named after the release it belongs to, followed by
tags describing that particular subtitle: language code or name, regional
variant, disc number and a hearing-impaired marker. This module strips those
tags to recover the release name, e.g.::

    Movie.Name.2024.1080p.BluRay.x264.CD1.pt-BR.sdh.srt
    -> " Movie.Name.2024.1080p.BluRay.x264"

Everything here is a pure function of its arguments; the language table is
always passed in by the caller.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, NamedTuple, Optional, Sequence, Tuple, Union

from core.languages import LanguageTable, full_names, short_codes, two_letter_codes


SUBTITLE_EXTENSIONS = (
    "srt",
    "sub",
    "ssa",
    "ass",
    "vtt",
    "smi",
    "sami",
    "txt",
    "idx",
    "sup",
    "usf",
    "mpl",
    "ttml",
    "dfxp",
    "lrc",
)

# Watermarks some subtitle sites append after the language name.
DEFAULT_EXTRA_NAMES = ("addic7ed.com",)

# Shortest release name accepted; anything shorter is a leftover, not a release.
MIN_RELEASE_LENGTH = 3

_SEP = r"[.\-_ ]"
# A separator run only counts from its first character.
_HEAD = rf"(?:^|(?<!{_SEP}){_SEP}+)"
_TAIL = rf"{_SEP}*\Z"

_EXTENSION_RE = re.compile(r"\.(?:" + "|".join(SUBTITLE_EXTENSIONS) + r")\Z", re.IGNORECASE)
_SDH_RE = re.compile(_HEAD + r"sdh" + _TAIL, re.IGNORECASE)
_CD_RE = re.compile(_HEAD + r"cd ?(?:[0-9]|i)" + _TAIL, re.IGNORECASE)
_REGIONAL_RE = re.compile(_HEAD + r"(?P<code>[a-z]{2})-(?P<region>[a-z]{2})" + _TAIL, re.IGNORECASE)
_CODE_RE = re.compile(_HEAD + r"(?P<code>[a-z]{2,3})" + _TAIL, re.IGNORECASE)
_EDGE_RE = re.compile(r"^[,.\-_\s=]+|(?<![,.\-_\s=])[,.\-_\s=]+\Z")


@dataclass(frozen=True)
class Found:
    """A release name was extracted."""

    value: str


@dataclass(frozen=True)
class NotFound:
    """No usable release name could be extracted."""

    reason: str = "too_short"


ReleaseOutcome = Union[Found, NotFound]


class TagMatch(NamedTuple):
    """A trailing tag: how many characters to cut and what to put back."""

    length: int
    replacement: str = ""


class _LanguageIndex(NamedTuple):
    codes: frozenset
    two_letter: frozenset
    names_re: re.Pattern | None


TagMatcher = Callable[[str, _LanguageIndex], Optional[TagMatch]]


def _build_index(languages: LanguageTable, extra_names: Iterable[str]) -> _LanguageIndex:
    names = full_names(languages, extra_names)
    names_re = None
    if names:
        alternation = "|".join(re.escape(name) for name in names)
        names_re = re.compile(_HEAD + r"(?:" + alternation + r")" + _TAIL, re.IGNORECASE)
    return _LanguageIndex(short_codes(languages), two_letter_codes(languages), names_re)


def _span(match: re.Match | None) -> TagMatch | None:
    if not match:
        return None
    return TagMatch(len(match.group(0)))


def match_sdh(working: str, index: _LanguageIndex) -> TagMatch | None:
    """Match a trailing hearing-impaired ``sdh`` marker."""
    return _span(_SDH_RE.search(working))


def match_disc(working: str, index: _LanguageIndex) -> TagMatch | None:
    """Match a trailing disc marker such as ``CD1`` or ``CD I``."""
    return _span(_CD_RE.search(working))


def match_regional_code(working: str, index: _LanguageIndex) -> TagMatch | None:
    """Match a trailing ``xx-YY`` code whose language part is in the table."""
    match = _REGIONAL_RE.search(working)
    if not match or match.group("code").lower() not in index.two_letter:
        return None
    return _span(match)


def match_language_code(working: str, index: _LanguageIndex) -> TagMatch | None:
    """Match a trailing two- or three-letter language code from the table.

    A ``xx-YY`` tail is left to ``match_regional_code``: its region half is
    never stripped on its own.
    """
    if _REGIONAL_RE.search(working):
        return None
    match = _CODE_RE.search(working)
    if not match or match.group("code").lower() not in index.codes:
        return None
    return _span(match)


def match_language_name(working: str, index: _LanguageIndex) -> TagMatch | None:
    """Match a trailing full language name from the table."""
    if index.names_re is None:
        return None
    return _span(index.names_re.search(working))


# Priority order: the first matcher that recognizes the tail wins.
TAG_MATCHERS: Tuple[TagMatcher, ...] = (
    match_sdh,
    match_disc,
    match_regional_code,
    match_language_code,
    match_language_name,
)


def strip_subtitle_extension(filename: str) -> str:
    """Remove one trailing subtitle extension (``.srt``, ``.ass``, ...) if present.

    Args:
        filename: Subtitle filename.

    Returns:
        Filename without its subtitle extension; unchanged if it has none.
    """
    return _EXTENSION_RE.sub("", filename, count=1)


def next_tag(working: str, index: _LanguageIndex, matchers: Sequence[TagMatcher] = TAG_MATCHERS) -> TagMatch | None:
    """Return the first trailing tag recognized by ``matchers``, in order."""
    for matcher in matchers:
        found = matcher(working, index)
        if found is not None:
            return found
    return None


def strip_trailing_tags(working: str, index: _LanguageIndex) -> str:
    """Remove trailing tags until none is recognized at the end of the string.

    Each removal also drops the separator run (``.``, ``-``, ``_``, space)
    that precedes the tag.
    """
    while working:
        tag = next_tag(working, index)
        if tag is None or tag.length <= 0:
            break
        working = working[: len(working) - tag.length] + tag.replacement
    return working


def get_release_from_sub_filename(
    filename: str,
    languages: LanguageTable,
    release_name_mode: bool = False,
    *,
    extra_names: Iterable[str] = DEFAULT_EXTRA_NAMES,
) -> ReleaseOutcome:
    """Extract the release name from a subtitle filename.

    On success the value carries a single leading space. Existing consumers
    of this function rely on that prefix; use ``clean_release_name`` for the
    bare value.

    Args:
        filename: Subtitle filename, or a bare release name.
        languages: Language table whose codes and names are stripped.
        release_name_mode: Treat ``filename`` as a release name and keep its
            extension-like suffix.
        extra_names: Additional trailing names to strip like language names.

    Returns:
        ``Found`` with the release name, or ``NotFound`` when the result is
        empty or shorter than ``MIN_RELEASE_LENGTH``.
    """
    if not filename:
        return NotFound("empty")
    working = filename if release_name_mode else strip_subtitle_extension(filename)
    working = strip_trailing_tags(working, _build_index(languages, extra_names))
    working = _EDGE_RE.sub("", working)
    if len(working) < MIN_RELEASE_LENGTH:
        return NotFound("too_short")
    return Found(" " + working)


def clean_release_name(
    filename: str,
    languages: LanguageTable,
    *,
    release_name_mode: bool = False,
    extra_names: Iterable[str] = DEFAULT_EXTRA_NAMES,
) -> str:
    """Return the release name of a subtitle filename, or the input itself.

    Args:
        filename: Subtitle filename or release name.
        languages: Language table whose codes and names are stripped.
        release_name_mode: Keep extension-like suffixes, as for bare
            release names. Filenames are expected by default.
        extra_names: Additional trailing names to strip like language names.

    Returns:
        The trimmed release name, or ``filename`` unchanged when none could be
        extracted.
    """
    outcome = get_release_from_sub_filename(filename, languages, release_name_mode, extra_names=extra_names)
    if isinstance(outcome, NotFound):
        return filename
    return outcome.value.strip()
