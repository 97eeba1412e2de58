"""Ordering helpers for release identifiers.

Releases are published under two numbering schemes.  Classic releases use
``major.minor[.patch]`` (for example ``9.9`` or ``10.8.1``) while newer ones
are named after the calendar year, either with a four digit year
(``2025.1.2``) or a two digit one (``24.12``).  Plain string comparison breaks
on both counts: ``"10.0"`` sorts before ``"6.7"`` and ``"24.12"`` sorts before
``"9.9"``.  The utilities in this module avoid that pitfall by parsing the
numeric components and tagging every key with the epoch it belongs to, so a
year-based release always compares greater than any classic one.
"""

from __future__ import annotations

from dataclasses import dataclass
import enum
import re
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

_VERSION_RE = re.compile(r"\d+")

YEAR_EPOCH_THRESHOLD = 2024
SHORT_YEAR_THRESHOLD = YEAR_EPOCH_THRESHOLD % 100

ReleaseKey = Tuple[int, int, int, int]


class ReleaseFormatError(ValueError):
    """Raised when a release string does not contain any numeric information."""


class Epoch(enum.IntEnum):
    """Numbering scheme of a release identifier."""

    CLASSIC = 0
    CALENDAR = 1


def _extract_numeric_parts(release: str) -> Tuple[int, ...]:
    """Return the numeric components of a release identifier as a tuple.

    Parameters
    ----------
    release:
        The textual release identifier.  Only the digits matter, so labels
        such as ``"9.9 LTA"`` are accepted.

    Raises
    ------
    ReleaseFormatError
        If the identifier does not contain any decimal digits.
    """

    parts = _VERSION_RE.findall(release)
    if not parts:
        raise ReleaseFormatError(
            f"Release identifier '{release}' does not contain a numeric version"
        )
    return tuple(int(part) for part in parts)


def _calendar_year(first: int) -> Optional[int]:
    if first >= YEAR_EPOCH_THRESHOLD:
        return first
    if SHORT_YEAR_THRESHOLD <= first < 100:
        return 2000 + first
    return None


def epoch_of(release: str) -> Epoch:
    """Return the numbering scheme ``release`` is written in."""

    parts = _extract_numeric_parts(release)
    return Epoch.CALENDAR if _calendar_year(parts[0]) is not None else Epoch.CLASSIC


def release_key(release: str) -> ReleaseKey:
    """Key function that orders releases across both numbering epochs.

    Classic releases map to ``(0, major, minor, patch)``.  Year-based ones map
    to ``(1, year * 100 + n, patch, year_digits)`` which places ``24.12`` right
    before ``25.1`` and every calendar release above every classic one.  The
    last component keeps ``25.1`` and ``2025.1`` apart: the short spelling
    sorts first.  Missing trailing components count as zero.
    """

    parts = _extract_numeric_parts(release)
    padded = (parts + (0, 0, 0))[:3]
    year = _calendar_year(padded[0])
    if year is not None:
        return (Epoch.CALENDAR, year * 100 + padded[1], padded[2], len(str(padded[0])))
    return (Epoch.CLASSIC, padded[0], padded[1], padded[2])


def compare(a: str, b: str) -> int:
    """Return ``-1``, ``0`` or ``1`` depending on how ``a`` orders against ``b``."""

    key_a = release_key(a)
    key_b = release_key(b)
    return (key_a > key_b) - (key_a < key_b)


def normalize(release: str) -> str:
    """Expand ``major.minor`` to ``major.minor.0``.

    Only meant for membership checks.  Paths shown to users keep the label the
    catalog uses.
    """

    if len(release.split(".")) == 2:
        return f"{release}.0"
    return release


def release_base(release: str) -> str:
    """Return the ``major.minor`` (or ``year.n``) part of ``release``."""

    return ".".join(release.split(".")[:2])


@dataclass(frozen=True)
class Release:
    """A release identifier together with its ordering metadata."""

    label: str

    def version_key(self) -> ReleaseKey:
        """Expose the ordering key so callers can reuse it."""

        return release_key(self.label)

    @property
    def base(self) -> str:
        return release_base(self.label)

    @property
    def epoch(self) -> Epoch:
        return epoch_of(self.label)


def sort_releases(releases: Iterable[str]) -> List[str]:
    """Return ``releases`` sorted by :func:`release_key`.

    The input is copied so that callers do not see their sequences mutated.
    """

    ordered = list(releases)
    ordered.sort(key=release_key)
    return ordered


def deduplicate_preserving_order(releases: Sequence[str]) -> Iterator[str]:
    """Yield unique releases while preserving their first occurrence order."""

    seen: set[str] = set()
    for item in releases:
        if item not in seen:
            seen.add(item)
            yield item


def latest_patch(base: str, releases: Iterable[str]) -> Optional[str]:
    """Return the highest release in ``releases`` whose base equals ``base``."""

    candidates = [release for release in releases if release_base(release) == base]
    if not candidates:
        return None
    return max(candidates, key=release_key)


__all__ = [
    "Epoch",
    "Release",
    "ReleaseFormatError",
    "compare",
    "deduplicate_preserving_order",
    "epoch_of",
    "latest_patch",
    "normalize",
    "release_base",
    "release_key",
    "sort_releases",
]
