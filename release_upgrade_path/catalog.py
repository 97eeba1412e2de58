"""Static catalog of known releases.

The catalog is the only data the resolvers work from.  It is built once,
either from the built-in :data:`DEFAULT_CATALOG` or from a JSON document named
by the ``RELEASE_UPGRADE_PATH_CATALOG`` environment variable, and is never
mutated afterwards.  Keeping releases for new product versions up to date is a
matter of editing the data below (or the JSON file), not of changing the
resolvers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import datetime
import enum
import functools
import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from .versioning import (
    Epoch,
    ReleaseFormatError,
    epoch_of,
    latest_patch,
    normalize,
    release_base,
    release_key,
)

logger = logging.getLogger(__name__)

CATALOG_ENV_VAR = "RELEASE_UPGRADE_PATH_CATALOG"


class CatalogError(ValueError):
    """Raised when catalog data is inconsistent."""


class Track(enum.Enum):
    """Distribution track a release is published on."""

    LEGACY = "legacy"
    COMMUNITY_BUILD = "community_build"
    COMMERCIAL = "commercial"


class Edition(enum.Enum):
    COMMUNITY = "community"
    DEVELOPER = "developer"
    ENTERPRISE = "enterprise"
    DATACENTER = "datacenter"

    @classmethod
    def from_value(cls, value: Union["Edition", str]) -> "Edition":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())

    @property
    def is_community(self) -> bool:
        return self is Edition.COMMUNITY


def _as_date(value: Union[str, datetime.date]) -> datetime.date:
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(value)


@dataclass(frozen=True)
class VersionCatalog:
    """Immutable set of releases, checkpoints, milestones and release dates.

    ``legacy`` holds every classic-numbered release.  Only the ones up to and
    including ``community_edition_last`` were shipped as Community Edition;
    after that the community flavour continues on the ``community_build``
    track while the commercial editions carry on with ``legacy`` and then
    ``commercial``.
    """

    legacy: Tuple[str, ...]
    community_build: Tuple[str, ...]
    commercial: Tuple[str, ...]
    checkpoints: FrozenSet[str]
    milestones: FrozenSet[str]
    community_edition_last: str
    release_dates: Mapping[str, datetime.date] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        for name in ("legacy", "community_build", "commercial"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "checkpoints", frozenset(self.checkpoints))
        object.__setattr__(self, "milestones", frozenset(self.milestones))
        object.__setattr__(
            self,
            "release_dates",
            MappingProxyType(
                {release: _as_date(day) for release, day in dict(self.release_dates).items()}
            ),
        )
        self._validate()

    def _validate(self) -> None:
        seen: Dict[str, Track] = {}
        for track in Track:
            releases = self.releases(track)
            if not releases:
                raise CatalogError(f"Track '{track.value}' has no releases")
            try:
                keys = [release_key(release) for release in releases]
            except ReleaseFormatError as exc:
                raise CatalogError(str(exc)) from exc
            if keys != sorted(keys):
                raise CatalogError(f"Track '{track.value}' is not sorted ascending")
            for release in releases:
                if release in seen:
                    raise CatalogError(
                        f"Release '{release}' is listed on both the "
                        f"'{seen[release].value}' and '{track.value}' tracks"
                    )
                seen[release] = track

        if any(epoch_of(release) is not Epoch.CLASSIC for release in self.legacy):
            raise CatalogError("The legacy track may only hold classic-numbered releases")

        bases = {release_base(release) for release in seen}
        for name, entries in (("checkpoint", self.checkpoints), ("milestone", self.milestones)):
            for base in entries:
                if base not in bases:
                    raise CatalogError(f"Unknown {name} '{base}'")
        for base in self.milestones:
            if base not in {release_base(r) for r in self.community_build}:
                raise CatalogError(f"Milestone '{base}' is not a community build")
        if self.community_edition_last not in self.legacy:
            raise CatalogError(
                f"Rename boundary '{self.community_edition_last}' is not a legacy release"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VersionCatalog":
        """Build a catalog from decoded JSON data."""

        try:
            return cls(
                legacy=tuple(data["legacy"]),
                community_build=tuple(data["community_build"]),
                commercial=tuple(data["commercial"]),
                checkpoints=frozenset(data["checkpoints"]),
                milestones=frozenset(data.get("milestones", ())),
                community_edition_last=data["community_edition_last"],
                release_dates=dict(data.get("release_dates", {})),
            )
        except KeyError as exc:
            raise CatalogError(f"Catalog is missing the {exc.args[0]!r} key") from exc
        except CatalogError:
            raise
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"Malformed catalog data: {exc}") from exc

    def releases(self, track: Track) -> Tuple[str, ...]:
        if track is Track.LEGACY:
            return self.legacy
        if track is Track.COMMUNITY_BUILD:
            return self.community_build
        return self.commercial

    @property
    def community_legacy(self) -> Tuple[str, ...]:
        """Legacy releases that shipped as Community Edition."""

        boundary = release_key(self.community_edition_last)
        return tuple(r for r in self.legacy if release_key(release_base(r)) <= boundary)

    def first(self, track: Track) -> str:
        return self.releases(track)[0]

    def latest(self, track: Track) -> str:
        return self.releases(track)[-1]

    def contains(self, track: Track, version: str) -> bool:
        return self._lookup(self.releases(track), version) is not None

    def canonical(self, version: str) -> Optional[str]:
        """Return the catalog spelling of ``version`` (``9.9.0`` → ``9.9``)."""

        for track in Track:
            found = self._lookup(self.releases(track), version)
            if found is not None:
                return found
        return None

    @staticmethod
    def _lookup(releases: Iterable[str], version: str) -> Optional[str]:
        wanted = normalize(version)
        for release in releases:
            if release == version or normalize(release) == wanted:
                return release
        return None

    def track_of(self, version: str) -> Optional[Track]:
        for track in Track:
            if self.contains(track, version):
                return track
        return None

    def eligible_releases(self, edition: Edition) -> Tuple[str, ...]:
        if edition.is_community:
            return self.community_legacy + self.community_build
        return self.legacy + self.commercial

    def eligible_tracks(self, edition: Edition) -> Tuple[Track, ...]:
        if edition.is_community:
            return (Track.LEGACY, Track.COMMUNITY_BUILD)
        return (Track.LEGACY, Track.COMMERCIAL)

    def is_eligible(self, version: str, edition: Edition) -> bool:
        return self._lookup(self.eligible_releases(edition), version) is not None

    def latest_for(self, edition: Edition) -> str:
        if edition.is_community:
            return self.latest(Track.COMMUNITY_BUILD)
        return self.latest(Track.COMMERCIAL)

    def selectable_releases(self, edition: Edition) -> List[Tuple[str, Tuple[str, ...]]]:
        """Return the groups a version picker offers for ``edition``."""

        if edition.is_community:
            return [
                ("Community Edition", self.community_legacy),
                ("Community Build", self.community_build),
            ]
        return [("SonarQube Server", self.legacy + self.commercial)]

    def sorted_checkpoints(self) -> List[str]:
        return sorted(self.checkpoints, key=release_key)

    @property
    def current_checkpoint(self) -> str:
        return self.sorted_checkpoints()[-1]

    def is_checkpoint(self, version: str) -> bool:
        return release_base(version) in self.checkpoints

    def is_milestone(self, version: str) -> bool:
        return release_base(version) in self.milestones

    def is_after_last_checkpoint(self, version: str) -> bool:
        return release_key(release_base(version)) > release_key(self.current_checkpoint)

    def latest_patch(self, base: str) -> str:
        """Return the newest patch release of ``base`` across all tracks."""

        for track in Track:
            found = latest_patch(base, self.releases(track))
            if found is not None:
                return found
        return base

    def release_date(self, version: str) -> Optional[datetime.date]:
        return self.release_dates.get(self.canonical(version) or version)


DEFAULT_CATALOG = VersionCatalog(
    legacy=(
        "6.7,6.7.1,6.7.2,6.7.3,6.7.4,6.7.5,6.7.6,6.7.7,"
        "7.0,7.1,7.2,7.2.1,7.3,7.4,7.5,7.6,7.7,7.8,"
        "7.9,7.9.1,7.9.2,7.9.3,7.9.4,7.9.5,7.9.6,"
        "8.0,8.1,8.2,8.3,8.3.1,8.4,8.4.1,8.4.2,8.5,8.5.1,8.6,8.6.1,8.7,8.7.1,8.8,"
        "8.9,8.9.1,8.9.2,8.9.3,8.9.4,8.9.5,8.9.6,8.9.7,8.9.8,8.9.9,8.9.10,"
        "9.0,9.0.1,9.1,9.2,9.2.1,9.2.2,9.2.3,9.2.4,9.3,9.4,9.5,9.6,9.6.1,9.7,9.7.1,9.8,"
        "9.9,9.9.1,9.9.2,9.9.3,9.9.4,9.9.5,9.9.6,9.9.7,9.9.8,"
        "10.0,10.1,10.2,10.2.1,10.3,10.4,10.4.1,10.5,10.5.1,10.6,10.7,10.8,10.8.1"
    ).split(","),
    community_build=("24.12", "25.1", "25.2", "25.3", "25.4", "25.5", "25.6"),
    commercial=("2025.1", "2025.1.1", "2025.1.2", "2025.2", "2025.3"),
    checkpoints=frozenset({"6.7", "7.9", "8.9", "9.9", "2025.1"}),
    milestones=frozenset({"25.1"}),
    community_edition_last="10.7",
    release_dates={
        "9.9": "2023-02-07",
        "10.0": "2023-04-03",
        "10.1": "2023-07-04",
        "10.2": "2023-09-20",
        "10.3": "2023-11-20",
        "10.4": "2024-02-05",
        "10.5": "2024-04-09",
        "10.6": "2024-06-10",
        "10.7": "2024-09-25",
        "10.8": "2024-11-27",
        "24.12": "2024-12-02",
        "25.1": "2025-01-07",
        "2025.1": "2025-01-23",
        "25.2": "2025-02-03",
        "25.3": "2025-03-04",
        "2025.1.1": "2025-03-04",
        "2025.2": "2025-03-26",
        "25.4": "2025-04-07",
        "2025.1.2": "2025-04-29",
        "25.5": "2025-05-06",
        "2025.3": "2025-05-29",
        "25.6": "2025-06-10",
    },
)


def load_catalog(path: Union[str, Path]) -> VersionCatalog:
    """Read a catalog from the JSON document at ``path``."""

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(f"Cannot read catalog file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog file '{path}' is not valid JSON: {exc}") from exc
    catalog = VersionCatalog.from_mapping(data)
    logger.info("Loaded release catalog from %s", path)
    return catalog


@functools.lru_cache(maxsize=None)
def get_catalog() -> VersionCatalog:
    """Return the process-wide catalog, loading it on first use."""

    override = os.environ.get(CATALOG_ENV_VAR, "").strip()
    if override:
        return load_catalog(override)
    logger.debug("Using the built-in release catalog")
    return DEFAULT_CATALOG


__all__ = [
    "CATALOG_ENV_VAR",
    "CatalogError",
    "DEFAULT_CATALOG",
    "Edition",
    "Track",
    "VersionCatalog",
    "get_catalog",
    "load_catalog",
]
