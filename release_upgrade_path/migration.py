"""Cross-edition migration targets.

Moving between Community Build and the commercial server track is not a
numeric affair: a database created by a given build can only be opened by a
release of the other track that was published *after* it.  The resolver
therefore works from release dates, except for classic-numbered
installations which always go through the current LTA.
"""

from __future__ import annotations

import datetime
import logging
from typing import List, Optional, Tuple, Union

from .catalog import Edition, Track, VersionCatalog
from .results import Direction, Failure, FailureKind, MigrationResult
from .versioning import release_base, release_key

logger = logging.getLogger(__name__)

_TRACK_NAMES = {
    Direction.TO_COMMERCIAL: "SonarQube Server",
    Direction.TO_COMMUNITY: "Community Build",
}

MSG_EMPTY_VERSION = "Please enter a version"
MSG_INVALID_SOURCE = "{version} is not a release you can migrate to {track} from."
MSG_UNKNOWN_DATE = (
    "The release date of {version} is unknown, so no compatible {track} release "
    "can be determined."
)
MSG_NO_TARGET_YET = (
    "No {track} release is compatible with {version} yet. "
    "Please wait for the next release."
)
MSG_VIA_CHECKPOINT = "Migrate to {target}, the latest patch of LTA {checkpoint}."
MSG_FUTURE_MILESTONE = (
    "{target} is the yearly Community Build milestone. "
    "Later upgrades will have to pass through it."
)
MSG_RERUN = (
    "Once the migration to {target} is complete, calculate the upgrade path "
    "again starting from {target}."
)


class EditionMigrationResolver:
    """Find the release of the other track an installation can migrate to."""

    def __init__(self, catalog: VersionCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> VersionCatalog:
        return self._catalog

    def resolve(
        self, version: str, direction: Union[Direction, str]
    ) -> Union[MigrationResult, Failure]:
        direction = Direction.from_value(direction)
        version = (version or "").strip()
        track_name = _TRACK_NAMES[direction]

        if not version:
            return self._fail(FailureKind.INVALID_VERSION, version, MSG_EMPTY_VERSION)

        if not self._is_source(version, direction):
            return self._fail(
                FailureKind.INVALID_VERSION,
                version,
                MSG_INVALID_SOURCE.format(version=version, track=track_name),
            )

        if direction is Direction.TO_COMMERCIAL:
            outcome = self._to_commercial(version)
        else:
            outcome = self._to_community(version)
        if isinstance(outcome, Failure):
            return outcome

        target, messages = outcome
        track = self._catalog.track_of(target)
        if track is None or target != self._catalog.latest(track):
            messages.append(MSG_RERUN.format(target=target))

        logger.debug("Migration %s from %s resolved to %s", direction.value, version, target)
        return MigrationResult(
            version=version,
            direction=direction,
            targets=(target,),
            messages=tuple(messages),
        )

    def _is_source(self, version: str, direction: Direction) -> bool:
        if direction is Direction.TO_COMMERCIAL:
            return self._catalog.track_of(version) in (Track.LEGACY, Track.COMMUNITY_BUILD)
        return self._catalog.is_eligible(version, Edition.ENTERPRISE)

    def _fail(self, kind: FailureKind, version: str, message: str) -> Failure:
        logger.info("Migration for %r failed with %s: %s", version, kind.value, message)
        return Failure(kind=kind, version=version, message=message)

    def _date_of(self, version: str, track_name: str) -> Union[datetime.date, Failure]:
        released = self._catalog.release_date(version)
        if released is None:
            return self._fail(
                FailureKind.UNKNOWN_RELEASE_DATE,
                version,
                MSG_UNKNOWN_DATE.format(version=version, track=track_name),
            )
        return released

    def _to_commercial(self, version: str) -> Union[Tuple[str, List[str]], Failure]:
        catalog = self._catalog
        track_name = _TRACK_NAMES[Direction.TO_COMMERCIAL]
        checkpoint = catalog.current_checkpoint
        checkpoint_patch = catalog.latest_patch(checkpoint)
        via_checkpoint = MSG_VIA_CHECKPOINT.format(
            target=checkpoint_patch, checkpoint=checkpoint
        )

        # Classic releases have no date-based window.
        if catalog.track_of(version) is Track.LEGACY:
            return checkpoint_patch, [via_checkpoint]

        released = self._date_of(version, track_name)
        if isinstance(released, Failure):
            return released
        checkpoint_released = self._date_of(checkpoint, track_name)
        if isinstance(checkpoint_released, Failure):
            return checkpoint_released

        if released < checkpoint_released:
            return checkpoint_patch, [via_checkpoint]

        later = [
            release
            for release in catalog.commercial
            if _is_later(catalog.release_date(release), released)
        ]
        if not later:
            return self._fail(
                FailureKind.NO_COMPATIBLE_TARGET_YET,
                version,
                MSG_NO_TARGET_YET.format(track=track_name, version=version),
            )

        candidate = max(later, key=release_key)
        if catalog.is_checkpoint(candidate):
            base = release_base(candidate)
            target = catalog.latest_patch(base)
            return target, [MSG_VIA_CHECKPOINT.format(target=target, checkpoint=base)]
        return candidate, []

    def _to_community(self, version: str) -> Union[Tuple[str, List[str]], Failure]:
        catalog = self._catalog
        track_name = _TRACK_NAMES[Direction.TO_COMMUNITY]

        released = self._date_of(version, track_name)
        if isinstance(released, Failure):
            return released

        later = [
            (catalog.release_date(release), release_key(release), release)
            for release in catalog.releases(Track.COMMUNITY_BUILD)
            if _is_later(catalog.release_date(release), released)
        ]
        if not later:
            return self._fail(
                FailureKind.NO_COMPATIBLE_TARGET_YET,
                version,
                MSG_NO_TARGET_YET.format(track=track_name, version=version),
            )

        target = min(later)[2]
        messages: List[str] = []
        if catalog.is_milestone(target):
            messages.append(MSG_FUTURE_MILESTONE.format(target=target))
        return target, messages


def _is_later(candidate: Optional[datetime.date], reference: datetime.date) -> bool:
    return candidate is not None and candidate > reference


__all__ = ["EditionMigrationResolver"]
