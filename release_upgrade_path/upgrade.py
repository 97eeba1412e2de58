"""In-track upgrade path resolution.

An upgrade may never jump over a checkpoint (LTA) release: whoever crosses
one has to install its latest patch on the way.  Community installations on a
classic release additionally move over to the Community Build track, where
the yearly milestone build plays the same role.
"""

from __future__ import annotations

import logging
from typing import List, Tuple, Union

from .catalog import Edition, Track, VersionCatalog
from .results import Failure, FailureKind, UpgradePath
from .versioning import (
    Epoch,
    deduplicate_preserving_order,
    epoch_of,
    latest_patch,
    release_base,
    release_key,
)

logger = logging.getLogger(__name__)

MSG_EMPTY_VERSION = "Please enter a version"
MSG_INVALID_VERSION = "Invalid version. Please enter a valid SonarQube version."
MSG_ALREADY_CURRENT = "{version} is already current. No upgrade is needed."
MSG_RENAMED = (
    "Note: After {boundary}, Community Edition has been renamed to Community Build "
    "with a new versioning scheme."
)
MSG_MILESTONE = "{release} is a required Community Build milestone and cannot be skipped."
MSG_RECOMMENDED = "Recommended: upgrade to {patch}, the latest patch of LTA {checkpoint}."
MSG_OPTIONAL = "Optional: you may continue from LTA {checkpoint} to {latest}."


class UpgradePathResolver:
    """Compute the releases an installation has to pass through.

    The resolver holds no state besides the catalog it was built with, so a
    single instance can be shared freely.
    """

    def __init__(self, catalog: VersionCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> VersionCatalog:
        return self._catalog

    def resolve(
        self, start: str, edition: Union[Edition, str] = Edition.COMMUNITY
    ) -> Union[UpgradePath, Failure]:
        """Return the upgrade path from ``start`` for ``edition``.

        The path begins with ``start`` exactly as given, ends with the latest
        release available to the edition and holds every checkpoint in
        between.  A :class:`Failure` of kind ``INVALID_VERSION`` is returned
        when ``start`` is not a release the edition ever shipped.
        """

        edition = Edition.from_value(edition)
        version = (start or "").strip()
        if not version:
            return self._invalid(version, MSG_EMPTY_VERSION)
        if not self._catalog.is_eligible(version, edition):
            return self._invalid(version, MSG_INVALID_VERSION)

        latest = self._catalog.latest_for(edition)
        if self._catalog.canonical(version) == latest:
            logger.debug("%s is already the latest %s release", version, edition.value)
            return UpgradePath(
                path=(version,), messages=(MSG_ALREADY_CURRENT.format(version=version),)
            )

        if edition.is_community:
            steps, messages, optional = self._community_steps(version)
        else:
            steps, messages, optional = self._commercial_steps(version)

        path = tuple(deduplicate_preserving_order([version, *steps]))
        result = UpgradePath(path=path, messages=tuple(messages), optional=tuple(optional))
        logger.debug(
            "Upgrade path for %s (%s): %s", version, edition.value, " -> ".join(path)
        )
        return result

    def _invalid(self, version: str, message: str) -> Failure:
        logger.info("Rejected upgrade path request for %r: %s", version, message)
        return Failure(kind=FailureKind.INVALID_VERSION, version=version, message=message)

    def _community_steps(self, version: str) -> Tuple[List[str], List[str], List[str]]:
        catalog = self._catalog
        steps: List[str] = []
        messages: List[str] = []

        if catalog.contains(Track.COMMUNITY_BUILD, version):
            position = catalog.canonical(version) or version
        else:
            start_key = release_key(release_base(version))
            boundary_key = release_key(catalog.community_edition_last)
            for checkpoint in catalog.sorted_checkpoints():
                if epoch_of(checkpoint) is not Epoch.CLASSIC:
                    continue
                if start_key < release_key(checkpoint) <= boundary_key:
                    steps.append(
                        latest_patch(checkpoint, catalog.community_legacy) or checkpoint
                    )

            messages.append(MSG_RENAMED.format(boundary=catalog.community_edition_last))
            position = catalog.first(Track.COMMUNITY_BUILD)
            steps.append(position)

        latest = catalog.latest(Track.COMMUNITY_BUILD)
        if position != latest:
            position_key = release_key(position)
            latest_key = release_key(latest)
            for milestone in sorted(catalog.milestones, key=release_key):
                if position_key < release_key(milestone) < latest_key:
                    release = latest_patch(milestone, catalog.community_build) or milestone
                    steps.append(release)
                    messages.append(MSG_MILESTONE.format(release=release))
            steps.append(latest)

        return steps, messages, []

    def _commercial_steps(self, version: str) -> Tuple[List[str], List[str], List[str]]:
        catalog = self._catalog
        latest = catalog.latest(Track.COMMERCIAL)

        if catalog.is_after_last_checkpoint(version):
            return [latest], [], []

        steps: List[str] = []
        messages: List[str] = []
        optional: List[str] = []

        current = catalog.current_checkpoint
        current_patch = catalog.latest_patch(current)
        start_base = release_base(version)
        start_key = release_key(start_base)

        if start_base == current:
            if (catalog.canonical(version) or version) != current_patch:
                steps.append(current_patch)
                messages.append(
                    MSG_RECOMMENDED.format(patch=current_patch, checkpoint=current)
                )
        else:
            for checkpoint in catalog.sorted_checkpoints():
                if release_key(checkpoint) > start_key:
                    steps.append(catalog.latest_patch(checkpoint))

        if latest != current_patch:
            optional.append(latest)
            messages.append(MSG_OPTIONAL.format(checkpoint=current, latest=latest))
        steps.append(latest)
        return steps, messages, optional


__all__ = ["UpgradePathResolver"]
