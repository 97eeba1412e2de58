"""Entry points used by the presentation layer.

Both functions return plain dictionaries so that callers rendering the
result (a web form, a chat bot, a clipboard export) never have to know about
the resolver classes.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from .catalog import Edition, VersionCatalog, get_catalog
from .migration import EditionMigrationResolver
from .results import Direction, Failure
from .upgrade import UpgradePathResolver


def resolve_upgrade_path(
    version: str,
    edition: Union[Edition, str] = Edition.COMMUNITY,
    catalog: Optional[VersionCatalog] = None,
) -> Optional[Dict[str, List[str]]]:
    """Return ``{"path": [...], "messages": [...], "optional": [...]}``.

    ``None`` means ``version`` is not a release of the requested edition.
    """

    result = UpgradePathResolver(catalog or get_catalog()).resolve(version, edition)
    if isinstance(result, Failure):
        return None
    return {
        "path": list(result.path),
        "messages": list(result.messages),
        "optional": list(result.optional),
    }


def resolve_migration(
    version: str,
    direction: Union[Direction, str],
    catalog: Optional[VersionCatalog] = None,
) -> Dict[str, List[str]]:
    """Return ``{"targets": [...], "messages": [...]}``.

    Failures come back with an empty ``targets`` list and the reason as the
    only message.
    """

    result = EditionMigrationResolver(catalog or get_catalog()).resolve(version, direction)
    if isinstance(result, Failure):
        return {"targets": [], "messages": [result.message]}
    return {"targets": list(result.targets), "messages": list(result.messages)}


__all__ = ["resolve_migration", "resolve_upgrade_path"]
