"""Utilities for working out release upgrade and edition migration paths."""

from .api import resolve_migration, resolve_upgrade_path
from .catalog import DEFAULT_CATALOG, CatalogError, Edition, Track, VersionCatalog, get_catalog
from .migration import EditionMigrationResolver
from .results import Direction, Failure, FailureKind, MigrationResult, UpgradePath
from .upgrade import UpgradePathResolver
from .versioning import ReleaseFormatError, compare, normalize, sort_releases

__all__ = [
    "CatalogError",
    "DEFAULT_CATALOG",
    "Direction",
    "Edition",
    "EditionMigrationResolver",
    "Failure",
    "FailureKind",
    "MigrationResult",
    "ReleaseFormatError",
    "Track",
    "UpgradePath",
    "UpgradePathResolver",
    "VersionCatalog",
    "compare",
    "get_catalog",
    "normalize",
    "resolve_migration",
    "resolve_upgrade_path",
    "sort_releases",
]
