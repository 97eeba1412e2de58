import pytest

from release_upgrade_path.catalog import VersionCatalog


@pytest.fixture
def catalog() -> VersionCatalog:
    """Small catalog with every feature the resolvers care about."""

    return VersionCatalog(
        legacy=("1.0", "1.1", "1.1.1", "1.1.2", "1.2", "2.0", "2.1", "2.1.1", "2.2", "3.0", "3.1"),
        community_build=("24.1", "24.2", "25.1", "25.2", "25.3"),
        commercial=("2025.1", "2025.1.1", "2025.2"),
        checkpoints=frozenset({"1.1", "2.1", "2025.1"}),
        milestones=frozenset({"25.1"}),
        community_edition_last="2.2",
        release_dates={
            "3.0": "2024-01-10",
            "24.1": "2024-01-15",
            "24.2": "2024-02-15",
            "3.1": "2024-03-01",
            "25.1": "2025-01-05",
            "2025.1": "2025-01-20",
            "25.2": "2025-02-05",
            "2025.1.1": "2025-03-01",
            "2025.2": "2025-03-10",
            "25.3": "2025-04-01",
        },
    )
