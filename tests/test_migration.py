import dataclasses

import pytest

from release_upgrade_path.catalog import DEFAULT_CATALOG
from release_upgrade_path.migration import EditionMigrationResolver
from release_upgrade_path.results import Direction, Failure, FailureKind, MigrationResult


def _migrate(catalog, version, direction) -> MigrationResult:
    result = EditionMigrationResolver(catalog).resolve(version, direction)
    assert isinstance(result, MigrationResult), result
    return result


def _failure(catalog, version, direction) -> Failure:
    result = EditionMigrationResolver(catalog).resolve(version, direction)
    assert isinstance(result, Failure), result
    return result


class TestToCommercial:
    @pytest.mark.parametrize("version", ["1.0", "1.1.2", "2.2"])
    def test_legacy_goes_through_checkpoint(self, catalog, version) -> None:
        result = _migrate(catalog, version, Direction.TO_COMMERCIAL)
        assert result.targets == ("2025.1.1",)
        assert result.messages[0] == "Migrate to 2025.1.1, the latest patch of LTA 2025.1."
        assert "calculate the upgrade path again" in result.messages[-1]

    def test_legacy_ignores_missing_dates(self, catalog) -> None:
        # 1.0 has no release date at all
        assert catalog.release_date("1.0") is None
        assert _migrate(catalog, "1.0", "toCommercial").targets == ("2025.1.1",)

    def test_build_older_than_checkpoint(self, catalog) -> None:
        result = _migrate(catalog, "24.2", Direction.TO_COMMERCIAL)
        assert result.targets == ("2025.1.1",)

    def test_build_newer_than_checkpoint_takes_latest(self, catalog) -> None:
        result = _migrate(catalog, "25.2", Direction.TO_COMMERCIAL)
        assert result.targets == ("2025.2",)
        # already the newest commercial release, nothing left to upgrade
        assert result.messages == ()

    def test_checkpoint_candidate_is_redirected_to_its_latest_patch(self, catalog) -> None:
        dates = dict(catalog.release_dates)
        dates["2025.1.1"] = "2025-04-15"
        delayed_patch = dataclasses.replace(catalog, release_dates=dates)
        result = _migrate(delayed_patch, "25.3", Direction.TO_COMMERCIAL)
        assert result.targets == ("2025.1.1",)
        assert len(result.messages) == 2

    def test_no_newer_commercial_release(self, catalog) -> None:
        failure = _failure(catalog, "25.3", Direction.TO_COMMERCIAL)
        assert failure.kind is FailureKind.NO_COMPATIBLE_TARGET_YET
        assert "wait for the next release" in failure.message

    def test_unknown_build_date(self, catalog) -> None:
        dates = {k: v for k, v in catalog.release_dates.items() if k != "25.2"}
        undated = dataclasses.replace(catalog, release_dates=dates)
        failure = _failure(undated, "25.2", Direction.TO_COMMERCIAL)
        assert failure.kind is FailureKind.UNKNOWN_RELEASE_DATE
        assert failure.version == "25.2"

    def test_unknown_checkpoint_date(self, catalog) -> None:
        dates = {k: v for k, v in catalog.release_dates.items() if k != "2025.1"}
        undated = dataclasses.replace(catalog, release_dates=dates)
        failure = _failure(undated, "25.2", Direction.TO_COMMERCIAL)
        assert failure.kind is FailureKind.UNKNOWN_RELEASE_DATE
        assert failure.version == "2025.1"

    def test_classic_release_after_rename_goes_through_checkpoint(self, catalog) -> None:
        result = _migrate(catalog, "3.0", Direction.TO_COMMERCIAL)
        assert result.targets == ("2025.1.1",)

    def test_commercial_release_is_rejected(self, catalog) -> None:
        failure = _failure(catalog, "2025.1", Direction.TO_COMMERCIAL)
        assert failure.kind is FailureKind.INVALID_VERSION


class TestToCommunity:
    def test_nearest_later_build_wins(self, catalog) -> None:
        result = _migrate(catalog, "2025.1", Direction.TO_COMMUNITY)
        assert result.targets == ("25.2",)
        assert len(result.messages) == 1

    def test_latest_build_needs_no_follow_up(self, catalog) -> None:
        result = _migrate(catalog, "2025.2", Direction.TO_COMMUNITY)
        assert result.targets == ("25.3",)
        assert result.messages == ()

    def test_milestone_target_is_flagged(self, catalog) -> None:
        result = _migrate(catalog, "3.1", Direction.TO_COMMUNITY)
        assert result.targets == ("25.1",)
        assert "milestone" in result.messages[0]
        assert "calculate the upgrade path again" in result.messages[1]

    def test_unknown_release_date(self, catalog) -> None:
        failure = _failure(catalog, "2.0", Direction.TO_COMMUNITY)
        assert failure.kind is FailureKind.UNKNOWN_RELEASE_DATE

    def test_no_newer_build(self, catalog) -> None:
        dates = dict(catalog.release_dates)
        dates["2025.2"] = "2025-05-01"
        late = dataclasses.replace(catalog, release_dates=dates)
        failure = _failure(late, "2025.2", Direction.TO_COMMUNITY)
        assert failure.kind is FailureKind.NO_COMPATIBLE_TARGET_YET

    def test_community_build_is_rejected(self, catalog) -> None:
        failure = _failure(catalog, "25.1", Direction.TO_COMMUNITY)
        assert failure.kind is FailureKind.INVALID_VERSION


class TestDefaultCatalogMigrations:
    def test_every_legacy_release_targets_the_checkpoint(self) -> None:
        for version in DEFAULT_CATALOG.legacy:
            result = _migrate(DEFAULT_CATALOG, version, Direction.TO_COMMERCIAL)
            assert result.targets == ("2025.1.2",), version

    def test_latest_build_has_to_wait(self) -> None:
        failure = _failure(DEFAULT_CATALOG, "25.6", Direction.TO_COMMERCIAL)
        assert failure.kind is FailureKind.NO_COMPATIBLE_TARGET_YET

    def test_may_build_moves_to_latest_server(self) -> None:
        assert _migrate(DEFAULT_CATALOG, "25.5", "toCommercial").targets == ("2025.3",)

    def test_server_to_community(self) -> None:
        assert _migrate(DEFAULT_CATALOG, "2025.1", "toCommunity").targets == ("25.2",)
        assert _migrate(DEFAULT_CATALOG, "10.8", "toCommunity").targets == ("24.12",)

    def test_results_are_stable(self) -> None:
        resolver = EditionMigrationResolver(DEFAULT_CATALOG)
        assert resolver.resolve("25.2", "toCommercial") == resolver.resolve(
            "25.2", Direction.TO_COMMERCIAL
        )

    def test_direction_is_case_insensitive(self) -> None:
        resolver = EditionMigrationResolver(DEFAULT_CATALOG)
        assert resolver.resolve("10.8", "tocommercial") == resolver.resolve(
            "10.8", Direction.TO_COMMERCIAL
        )
        assert resolver.resolve("2025.1", " TOCOMMUNITY ").targets == ("25.2",)

    def test_unknown_direction(self) -> None:
        with pytest.raises(ValueError):
            EditionMigrationResolver(DEFAULT_CATALOG).resolve("25.2", "sideways")
