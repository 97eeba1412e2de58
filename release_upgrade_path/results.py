"""Result types returned by the resolvers.

Nothing in this package raises for a bad user input.  Unknown versions,
missing release dates and not-yet-available targets are all expected outcomes
and come back as :class:`Failure` values next to the successful
:class:`UpgradePath` and :class:`MigrationResult` types.
"""

from __future__ import annotations

from dataclasses import dataclass
import enum
from typing import Tuple, Union


class FailureKind(enum.Enum):
    INVALID_VERSION = "InvalidVersion"
    UNKNOWN_RELEASE_DATE = "UnknownReleaseDate"
    NO_COMPATIBLE_TARGET_YET = "NoCompatibleTargetYet"


class Direction(enum.Enum):
    """Which way an edition migration goes."""

    TO_COMMERCIAL = "toCommercial"
    TO_COMMUNITY = "toCommunity"

    @classmethod
    def from_value(cls, value: Union["Direction", str]) -> "Direction":
        if isinstance(value, cls):
            return value
        wanted = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    version: str
    message: str

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class UpgradePath:
    """Ordered releases to pass through, plus advisory notes.

    ``optional`` lists the releases of ``path`` the operator may stop short
    of.  Everything else in ``path`` is mandatory.
    """

    path: Tuple[str, ...]
    messages: Tuple[str, ...] = ()
    optional: Tuple[str, ...] = ()

    @property
    def start(self) -> str:
        return self.path[0]

    @property
    def target(self) -> str:
        return self.path[-1]

    @property
    def is_current(self) -> bool:
        return len(self.path) == 1


@dataclass(frozen=True)
class MigrationResult:
    version: str
    direction: Direction
    targets: Tuple[str, ...]
    messages: Tuple[str, ...] = ()


__all__ = ["Direction", "Failure", "FailureKind", "MigrationResult", "UpgradePath"]
