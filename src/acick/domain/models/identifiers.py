"""Value objects for contest and problem identification."""

import re
from dataclasses import dataclass
from functools import total_ordering

LangName = str
LangId = str


@total_ordering
@dataclass(frozen=True, eq=False)
class ContestId:
    """Identifies an AtCoder contest.

    Equality, ordering and hashing use the normalized form, so that
    ``CodeFestival2017QualA`` and ``code-festival-2017-quala`` are the same contest.
    A plain string compares equal to its identifier but hashes differently,
    so do not mix strings and identifiers as keys of one dict or set.
    """

    value: str

    def normalize(self) -> str:
        return re.sub(r"[-_]", "", self.value).lower()

    def __eq__(self, other: object) -> bool:
        other = _coerce(other, ContestId)
        if other is NotImplemented:
            return NotImplemented
        return self.normalize() == other.normalize()

    def __lt__(self, other: object) -> bool:
        other = _coerce(other, ContestId)
        if other is NotImplemented:
            return NotImplemented
        return self.normalize() < other.normalize()

    def __hash__(self) -> int:
        return hash(self.normalize())

    def __str__(self) -> str:
        """String representation."""
        return self.value


@total_ordering
@dataclass(frozen=True, eq=False)
class ProblemId:
    """Identifies a problem within a contest (``A``, ``B``, ...).

    Plain strings compare equal after normalization; as with :class:`ContestId`
    they are not interchangeable with identifiers as dict or set keys.
    """

    value: str

    def normalize(self) -> str:
        return self.value.upper()

    def __eq__(self, other: object) -> bool:
        other = _coerce(other, ProblemId)
        if other is NotImplemented:
            return NotImplemented
        return self.normalize() == other.normalize()

    def __lt__(self, other: object) -> bool:
        other = _coerce(other, ProblemId)
        if other is NotImplemented:
            return NotImplemented
        return self.normalize() < other.normalize()

    def __hash__(self) -> int:
        return hash(self.normalize())

    def __str__(self) -> str:
        """String representation (always normalized)."""
        return self.normalize()


def _coerce(other, cls):
    if isinstance(other, cls):
        return other
    if isinstance(other, str):
        return cls(other)
    return NotImplemented
