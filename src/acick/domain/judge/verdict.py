"""Judge verdicts for a single sample and for a whole run."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from functools import total_ordering

from .diff import TextDiff


@total_ordering
class VerdictKind(Enum):
    """Outcome of running one sample, ordered from best to worst."""

    AC = "AC"
    WA = "WA"
    TLE = "TLE"
    RE = "RE"

    @property
    def rank(self) -> int:
        return list(VerdictKind).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VerdictKind):
            return NotImplemented
        return self.rank < other.rank

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Verdict:
    """Result of judging one sample.

    ``diff`` is kept for AC and WA so the caller can print it later,
    ``reason`` is set only for RE.
    """

    kind: VerdictKind
    sample_name: str
    elapsed: timedelta
    diff: TextDiff | None = None
    reason: str | None = None

    @classmethod
    def ac(cls, sample_name: str, elapsed: timedelta, diff: TextDiff) -> Verdict:
        return cls(VerdictKind.AC, sample_name, elapsed, diff=diff)

    @classmethod
    def wa(cls, sample_name: str, elapsed: timedelta, diff: TextDiff) -> Verdict:
        return cls(VerdictKind.WA, sample_name, elapsed, diff=diff)

    @classmethod
    def tle(cls, sample_name: str, elapsed: timedelta) -> Verdict:
        return cls(VerdictKind.TLE, sample_name, elapsed)

    @classmethod
    def re(cls, sample_name: str, elapsed: timedelta, reason: str) -> Verdict:
        return cls(VerdictKind.RE, sample_name, elapsed, reason=reason)

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed / timedelta(milliseconds=1))

    def describe(self) -> str:
        """Details worth showing to the user: the diff for WA, the reason for RE."""
        if self.kind is VerdictKind.WA and self.diff is not None:
            return str(self.diff)
        if self.kind is VerdictKind.RE and self.reason is not None:
            return self.reason
        return ""

    def __str__(self) -> str:
        return f"{self.kind} ({self.elapsed_ms:>4}ms)"


class TotalVerdict:
    """Aggregate of several verdicts; its kind is the worst one seen."""

    def __init__(self, verdicts: Iterable[Verdict]):
        self.verdicts = list(verdicts)
        self.counts = Counter(verdict.kind for verdict in self.verdicts)

    @property
    def kind(self) -> VerdictKind:
        return max((verdict.kind for verdict in self.verdicts), default=VerdictKind.AC)

    @property
    def total(self) -> int:
        return len(self.verdicts)

    def count(self, kind: VerdictKind) -> int:
        return self.counts.get(kind, 0)

    def __str__(self) -> str:
        counts = ", ".join(f"{kind}: {self.count(kind)}/{self.total}" for kind in VerdictKind)
        return f"{self.kind} ({counts})"
