"""Domain models for contests and problems."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any

from .identifiers import ContestId, ProblemId
from .sample import Sample, SampleIter
from .units import Bytes, format_duration, parse_duration


class Compare(str, Enum):
    """How an actual output line is compared against the expected one."""

    DEFAULT = "default"

    def compare(self, a: str, b: str) -> bool:
        if self is Compare.DEFAULT:
            # ignore spaces at the end of lines
            return a.rstrip() == b.rstrip()
        raise NotImplementedError(self)


@dataclass(frozen=True)
class Contest:
    """Domain model for an AtCoder contest."""

    id: ContestId
    name: str


@dataclass
class Problem:
    """Domain model for an AtCoder problem."""

    id: ProblemId
    name: str
    url_name: str
    time_limit: timedelta | None = None
    memory_limit: Bytes | None = None
    compare: Compare = Compare.DEFAULT
    samples: list[Sample] = field(default_factory=list)

    def take_samples(self, sample_name: str | None = None) -> SampleIter:
        """Samples to judge, optionally narrowed down to a single one by name."""
        if sample_name is None:
            return SampleIter(self.samples)
        return SampleIter(sample for sample in self.samples if sample.name == sample_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.value,
            "name": self.name,
            "url_name": self.url_name,
            "time_limit": format_duration(self.time_limit) if self.time_limit is not None else None,
            "memory_limit": self.memory_limit.to_exact_str() if self.memory_limit is not None else None,
            "compare": self.compare.value,
            "samples": [sample.to_dict() for sample in self.samples],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Problem:
        time_limit = data.get("time_limit")
        memory_limit = data.get("memory_limit")
        return cls(
            id=ProblemId(str(data["id"])),
            name=data.get("name", ""),
            url_name=data.get("url_name", ""),
            time_limit=parse_duration(time_limit) if time_limit is not None else None,
            memory_limit=Bytes.parse(memory_limit) if memory_limit is not None else None,
            compare=Compare(data.get("compare", Compare.DEFAULT.value)),
            samples=[Sample.from_dict(s) for s in data.get("samples", [])],
        )
