"""Sample test cases and the iterator the judge consumes them through."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class Sample:
    """A named pair of input and expected output."""

    name: str
    input: str
    output: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "input": self.input, "output": self.output}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Sample:
        return cls(name=str(data["name"]), input=data["input"], output=data["output"])


class AsSamples(Protocol):
    """Sequence of samples known up front by count and longest name."""

    def __iter__(self) -> Iterator[Sample]: ...

    def __len__(self) -> int: ...

    def max_name_len(self) -> int: ...


class SampleIter:
    """Samples held in memory (extracted from the problem page)."""

    def __init__(self, samples: Iterable[Sample]):
        self._samples = list(samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def max_name_len(self) -> int:
        return max((len(sample.name) for sample in self._samples), default=0)
