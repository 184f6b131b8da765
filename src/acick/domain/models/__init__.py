"""Domain models package."""

from .identifiers import ContestId, LangId, LangName, ProblemId
from .problem import Compare, Contest, Problem
from .sample import AsSamples, Sample, SampleIter
from .units import Bytes, format_duration, parse_duration

__all__ = [
    "AsSamples",
    "Bytes",
    "Compare",
    "Contest",
    "ContestId",
    "LangId",
    "LangName",
    "Problem",
    "ProblemId",
    "Sample",
    "SampleIter",
    "format_duration",
    "parse_duration",
]
