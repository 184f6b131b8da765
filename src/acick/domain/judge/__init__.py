"""Local judge: runs a program per sample and classifies the outcome."""

from .diff import TextDiff
from .judge import Judge
from .verdict import TotalVerdict, Verdict, VerdictKind

__all__ = ["Judge", "TextDiff", "TotalVerdict", "Verdict", "VerdictKind"]
