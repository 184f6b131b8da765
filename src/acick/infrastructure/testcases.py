"""Full testcases stored as ``in/{name}.txt`` and ``out/{name}.txt`` pairs."""

from enum import Enum
from pathlib import PurePosixPath
from typing import Iterator, Optional

from acick.domain.exceptions import WorkspaceError
from acick.domain.models import Sample

from .abs_path import AbsPath

TESTCASE_EXTENSION = ".txt"


class InOut(str, Enum):
    IN = "in"
    OUT = "out"

    def __str__(self) -> str:
        return self.value


def testcase_name(file_name: str) -> Optional[str]:
    """File stem, or None when there is none."""
    stem = PurePosixPath(file_name).stem
    return stem or None


def validate_testcase_file_name(file_name: str) -> bool:
    return PurePosixPath(file_name).suffix == TESTCASE_EXTENSION and testcase_name(file_name) is not None


def testcase_file_name(name: str) -> str:
    return name + TESTCASE_EXTENSION


class TestcaseIter:
    """Testcases of one problem, read from disk only when iterated."""

    __test__ = False

    def __init__(self, dir: AbsPath, names: list[str]):
        self.dir = dir
        self.names = names

    @classmethod
    def load(cls, dir: AbsPath, sample_name: Optional[str] = None) -> "TestcaseIter":
        """List ``in/*.txt`` (regular files only, sorted by name).

        A given ``sample_name`` is taken as is, without listing.
        """
        if sample_name is not None:
            return cls(dir, [sample_name])

        in_dir = dir.join(InOut.IN.value)
        try:
            entries = sorted(in_dir.path.iterdir())
        except OSError as e:
            raise WorkspaceError(
                f"Could not list testcase files in {in_dir}. Download them first with a full fetch."
            ) from e

        names = [
            testcase_name(entry.name)
            for entry in entries
            if entry.is_file() and validate_testcase_file_name(entry.name)
        ]
        return cls(dir, names)

    def _load_one(self, name: str) -> Sample:
        file_name = testcase_file_name(name)
        input = self.dir.join(InOut.IN.value).join(file_name).load()
        output = self.dir.join(InOut.OUT.value).join(file_name).load()
        return Sample(name, input, output)

    def __iter__(self) -> Iterator[Sample]:
        for name in self.names:
            yield self._load_one(name)

    def __len__(self) -> int:
        return len(self.names)

    def max_name_len(self) -> int:
        return max((len(name) for name in self.names), default=0)
