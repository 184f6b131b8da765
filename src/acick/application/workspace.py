"""Files of one contest under the workspace base directory."""

from typing import Optional

import yaml
from loguru import logger

from acick.domain.exceptions import ProblemMismatchError, WorkspaceError
from acick.domain.models import ContestId, Problem, ProblemId
from acick.infrastructure.abs_path import AbsPath, SaveResult
from acick.infrastructure.console import Console
from acick.infrastructure.testcases import TestcaseIter

PROBLEM_FILE_NAME = "problem.yaml"
SOURCE_FILE_NAME = "Main.cpp"
TESTCASES_DIR_NAME = "testcases"
BASE_DIR_MARKER = "acick.yaml"


class Workspace:
    """
    Lays out ``{base}/{service}/{contest}/{problem-lower}/`` and reads and
    writes the files found there.
    """

    def __init__(
        self,
        base_dir: AbsPath,
        contest_id: ContestId,
        service: str = "atcoder",
        source_file_name: str = SOURCE_FILE_NAME,
    ):
        self.base_dir = base_dir
        self.contest_id = contest_id
        self.service = service
        self.source_file_name = source_file_name

    @staticmethod
    def find_base_dir(start: AbsPath, marker: str = BASE_DIR_MARKER) -> Optional[AbsPath]:
        """Closest directory from ``start`` upwards holding ``marker``."""
        return start.search_dir_contains(marker)

    def problem_dir(self, problem_id: ProblemId) -> AbsPath:
        return self.base_dir.join(self.service).join(str(self.contest_id)).join(str(problem_id).lower())

    def problem_path(self, problem_id: ProblemId) -> AbsPath:
        return self.problem_dir(problem_id).join(PROBLEM_FILE_NAME)

    def source_path(self, problem_id: ProblemId) -> AbsPath:
        return self.problem_dir(problem_id).join(self.source_file_name)

    def testcases_dir(self, problem_id: ProblemId) -> AbsPath:
        return self.problem_dir(problem_id).join(TESTCASES_DIR_NAME)

    def save_problem(self, problem: Problem, overwrite: bool, console: Console) -> SaveResult:
        def write(f):
            yaml.safe_dump(problem.to_dict(), f, allow_unicode=True, sort_keys=False)

        return self.problem_path(problem.id).save_pretty(write, overwrite, self.base_dir, console)

    def load_problem(self, problem_id: ProblemId, console: Console) -> Problem:
        path = self.problem_path(problem_id)
        try:
            content = path.load_pretty(self.base_dir, console)
        except WorkspaceError as e:
            raise WorkspaceError("Could not load problem file. Fetch problem data first.") from e

        try:
            problem = Problem.from_dict(yaml.safe_load(content))
        except (yaml.YAMLError, KeyError, TypeError, ValueError) as e:
            raise WorkspaceError(f"Could not read problem as yaml: {path}") from e

        if problem.id != problem_id:
            raise ProblemMismatchError(f"Found mismatching problem id in problem file: {problem.id}")
        return problem

    def save_source(self, problem_id: ProblemId, source: str, overwrite: bool, console: Console) -> SaveResult:
        return self.source_path(problem_id).save_pretty(lambda f: f.write(source), overwrite, self.base_dir, console)

    def load_source(self, problem_id: ProblemId, console: Console) -> str:
        return self.source_path(problem_id).load_pretty(self.base_dir, console)

    def move_testcases_dir(self, problem: Problem, from_dir: AbsPath, console: Console) -> bool:
        """
        Replace the testcases directory of ``problem`` with ``from_dir``.

        Returns False when the user declines to remove an existing directory.
        """
        dest = self.testcases_dir(problem.id)
        if dest.exists():
            message = f"remove existing testcases dir {dest.strip_prefix(self.base_dir)}?"
            if not console.confirm(message, False):
                logger.info(f"Kept existing testcases of problem {problem.id}")
                return False
            dest.remove_dir_all_pretty(self.base_dir, console)
        else:
            parent = dest.parent()
            if parent is not None:
                parent.create_dir_all()

        dest.move_from_pretty(from_dir, self.base_dir, console)
        return True

    def load_testcases(self, problem_id: ProblemId, sample_name: Optional[str] = None) -> TestcaseIter:
        return TestcaseIter.load(self.testcases_dir(problem_id), sample_name)
