"""Protocol interfaces for judge site actors."""

from typing import Optional, Protocol, Sequence

from acick.domain.models import Contest, ContestId, LangName, Problem, ProblemId
from acick.infrastructure.console import Console


class Act(Protocol):
    """Operations a judge site supports."""

    def current_user(self, console: Console) -> Optional[str]:
        """Name of the logged in user, if any."""
        ...

    def login(self, user: str, password: str, console: Console) -> bool:
        """Log in; False when already logged in as ``user``."""
        ...

    def fetch(
        self, contest_id: ContestId, problem_id: Optional[ProblemId], console: Console
    ) -> tuple[Contest, list[Problem]]:
        """Contest with its problems and their samples."""
        ...

    def submit(
        self,
        contest_id: ContestId,
        problem: Problem,
        lang_names: Sequence[LangName],
        source: str,
        console: Console,
    ) -> LangName:
        """Submit ``source``; returns the language actually used."""
        ...

    def open_problem_url(self, contest_id: ContestId, problem: Problem, console: Console) -> None:
        ...

    def open_submissions_url(self, contest_id: ContestId, console: Console) -> None:
        ...
