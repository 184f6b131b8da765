"""Contest task list page."""

from typing import Optional
from urllib.parse import urljoin, urlparse

from bs4 import Tag
from loguru import logger

from acick.domain.exceptions import ParsingError
from acick.domain.models import Bytes, Compare, ContestId, Problem, ProblemId, parse_duration
from acick.domain.parsers import find_first, inner_text
from acick.infrastructure.console import Console

from .base import BASE_URL, HasHeader, RestrictedPage, build_url, contest_path


def tasks_url(contest_id: ContestId) -> str:
    return build_url(contest_path(contest_id, "/tasks"))


class TasksPage(RestrictedPage, HasHeader):
    """``/contests/{contest}/tasks``: one table row per problem."""

    def extract_problems(self, console: Console) -> list[Problem]:
        rows = self.soup.select("#main-container .panel table tbody tr")
        logger.debug(f"Found {len(rows)} problem row(s) on {self.url}")
        return [self._extract_problem(row, console) for row in rows]

    def _extract_problem(self, row: Tag, console: Console) -> Problem:
        tds = row.select("td")
        if len(tds) < 2:
            raise ParsingError(f"Could not find task id and name in a row of {self.url}")

        problem_id = ProblemId(inner_text(tds[0]).strip())
        name = inner_text(tds[1]).strip()

        time_limit = None
        time_text = inner_text(tds[2]).strip() if len(tds) > 2 else ""
        try:
            time_limit = parse_duration(time_text)
        except ValueError:
            console.warn(f"Could not parse time limit of problem {problem_id}: {time_text!r}")

        memory_limit = None
        memory_text = inner_text(tds[3]).strip() if len(tds) > 3 else ""
        try:
            memory_limit = Bytes.parse(memory_text)
        except ValueError:
            console.warn(f"Could not parse memory limit of problem {problem_id}: {memory_text!r}")

        return Problem(
            id=problem_id,
            name=name,
            url_name=self._extract_url_name(row, problem_id),
            time_limit=time_limit,
            memory_limit=memory_limit,
            compare=Compare.DEFAULT,
        )

    def _extract_url_name(self, row: Tag, problem_id: ProblemId) -> str:
        link = find_first(row, "a")
        href: Optional[str] = link.get("href") if link is not None else None
        if not href:
            raise ParsingError(f"Could not find link to task {problem_id}")
        task_url = urljoin(BASE_URL, href)
        segments = [seg for seg in urlparse(task_url).path.split("/") if seg]
        if not segments:
            raise ParsingError(f"Could not parse url_name from {task_url}")
        return segments[-1]
