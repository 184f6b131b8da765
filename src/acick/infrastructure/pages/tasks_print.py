"""Printable page listing every statement of a contest, used to pick up samples."""

import re
from typing import Optional

from bs4 import Tag
from loguru import logger

from acick.domain.exceptions import ParsingError
from acick.domain.models import ContestId, ProblemId, Sample
from acick.domain.parsers import find_first, inner_text, parse_zenkaku_digits

from .base import RestrictedPage, build_url, contest_path

# (input heading, output heading)
HEADING_PATTERNS = [
    (
        re.compile(r"\ASample Input\s?([0-9]{1,2}).*\Z"),
        re.compile(r"\ASample Output\s?([0-9]{1,2}).*\Z"),
    ),
    (
        re.compile(r"\A[\s\n]*入力例\s*(\d{1,2})[.\n]*\Z"),
        re.compile(r"\A[\s\n]*出力例\s*(\d{1,2})[.\n]*\Z"),
    ),
]

# Statement layouts, newest first. Older contests used looser markup.
SAMPLE_SELECTORS = [
    # current (Japanese)
    "span.lang > span.lang-ja > div.part > section > h3, span.lang > span.lang-ja > div.part > section > pre",
    # current (English)
    "span.lang > span.lang-en > div.part > section > h3, span.lang > span.lang-en > div.part > section > pre",
    # ARC019..ARC057, ABC007..ABC040, ATC001, ATC002
    "div.part > section > h3, div.part > section > pre",
    # ARC002..ARC018, ABC001..ABC006
    "div.part > h3, div.part > section > pre",
    # ARC001, dwacon2018-final
    "h3, section > pre",
    # ARC046/D, ARC050, ABC036, ABC041
    "section > h3, section > pre",
    # ABC034
    "span.lang > span.lang-ja > section > h3, span.lang > span.lang-ja > section > pre",
    # practice contest (Japanese)
    "span.lang > span.lang-ja > div.part > h3, span.lang > span.lang-ja > div.part > section > pre",
    # kupc2015
    "h3, pre",
]


def tasks_print_url(contest_id: ContestId) -> str:
    return build_url(contest_path(contest_id, "/tasks_print"))


class TasksPrintPage(RestrictedPage):
    """``/contests/{contest}/tasks_print``."""

    def extract_samples_map(self) -> dict[ProblemId, list[Sample]]:
        samples_map: dict[ProblemId, list[Sample]] = {}
        for elem in self.soup.select("#main-container > .row > .col-sm-12:not(.next-page)"):
            problem_id, name = self._extract_id_name(elem)
            statement = find_first(elem, "#task-statement")
            if statement is None:
                raise ParsingError(f"Could not find task statement of problem {problem_id}")
            samples = extract_samples(statement)
            logger.debug(f"Extracted {len(samples)} sample(s) for {problem_id} ({name})")
            samples_map[problem_id] = samples
        return samples_map

    @staticmethod
    def _extract_id_name(elem: Tag) -> tuple[ProblemId, str]:
        title = find_first(elem, ".h2")
        if title is None:
            raise ParsingError("Could not find problem title")
        parts = inner_text(title).split("-", 1)
        if len(parts) != 2:
            raise ParsingError(f"Could not find problem name in title {inner_text(title)!r}")
        return ProblemId(parts[0].strip()), parts[1].strip()


def extract_samples(statement: Tag) -> list[Sample]:
    """Samples of one statement, trying every known layout in turn."""
    for selector in SAMPLE_SELECTORS:
        for re_input, re_output in HEADING_PATTERNS:
            samples = _try_extract_samples(statement, selector, re_input, re_output)
            if samples:
                return samples
    return []


def _try_extract_samples(
    statement: Tag, selector: str, re_input: re.Pattern, re_output: re.Pattern
) -> Optional[list[Sample]]:
    inputs: dict[int, str] = {}
    outputs: dict[int, str] = {}
    pending: Optional[tuple[bool, int]] = None

    for elem in statement.select(selector):
        if elem.name == "h3":
            text = inner_text(elem)
            if match := re_input.match(text):
                pending = (True, _heading_number(match))
            elif match := re_output.match(text):
                pending = (False, _heading_number(match))
            if pending is not None and pending[1] < 0:
                return None
        elif elem.name in ("pre", "section"):
            if pending is not None:
                is_input, n = pending
                (inputs if is_input else outputs)[n] = inner_text(elem)
            pending = None

    samples = [Sample(str(n), inputs[n], outputs[n]) for n in sorted(inputs) if n in outputs]
    return samples or None


def _heading_number(match: re.Match) -> int:
    try:
        return parse_zenkaku_digits(match.group(1))
    except ValueError:
        return -1
