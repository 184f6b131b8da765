"""Submission form page."""

from typing import Optional

from acick.domain.models import ContestId, LangId, LangName
from acick.domain.parsers import inner_text

from .base import ExtractCsrfToken, HasHeader, RestrictedPage, build_url, contest_path


def submit_url(contest_id: ContestId) -> str:
    return build_url(contest_path(contest_id, "/submit"))


def submissions_me_url(contest_id: ContestId) -> str:
    return build_url(contest_path(contest_id, "/submissions/me"))


class SubmitPage(RestrictedPage, HasHeader, ExtractCsrfToken):
    """``/contests/{contest}/submit``."""

    def lang_options(self) -> list[tuple[LangName, Optional[LangId]]]:
        return [
            (inner_text(option).strip(), option.get("value"))
            for option in self.soup.select("#select-lang select option")
        ]

    def extract_lang_id(self, lang_name: LangName) -> Optional[LangId]:
        """Language id whose option text is ``lang_name``."""
        for name, lang_id in self.lang_options():
            if name == lang_name.strip() and lang_id:
                return lang_id
        return None
