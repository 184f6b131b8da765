"""AtCoder actor: sequences pages and form posts into user-facing operations."""

from typing import Optional, Sequence

from loguru import logger

from acick.domain.exceptions import (
    InvalidRedirectError,
    InvalidResponseCodeError,
    LoggedInAsOtherError,
    LoginFailedError,
    MissingContestNameError,
    MissingSamplesError,
    NoAvailableLanguageError,
    NoProblemsError,
    ProblemNotFoundError,
)
from acick.domain.models import Contest, ContestId, LangName, Problem, ProblemId
from acick.infrastructure.browser import open_in_browser
from acick.infrastructure.config import SessionConfig
from acick.infrastructure.console import Console
from acick.infrastructure.http_client import HttpClient, location_url
from acick.infrastructure.pages import (
    BASE_URL,
    LOGIN_URL,
    SETTINGS_URL,
    LoginPage,
    SettingsPage,
    SubmitPage,
    TasksPage,
    TasksPrintPage,
    build_url,
    submissions_me_url,
    submit_url,
    tasks_print_url,
    tasks_url,
)

from .interfaces import Act


class AtcoderActor(Act):
    """Actor for atcoder.jp."""

    def __init__(self, session_config: SessionConfig, client: Optional[HttpClient] = None):
        """
        Initialize actor.

        Args:
            session_config: Timeout, cookie store and retry policy
            client: Optional HTTP client (tests pass one with fake transport)
        """
        self.session_config = session_config
        self.client = client or HttpClient(session_config)

    def current_user(self, console: Console) -> Optional[str]:
        page = LoginPage.fetch(self.client, LOGIN_URL, console)
        return page.current_user()

    def login(self, user: str, password: str, console: Console) -> bool:
        """
        Log in as ``user``.

        Returns:
            True when newly logged in, False when the session already
            belonged to ``user``.
        """
        login_page = LoginPage.fetch(self.client, LOGIN_URL, console)
        current = login_page.current_user()
        if current is not None:
            if current != user:
                raise LoggedInAsOtherError(current)
            logger.debug(f"Already logged in as {user}")
            return False

        csrf_token = login_page.extract_csrf_token()
        payload = {"csrf_token": csrf_token, "username": user, "password": password}
        response = self.client.post(LOGIN_URL, data=payload).retry_send(console)
        if response.status_code != 302:
            raise InvalidResponseCodeError(f"Received invalid response code {response.status_code} from {LOGIN_URL}")

        settings_page = SettingsPage.fetch(self.client, SETTINGS_URL, console)
        current = settings_page.current_user()
        if current is None:
            raise LoginFailedError(f"Failed to log in as {user}")
        if current != user:
            raise LoggedInAsOtherError(current)
        return True

    def fetch(
        self, contest_id: ContestId, problem_id: Optional[ProblemId], console: Console
    ) -> tuple[Contest, list[Problem]]:
        tasks_page = TasksPage.fetch(self.client, tasks_url(contest_id), console)
        contest_name = tasks_page.extract_contest_name()
        if contest_name is None:
            raise MissingContestNameError("Could not extract contest name")

        problems = tasks_page.extract_problems(console)
        if problem_id is not None:
            problems = [problem for problem in problems if problem.id == problem_id]
            if not problems:
                raise ProblemNotFoundError(f"Could not find problem {problem_id} in contest {contest_id}")
        elif not problems:
            raise NoProblemsError(f"Found no problems in contest {contest_id}")

        tasks_print_page = TasksPrintPage.fetch(self.client, tasks_print_url(contest_id), console)
        samples_map = tasks_print_page.extract_samples_map()
        for problem in problems:
            if problem.id not in samples_map:
                raise MissingSamplesError(f"Could not extract samples for problem {problem.id}")
            problem.samples = samples_map[problem.id]

        return Contest(contest_id, contest_name), problems

    def submit(
        self,
        contest_id: ContestId,
        problem: Problem,
        lang_names: Sequence[LangName],
        source: str,
        console: Console,
    ) -> LangName:
        submit_page = SubmitPage.fetch(self.client, submit_url(contest_id), console)

        chosen: Optional[tuple[LangName, str]] = None
        for lang_name in lang_names:
            lang_id = submit_page.extract_lang_id(lang_name)
            if lang_id is not None:
                chosen = (lang_name, lang_id)
                break
        if chosen is None:
            raise NoAvailableLanguageError(lang_names)
        lang_name, lang_id = chosen
        logger.debug(f"Submitting with language {lang_name} ({lang_id})")

        payload = {
            "csrf_token": submit_page.extract_csrf_token(),
            "data.TaskScreenName": problem.url_name,
            "data.LanguageId": lang_id,
            "sourceCode": source,
        }
        response = self.client.post(submit_url(contest_id), data=payload).retry_send(console)

        expected = submissions_me_url(contest_id)
        redirect = location_url(response, BASE_URL)
        if response.status_code != 302 or redirect != expected:
            raise InvalidRedirectError(
                f"Found invalid redirection url: {redirect} (status {response.status_code})"
            )
        return lang_name

    def problem_url(self, contest_id: ContestId, problem: Problem) -> str:
        return build_url(f"/contests/{contest_id}/tasks/{problem.url_name}")

    def open_problem_url(self, contest_id: ContestId, problem: Problem, console: Console) -> None:
        open_in_browser(self.problem_url(contest_id, problem), console)

    def open_submissions_url(self, contest_id: ContestId, console: Console) -> None:
        open_in_browser(submissions_me_url(contest_id), console)
