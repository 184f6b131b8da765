"""Orchestrator sequencing the user-facing commands for a command line front-end."""

import asyncio
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from loguru import logger

from acick.domain.exceptions import AcickError, CompileError, WorkspaceError
from acick.domain.judge import Judge, TotalVerdict, Verdict
from acick.domain.models import AsSamples, Contest, ContestId, LangName, Problem, ProblemId
from acick.infrastructure.abs_path import AbsPath
from acick.infrastructure.config import AcickSettings
from acick.infrastructure.console import Console
from acick.infrastructure.dropbox import DbxAuthorizer, DropboxClient
from acick.services.interfaces import Act
from acick.services.testcase_fetcher import TestcaseFetcher

from .workspace import Workspace

USERNAME_ENV = "ACICK_ATCODER_USERNAME"
PASSWORD_ENV = "ACICK_ATCODER_PASSWORD"


@dataclass
class FetchOutcome:
    contest: Contest
    problems: list[Problem]


@dataclass
class SubmitOutcome:
    contest_id: ContestId
    problem: Problem
    lang_name: LangName


class AcickOrchestrator:
    """Runs one command at a time against an actor and a workspace."""

    def __init__(self, settings: AcickSettings, actor: Act, workspace: Workspace, console: Console):
        """
        Initialize orchestrator with dependency injection.

        Args:
            settings: Loaded settings
            actor: Judge site actor (AtcoderActor)
            workspace: Files of the current contest
            console: User-facing output
        """
        self.settings = settings
        self.actor = actor
        self.workspace = workspace
        self.console = console

    def me(self) -> Optional[str]:
        user = self.actor.current_user(self.console)
        if user is None:
            self.console.writeln("Not logged in")
        else:
            self.console.writeln(f"Logged in as {user}")
        return user

    def login(self) -> bool:
        user = self.console.get_env_or_prompt(USERNAME_ENV, "username: ")
        password = self.console.get_env_or_prompt(PASSWORD_ENV, "password: ", is_password=True)
        is_new = self.actor.login(user, password, self.console)
        if is_new:
            self.console.writeln(f"Successfully logged in as {user}")
        else:
            self.console.writeln(f"Already logged in as {user}")
        return is_new

    def logout(self) -> None:
        cookies_path = self.settings.session.cookies_path
        if not cookies_path.exists():
            self.console.writeln("Already logged out")
            return
        self.console.write(f"Removing {cookies_path} ... ")
        cookies_path.remove_file()
        self.console.writeln("removed")

    def fetch(
        self,
        problem_id: Optional[ProblemId] = None,
        overwrite: bool = False,
        open_problems: bool = False,
        full: bool = False,
    ) -> FetchOutcome:
        contest_id = self.workspace.contest_id
        logger.info(f"Fetching contest {contest_id}")

        try:
            logger.info("Step 1: Fetching problems and samples")
            contest, problems = self.actor.fetch(contest_id, problem_id, self.console)

            logger.info("Step 2: Saving problem files")
            for problem in problems:
                self.workspace.save_problem(problem, overwrite, self.console)

            if open_problems:
                logger.info("Step 3: Opening problems in browser")
                for problem in problems:
                    self.actor.open_problem_url(contest_id, problem, self.console)

            if full:
                logger.info("Step 4: Downloading full testcases")
                self.fetch_full(contest_id, problems)

        except AcickError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error while fetching: {e}")
            raise AcickError(f"Failed to fetch contest {contest_id}: {e}") from e

        logger.info(f"Fetched {len(problems)} problem(s) of {contest.name}")
        return FetchOutcome(contest, problems)

    def fetch_full(self, contest_id: ContestId, problems: Sequence[Problem]) -> None:
        conf = self.settings.dropbox
        authorizer = DbxAuthorizer(
            conf.app_key or "",
            conf.redirect_port,
            conf.redirect_path,
            conf.token_path,
        )
        dbx = authorizer.load_or_request(conf.access_token, self.console)
        fetcher = TestcaseFetcher(DropboxClient(dbx), conf.shared_link_url)
        fetcher.fetch_full(contest_id, problems, self.workspace, self.console)

    def test(
        self,
        problem_id: ProblemId,
        run_argv: Sequence[str],
        compile_argv: Optional[Sequence[str]] = None,
        cwd: Optional[AbsPath] = None,
        sample_name: Optional[str] = None,
        full: bool = False,
    ) -> TotalVerdict:
        problem = self.workspace.load_problem(problem_id, self.console)
        work_dir = cwd or self.workspace.problem_dir(problem_id)

        if compile_argv:
            logger.info("Step 1: Compiling")
            self.compile(compile_argv, work_dir)

        logger.info("Step 2: Loading samples")
        if full:
            samples: AsSamples = self.workspace.load_testcases(problem_id, sample_name)
        else:
            samples = problem.take_samples(sample_name)
        if len(samples) == 0:
            raise WorkspaceError(f"Found no samples for problem {problem_id}")

        if problem.time_limit is None:
            raise WorkspaceError(f"Time limit of problem {problem_id} is unknown")

        logger.info("Step 3: Running judge")
        verdicts = asyncio.run(self._judge_all(problem, samples, run_argv, work_dir))
        total = TotalVerdict(verdicts)
        self.console.writeln()
        self.console.writeln(str(total))
        return total

    async def _judge_all(
        self, problem: Problem, samples: AsSamples, run_argv: Sequence[str], work_dir: AbsPath
    ) -> list[Verdict]:
        name_width = samples.max_name_len()
        count = len(samples)
        verdicts = []
        for i, sample in enumerate(samples, start=1):
            self.console.write(f"[{i}/{count}] {sample.name:<{name_width}} ... ")
            judge = Judge(sample, problem.time_limit, problem.compare)
            verdict = await judge.test(run_argv, cwd=work_dir.path)
            self.console.writeln(str(verdict))
            details = verdict.describe()
            if details:
                self.console.writeln(details)
            verdicts.append(verdict)
        return verdicts

    def compile(self, compile_argv: Sequence[str], cwd: AbsPath) -> None:
        self.console.writeln(f"Compiling with {' '.join(compile_argv)}")
        try:
            result = subprocess.run(list(compile_argv), cwd=cwd.path)
        except OSError as e:
            raise CompileError(f"Could not run compile command: {e}") from e
        if result.returncode != 0:
            raise CompileError(f"Compile command exited with status {result.returncode}")

    def submit(
        self,
        problem_id: ProblemId,
        lang_names: Sequence[LangName],
        open_submissions: bool = False,
    ) -> SubmitOutcome:
        contest_id = self.workspace.contest_id

        logger.info("Step 1: Loading problem and source")
        problem = self.workspace.load_problem(problem_id, self.console)
        source = self.workspace.load_source(problem_id, self.console)

        logger.info("Step 2: Submitting")
        lang_name = self.actor.submit(contest_id, problem, lang_names, source, self.console)
        self.console.writeln(f"Submitted {problem.id} with {lang_name}")

        if open_submissions:
            self.actor.open_submissions_url(contest_id, self.console)

        return SubmitOutcome(contest_id, problem, lang_name)
