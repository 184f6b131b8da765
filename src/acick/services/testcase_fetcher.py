"""Download the official full testcases of a contest from Dropbox."""

import tempfile
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING, Sequence

from dropbox.files import FileMetadata
from loguru import logger

from acick.domain.exceptions import TestcaseFolderNotFoundError
from acick.domain.models import ContestId, Problem
from acick.infrastructure.abs_path import AbsPath
from acick.infrastructure.console import Console, ProgressKind
from acick.infrastructure.dropbox import DropboxClient
from acick.infrastructure.testcases import InOut, testcase_file_name, testcase_name

if TYPE_CHECKING:
    from acick.application.workspace import Workspace

MAX_WORKERS = 8
TESTCASES_DIR_NAME = "testcases"


class TestcaseFetcher:
    """Lists and downloads testcase files of a shared Dropbox folder."""

    __test__ = False

    def __init__(self, dropbox: DropboxClient, shared_link_url: str, max_workers: int = MAX_WORKERS):
        self.dropbox = dropbox
        self.shared_link_url = shared_link_url
        self.max_workers = max_workers

    def fetch_full(
        self,
        contest_id: ContestId,
        problems: Sequence[Problem],
        workspace: "Workspace",
        console: Console,
    ) -> None:
        console.writeln("Downloading testcase files from Dropbox ...")

        folder_name = self.find_contest_folder(contest_id)
        for problem in problems:
            with tempfile.TemporaryDirectory(prefix="acick-") as tmp:
                tmp_dir = AbsPath(tmp).join(TESTCASES_DIR_NAME)
                self.fetch_problem_full(folder_name, problem, tmp_dir, console)
                workspace.move_testcases_dir(problem, tmp_dir, console)

    def find_contest_folder(self, contest_id: ContestId) -> str:
        logger.info("Step 1: Finding contest folder on Dropbox")
        folders = self.dropbox.list_all_folders("", self.shared_link_url)
        for folder in folders:
            if ContestId(folder.name) == contest_id:
                return folder.name
        raise TestcaseFolderNotFoundError(f"Could not find folder for the contest on Dropbox: {contest_id}")

    def list_testcase_files(self, folder_name: str, problem: Problem) -> list[tuple[InOut, FileMetadata]]:
        logger.info(f"Step 2: Listing testcase files of problem {problem.id}")

        def list_one(inout: InOut) -> list[FileMetadata]:
            path = f"/{folder_name}/{problem.id}/{inout.value}"
            return self.dropbox.list_all_files(path, self.shared_link_url)

        with ThreadPoolExecutor(max_workers=len(InOut)) as executor:
            listed = list(executor.map(list_one, list(InOut)))

        return [(inout, file) for inout, files in zip(InOut, listed) for file in files]

    def fetch_problem_full(
        self, folder_name: str, problem: Problem, testcases_dir: AbsPath, console: Console
    ) -> None:
        files = self.list_testcase_files(folder_name, problem)
        total_size = sum(file.size for _, file in files)
        logger.info(f"Step 3: Downloading {len(files)} file(s), {total_size} bytes")

        for inout in InOut:
            testcases_dir.join(inout.value).create_dir_all()

        with console.build_progress_bar(total_size, ProgressKind.BYTES, str(problem.id)) as pb:

            def download(inout: InOut, file: FileMetadata) -> None:
                name = testcase_name(file.name)
                if name is None:
                    raise ValueError(f"Failed to get testcase name from Dropbox file name: {file.name}")
                dbx_path = f"/{folder_name}/{problem.id}/{inout.value}/{file.name}"
                dest = testcases_dir.join(inout.value).join(testcase_file_name(name))
                with open(dest, "wb") as out:
                    self.dropbox.download_to(self.shared_link_url, dbx_path, out)
                pb.update(file.size)

            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures: list[Future] = [executor.submit(download, inout, file) for inout, file in files]
                done, pending = wait(futures, return_when=FIRST_EXCEPTION)
                for future in pending:
                    future.cancel()
                for future in futures:
                    if future.done() and not future.cancelled() and future.exception() is not None:
                        raise future.exception()
