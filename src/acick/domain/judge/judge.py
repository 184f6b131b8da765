"""Run a solution binary against one sample under a wall-clock limit."""

import asyncio
import os
import signal
import time
from datetime import timedelta
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from acick.domain.models import Compare, Sample

from .diff import TextDiff
from .verdict import Verdict


class Judge:
    """Judges a single sample."""

    def __init__(self, sample: Sample, time_limit: timedelta, compare: Compare = Compare.DEFAULT):
        """
        Initialize judge.

        Args:
            sample: Sample whose input is fed to the program
            time_limit: Wall-clock budget for one run
            compare: Comparator applied line by line
        """
        self.sample = sample
        self.time_limit = time_limit
        self.compare = compare

    async def test(self, argv: Sequence[str], cwd: Optional[Path] = None) -> Verdict:
        """
        Run ``argv`` with the sample input on stdin and classify the outcome.

        TLE and RE are returned as verdicts, never raised.
        """
        name = self.sample.name
        logger.debug(f"Judging sample {name} with {list(argv)}")

        started = time.monotonic()
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                cwd=cwd,
                start_new_session=True,
            )
        except OSError as e:
            return Verdict.re(name, self._since(started), str(e))

        try:
            stdout, _ = await asyncio.wait_for(
                proc.communicate(self.sample.input.encode()),
                timeout=self.time_limit.total_seconds(),
            )
        except asyncio.TimeoutError:
            await self._kill(proc)
            return Verdict.tle(name, self._since(started))
        except asyncio.CancelledError:
            await self._kill(proc)
            raise
        except OSError as e:
            await self._kill(proc)
            return Verdict.re(name, self._since(started), str(e))

        elapsed = self._since(started)

        if proc.returncode != 0:
            return Verdict.re(name, elapsed, _describe_status(proc.returncode))

        actual = stdout.decode(errors="replace")
        diff = TextDiff("expected", "actual", self.sample.output, actual, self.compare)
        if diff.any_mismatch:
            return Verdict.wa(name, elapsed, diff)
        return Verdict.ac(name, elapsed, diff)

    @staticmethod
    def _since(started: float) -> timedelta:
        return timedelta(seconds=time.monotonic() - started)

    @staticmethod
    async def _kill(proc: asyncio.subprocess.Process) -> None:
        # the program runs in its own session; children holding stdout die with it
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        await proc.wait()


def _describe_status(returncode: int) -> str:
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit status: {returncode}"
