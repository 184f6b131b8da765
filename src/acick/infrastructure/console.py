"""Single surface for user-facing output, prompts and progress bars."""

import getpass
import io
import os
import sys
from enum import Enum
from typing import Optional, TextIO

from loguru import logger
from pydantic import BaseModel
from tqdm import tqdm


class ConsoleConfig(BaseModel):
    """Console behaviour."""

    assume_yes: bool = False


class ProgressKind(str, Enum):
    BYTES = "bytes"
    COUNT = "count"


class _Mode(str, Enum):
    TERM = "term"
    BUF = "buf"
    SINK = "sink"


_ANSWERS = {
    "y": True,
    "yes": True,
    "n": False,
    "no": False,
}


class Console:
    """
    Routes interactive I/O to a terminal, an in-memory buffer or nowhere.

    The buffered mode reads answers from a queue filled with
    :meth:`write_input` and records everything written, which is what the
    tests use.
    """

    def __init__(self, mode: _Mode, conf: Optional[ConsoleConfig] = None, out: Optional[TextIO] = None):
        self.mode = mode
        self.conf = conf or ConsoleConfig()
        self._out = out
        self._inputs: list[str] = []

    @classmethod
    def term(cls, conf: Optional[ConsoleConfig] = None) -> "Console":
        return cls(_Mode.TERM, conf, sys.stderr)

    @classmethod
    def buf(cls, conf: Optional[ConsoleConfig] = None) -> "Console":
        return cls(_Mode.BUF, conf, io.StringIO())

    @classmethod
    def sink(cls, conf: Optional[ConsoleConfig] = None) -> "Console":
        return cls(_Mode.SINK, conf)

    @property
    def is_term(self) -> bool:
        return self.mode is _Mode.TERM

    def write(self, text: str) -> None:
        if self._out is None:
            return
        self._out.write(text)
        self._out.flush()

    def writeln(self, text: str = "") -> None:
        self.write(text + "\n")

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.writeln(f"WARN: {message}")

    def take_output(self) -> str:
        """Everything written so far in buffered mode; clears the buffer."""
        if not isinstance(self._out, io.StringIO):
            raise RuntimeError("Output can only be taken from a buffered console")
        output = self._out.getvalue()
        self._out.seek(0)
        self._out.truncate()
        return output

    def write_input(self, line: str) -> None:
        """Queue an answer for the next prompt in buffered mode."""
        self._inputs.append(line)

    def _read_line(self, is_password: bool = False) -> str:
        if self.mode is _Mode.TERM:
            if is_password:
                return getpass.getpass(prompt="", stream=self._out)
            return sys.stdin.readline().rstrip("\n")
        if self._inputs:
            line = self._inputs.pop(0)
            self.writeln(line if not is_password else "")
            return line
        raise EOFError("No more input available")

    def confirm(self, message: str, default: bool) -> bool:
        """Ask a yes/no question; ``assume_yes`` answers it without prompting."""
        if self.conf.assume_yes:
            return True

        hint = "(Y/n)" if default else "(y/N)"
        while True:
            self.write(f"{message} {hint}: ")
            answer = self._read_line().strip().lower()
            if not answer:
                return default
            if answer in _ANSWERS:
                return _ANSWERS[answer]

    def prompt(self, prompt: str, is_password: bool = False) -> str:
        self.write(prompt)
        return self._read_line(is_password=is_password)

    def get_env_or_prompt(self, env_name: str, prompt: str, is_password: bool = False) -> str:
        value = os.getenv(env_name)
        if value is not None:
            self.writeln(f"{prompt}{'*' * len(value) if is_password else value} (read from env {env_name})")
            return value
        return self.prompt(prompt, is_password=is_password)

    def build_progress_bar(self, total: int, kind: ProgressKind = ProgressKind.COUNT, prefix: str = "") -> tqdm:
        """Progress bar that only renders when attached to a terminal."""
        if kind is ProgressKind.BYTES:
            return tqdm(
                total=total,
                desc=prefix or None,
                unit="B",
                unit_scale=True,
                unit_divisor=1024,
                disable=not self.is_term,
                file=self._out,
            )
        return tqdm(total=total, desc=prefix or None, disable=not self.is_term, file=self._out)
