"""Absolute filesystem paths and the save/load/move helpers built on them."""

from __future__ import annotations

import os
import secrets
import shutil
from enum import Enum
from pathlib import Path
from typing import IO, Callable, Optional, Union

from loguru import logger

from acick.domain.exceptions import WorkspaceError

from .console import Console

PathLike = Union[str, os.PathLike]


class SaveResult(str, Enum):
    SKIPPED = "skipped"
    CREATED = "created"
    OVERWRITTEN = "overwritten"


class AbsPath:
    """
    A path that is guaranteed to be absolute.

    It is not canonicalized: ``..`` components and symlinks are kept as given.
    """

    __slots__ = ("_path",)

    def __init__(self, path: PathLike):
        p = Path(path)
        if not p.is_absolute():
            raise ValueError(f"Path is not absolute: {path}")
        self._path = p

    @classmethod
    def from_shell_path(cls, path: PathLike) -> AbsPath:
        """Expand ``~`` and ``$VAR`` before checking absoluteness."""
        return cls(os.path.expandvars(os.path.expanduser(os.fspath(path))))

    @classmethod
    def cwd(cls) -> AbsPath:
        return cls(Path.cwd())

    @property
    def path(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        return self._path.name

    def __fspath__(self) -> str:
        return os.fspath(self._path)

    def __str__(self) -> str:
        return str(self._path)

    def __repr__(self) -> str:
        return f"AbsPath({str(self._path)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbsPath):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def join(self, rel: PathLike) -> AbsPath:
        return AbsPath(self._path / rel)

    def join_expand(self, rel: PathLike) -> AbsPath:
        """Join a component after shell expansion; an absolute result replaces ``self``."""
        return AbsPath(self._path / os.path.expandvars(os.path.expanduser(os.fspath(rel))))

    def parent(self) -> Optional[AbsPath]:
        parent = self._path.parent
        if parent == self._path:
            return None
        return AbsPath(parent)

    def strip_prefix(self, base: AbsPath) -> Path:
        """Path relative to ``base`` for display; unchanged when not below it."""
        try:
            return self._path.relative_to(base._path)
        except ValueError:
            return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def is_dir(self) -> bool:
        return self._path.is_dir()

    def is_file(self) -> bool:
        return self._path.is_file()

    def search_dir_contains(self, file_name: str) -> Optional[AbsPath]:
        """Closest ancestor (``self`` included) that contains ``file_name``."""
        current: Optional[AbsPath] = self
        while current is not None:
            if current.join(file_name).exists():
                return current
            current = current.parent()
        return None

    def create_dir_all(self) -> None:
        try:
            self._path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorkspaceError(f"Could not create directory: {self}") from e

    def create_dir_all_and_open(self, mode: int = 0o666) -> int:
        """Open for read and write, creating the file and its parents if missing.

        Returns a raw file descriptor.
        """
        parent = self.parent()
        if parent is not None:
            parent.create_dir_all()
        try:
            return os.open(self._path, os.O_RDWR | os.O_CREAT, mode)
        except OSError as e:
            raise WorkspaceError(f"Could not open file: {self}") from e

    def save(
        self,
        writer: Callable[[IO[str]], None],
        overwrite: bool,
        mode: Optional[int] = None,
    ) -> SaveResult:
        """
        Write a file through ``writer``.

        The content goes to a temporary file next to the target which then
        replaces it, so a failed writer never leaves a half-written file.
        An existing file is left untouched unless ``overwrite`` is set.
        """
        existed = self._path.exists()
        if existed and not overwrite:
            return SaveResult.SKIPPED

        parent = self.parent()
        if parent is not None:
            parent.create_dir_all()

        fd, tmp_name = self._create_temp()
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                writer(f)
            if mode is not None:
                os.chmod(tmp_name, mode)
            elif existed:
                os.chmod(tmp_name, self._path.stat().st_mode & 0o777)
            os.replace(tmp_name, self._path)
        except Exception as e:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise WorkspaceError(f"Could not save file: {self}") from e

        return SaveResult.OVERWRITTEN if existed else SaveResult.CREATED

    def save_pretty(
        self,
        writer: Callable[[IO[str]], None],
        overwrite: bool,
        base_dir: Optional[AbsPath],
        console: Console,
        mode: Optional[int] = None,
    ) -> SaveResult:
        """:meth:`save` with a one-line status message on the console."""
        console.write(f"Saving {self._display(base_dir)} ... ")
        try:
            result = self.save(writer, overwrite, mode=mode)
        except WorkspaceError:
            console.writeln("failed")
            raise
        console.writeln(
            {
                SaveResult.SKIPPED: "already exists",
                SaveResult.CREATED: "saved",
                SaveResult.OVERWRITTEN: "overwritten",
            }[result]
        )
        return result

    def load(self) -> str:
        try:
            return self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise WorkspaceError(f"Could not load file: {self}") from e

    def load_pretty(self, base_dir: Optional[AbsPath], console: Console) -> str:
        console.write(f"Loading {self._display(base_dir)} ... ")
        try:
            content = self.load()
        except WorkspaceError:
            console.writeln("failed")
            raise
        console.writeln("loaded")
        return content

    def remove_file(self) -> None:
        try:
            self._path.unlink()
        except OSError as e:
            raise WorkspaceError(f"Could not remove file: {self}") from e

    def remove_dir_all(self) -> None:
        try:
            shutil.rmtree(self._path)
        except OSError as e:
            raise WorkspaceError(f"Could not remove directory: {self}") from e

    def remove_dir_all_pretty(self, base_dir: Optional[AbsPath], console: Console) -> None:
        console.write(f"Removing {self._display(base_dir)} ... ")
        try:
            self.remove_dir_all()
        except WorkspaceError:
            console.writeln("failed")
            raise
        console.writeln("removed")

    def move_from(self, src: AbsPath) -> None:
        """Rename ``src`` to ``self``."""
        logger.debug(f"Moving {src} to {self}")
        try:
            shutil.move(os.fspath(src), os.fspath(self))
        except OSError as e:
            raise WorkspaceError(f"Could not move {src} to {self}") from e

    def move_from_pretty(self, src: AbsPath, base_dir: Optional[AbsPath], console: Console) -> None:
        console.write(f"Moving {src._display(base_dir)} to {self._display(base_dir)} ... ")
        try:
            self.move_from(src)
        except WorkspaceError:
            console.writeln("failed")
            raise
        console.writeln("moved")

    def _create_temp(self) -> tuple[int, str]:
        # created 0o666 so the umask decides the mode of a new file
        while True:
            tmp_name = os.fspath(self._path.parent / f".{self.name}.{secrets.token_hex(8)}.tmp")
            try:
                return os.open(tmp_name, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666), tmp_name
            except FileExistsError:
                continue
            except OSError as e:
                raise WorkspaceError(f"Could not save file: {self}") from e

    def _display(self, base_dir: Optional[AbsPath]) -> str:
        if base_dir is None:
            return str(self)
        return str(self.strip_prefix(base_dir))
