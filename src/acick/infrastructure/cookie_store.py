"""Cookie jar persisted as a JSON array between invocations."""

import json
import os
from contextlib import contextmanager
from typing import Any, Iterator

from loguru import logger
from requests.cookies import RequestsCookieJar, create_cookie

from acick.domain.exceptions import CookieLoadError, CookieOpenError, CookieStoreError, WorkspaceError

from .abs_path import AbsPath

_COOKIE_FILE_MODE = 0o600


class CookieStore:
    """
    A cookie jar bound to an open store file.

    Use :meth:`open` so that the file stays open for one whole request
    (load, send, save) and is closed afterwards.
    """

    def __init__(self, file, jar: RequestsCookieJar):
        self._file = file
        self.jar = jar

    @classmethod
    @contextmanager
    def open(cls, path: AbsPath) -> Iterator["CookieStore"]:
        """Open the store, creating an empty one if missing."""
        try:
            fd = path.create_dir_all_and_open(_COOKIE_FILE_MODE)
        except WorkspaceError as e:
            raise CookieOpenError(f"Could not open cookie store: {path}") from e

        with os.fdopen(fd, "r+", encoding="utf-8") as f:
            jar = cls._load(f, path)
            yield cls(f, jar)

    @staticmethod
    def _load(f, path: AbsPath) -> RequestsCookieJar:
        jar = RequestsCookieJar()
        try:
            content = f.read()
        except OSError as e:
            raise CookieLoadError(f"Could not read cookie store: {path}") from e
        if not content.strip():
            return jar

        try:
            records = json.loads(content)
            for record in records:
                jar.set_cookie(_cookie_from_record(record))
        except (ValueError, TypeError, KeyError) as e:
            raise CookieLoadError(f"Could not load cookies from {path}") from e

        logger.debug(f"Loaded {len(jar)} cookie(s) from {path}")
        return jar

    def save(self) -> None:
        """Overwrite the store file with the current jar."""
        records = [_cookie_to_record(cookie) for cookie in self.jar]
        try:
            self._file.seek(0)
            self._file.truncate()
            json.dump(records, self._file, indent=2)
            self._file.flush()
        except (OSError, TypeError, ValueError) as e:
            raise CookieStoreError("Could not save cookies") from e


def _cookie_to_record(cookie) -> dict[str, Any]:
    return {
        "name": cookie.name,
        "value": cookie.value,
        "domain": cookie.domain,
        "path": cookie.path,
        "secure": cookie.secure,
        "expires": cookie.expires,
        "http_only": cookie.has_nonstandard_attr("HttpOnly"),
    }


def _cookie_from_record(record: dict[str, Any]):
    rest = {"HttpOnly": None} if record.get("http_only") else {}
    return create_cookie(
        name=record["name"],
        value=record["value"],
        domain=record.get("domain", ""),
        path=record.get("path", "/"),
        secure=record.get("secure", False),
        expires=record.get("expires"),
        rest=rest,
    )
