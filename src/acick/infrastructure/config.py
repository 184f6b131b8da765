"""Configuration models, populated from ``ACICK_*`` environment variables."""

import os
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field

from .abs_path import AbsPath
from .console import ConsoleConfig

DBX_TESTCASES_URL = "https://www.dropbox.com/sh/arnpe0ef5wds8cv/AAAk_SECQ2Nc6SVGii3rHX6Fa?dl=0"
DBX_REDIRECT_PORT = 4100
DBX_REDIRECT_PATH = "/oauth2/callback"


def data_local_dir() -> AbsPath:
    """``$XDG_DATA_HOME/acick``, falling back to ``~/.local/share/acick``."""
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg and Path(xdg).is_absolute():
        return AbsPath(xdg).join("acick")
    return AbsPath.from_shell_path("~/.local/share").join("acick")


class SessionConfig(BaseModel):
    """HTTP session settings."""

    model_config = {"arbitrary_types_allowed": True}

    timeout: timedelta = timedelta(seconds=30)
    cookies_path: AbsPath = Field(default_factory=lambda: data_local_dir().join("cookies.json"))
    retry_limit: int = Field(default=4, ge=0)
    retry_interval: timedelta = timedelta(seconds=2)


class DropboxConfig(BaseModel):
    """Dropbox app and OAuth callback settings."""

    model_config = {"arbitrary_types_allowed": True}

    app_key: Optional[str] = None
    redirect_port: int = DBX_REDIRECT_PORT
    redirect_path: str = DBX_REDIRECT_PATH
    token_path: AbsPath = Field(default_factory=lambda: data_local_dir().join("dbx_token.txt"))
    shared_link_url: str = DBX_TESTCASES_URL
    access_token: Optional[str] = None


class AcickSettings(BaseModel):
    """All settings the orchestrator needs."""

    model_config = {"arbitrary_types_allowed": True}

    base_dir: AbsPath = Field(default_factory=AbsPath.cwd)
    session: SessionConfig = Field(default_factory=SessionConfig)
    dropbox: DropboxConfig = Field(default_factory=DropboxConfig)
    console: ConsoleConfig = Field(default_factory=ConsoleConfig)

    @classmethod
    def from_env(cls) -> "AcickSettings":
        """Read a ``.env`` file, then ``ACICK_*`` variables on top of the defaults."""
        load_dotenv()

        session = SessionConfig()
        if (timeout := os.getenv("ACICK_TIMEOUT")) is not None:
            session.timeout = timedelta(seconds=float(timeout))
        if (retry_limit := os.getenv("ACICK_RETRY_LIMIT")) is not None:
            session.retry_limit = int(retry_limit)
        if (retry_interval := os.getenv("ACICK_RETRY_INTERVAL")) is not None:
            session.retry_interval = timedelta(seconds=float(retry_interval))
        if (cookies_path := os.getenv("ACICK_COOKIES_PATH")) is not None:
            session.cookies_path = AbsPath.from_shell_path(cookies_path)

        dropbox = DropboxConfig(
            app_key=os.getenv("ACICK_DBX_APP_KEY"),
            access_token=os.getenv("ACICK_DBX_ACCESS_TOKEN"),
        )
        if (token_path := os.getenv("ACICK_DBX_TOKEN_PATH")) is not None:
            dropbox.token_path = AbsPath.from_shell_path(token_path)

        console = ConsoleConfig(assume_yes=os.getenv("ACICK_ASSUME_YES", "").lower() in ("1", "true", "yes"))

        base_dir = os.getenv("ACICK_BASE_DIR")
        settings = cls(
            base_dir=AbsPath.from_shell_path(base_dir) if base_dir else AbsPath.cwd(),
            session=session,
            dropbox=dropbox,
            console=console,
        )
        logger.debug(f"Loaded settings: base_dir={settings.base_dir}, cookies={session.cookies_path}")
        return settings
