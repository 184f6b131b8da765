"""Shared fixtures: fake HTTP transport, session config and consoles."""

from datetime import timedelta

import pytest
import requests

from acick.infrastructure.abs_path import AbsPath
from acick.infrastructure.config import SessionConfig
from acick.infrastructure.console import Console, ConsoleConfig
from acick.infrastructure.http_client import HttpClient
from helpers import FakeAdapter


@pytest.fixture
def adapter():
    return FakeAdapter()


@pytest.fixture
def session_config(tmp_path):
    return SessionConfig(
        timeout=timedelta(seconds=5),
        cookies_path=AbsPath(tmp_path / "cookies.json"),
        retry_limit=2,
        retry_interval=timedelta(0),
    )


@pytest.fixture
def http_client(session_config, adapter):
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return HttpClient(session_config, session=session)


@pytest.fixture
def console():
    return Console.buf()


@pytest.fixture
def yes_console():
    return Console.buf(ConsoleConfig(assume_yes=True))
