"""Shared behaviour of AtCoder pages."""

from typing import Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup
from loguru import logger

from acick.domain.exceptions import (
    ContestNotFoundError,
    InvalidResponseError,
    NotLoggedInError,
    NotParticipatingError,
)
from acick.domain.models import ContestId
from acick.domain.parsers import extract_csrf_token, find_first, inner_text, parse_html
from acick.infrastructure.console import Console
from acick.infrastructure.http_client import HttpClient

BASE_URL = "https://atcoder.jp"


def build_url(path: str) -> str:
    return urljoin(BASE_URL, path)


def contest_path(contest_id: ContestId, suffix: str = "") -> str:
    return f"/contests/{contest_id}{suffix}"


class Page:
    """A fetched page: its URL, status and parsed document."""

    def __init__(self, url: str, response: requests.Response):
        self.url = url
        self.status = response.status_code
        self.soup: BeautifulSoup = parse_html(response.text)

    @classmethod
    def fetch(cls, client: HttpClient, url: str, console: Console) -> "Page":
        response = client.get(url).retry_send(console)
        cls.accept(url, response)
        return cls(url, response)

    @classmethod
    def accept(cls, url: str, response: requests.Response) -> None:
        """Raise unless the response is the one this page expects."""
        if response.status_code != 200:
            raise InvalidResponseError(response.status_code, url)


class RestrictedPage(Page):
    """Page that requires a login and, for running contests, participation."""

    @classmethod
    def accept(cls, url: str, response: requests.Response) -> None:
        status = response.status_code
        if status == 200:
            return
        if status == 302:
            raise NotLoggedInError("User not logged in")
        if status == 404:
            alert = find_first(parse_html(response.text), ".alert-danger")
            text = inner_text(alert) if alert is not None else ""
            if "Contest not found." in text:
                raise ContestNotFoundError(f"Could not find contest: {url}")
            if "Permission denied." in text:
                raise NotParticipatingError(f"Contest not participated or not started: {url}")
        logger.debug(f"Rejected response {status} from {url}")
        raise InvalidResponseError(status, url)


class HasHeader:
    """Pages that render the site navigation bar."""

    soup: BeautifulSoup

    def _header(self):
        return find_first(self.soup, "nav")

    def is_logged_in(self) -> bool:
        header = self._header()
        return header is not None and find_first(header, "a.dropdown-toggle .glyphicon-cog") is not None

    def current_user(self) -> Optional[str]:
        if not self.is_logged_in():
            return None
        toggles = self._header().select("a.dropdown-toggle")
        if len(toggles) < 2:
            return None
        user = inner_text(toggles[1]).strip()
        return user or None

    def extract_contest_name(self) -> Optional[str]:
        found = find_first(self.soup, ".contest-title")
        if found is None:
            return None
        return inner_text(found).strip()


class ExtractCsrfToken:
    """Pages carrying a form protected by a csrf token."""

    soup: BeautifulSoup

    def extract_csrf_token(self) -> str:
        return extract_csrf_token(self.soup)
