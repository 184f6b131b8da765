"""Login and settings pages."""

import requests

from acick.domain.exceptions import InvalidCredentialsError, InvalidResponseError

from .base import ExtractCsrfToken, HasHeader, Page, build_url

LOGIN_URL = build_url("/login")
SETTINGS_URL = build_url("/settings")


class LoginPage(Page, HasHeader, ExtractCsrfToken):
    """``/login``: accepted only with 200."""


class SettingsPage(Page, HasHeader):
    """``/settings``: a redirect here means the login did not stick."""

    @classmethod
    def accept(cls, url: str, response: requests.Response) -> None:
        if response.status_code == 200:
            return
        if response.status_code == 302:
            raise InvalidCredentialsError("Invalid username or password")
        raise InvalidResponseError(response.status_code, url)
