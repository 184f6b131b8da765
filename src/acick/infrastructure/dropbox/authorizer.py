"""Dropbox authorization with PKCE and a local redirect."""

import asyncio
import base64
import hashlib
import secrets
import string
from typing import Optional
from urllib.parse import urlencode

import dropbox
import requests
from dropbox.exceptions import AuthError as DbxAuthError
from dropbox.exceptions import DropboxException
from loguru import logger

from acick.domain.exceptions import OAuthError, WorkspaceError
from acick.infrastructure.abs_path import AbsPath
from acick.infrastructure.browser import open_in_browser
from acick.infrastructure.console import Console

from .callback_server import CallbackServer

AUTHORIZE_URL = "https://www.dropbox.com/oauth2/authorize"
TOKEN_URL = "https://api.dropboxapi.com/oauth2/token"
STATE_LEN = 16
TOKEN_FILE_MODE = 0o600
TOKEN_FORMAT_VERSION = "1"


def gen_random_state(length: int = STATE_LEN) -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def gen_code_verifier() -> str:
    return secrets.token_urlsafe(64)[:128]


def code_challenge(verifier: str) -> str:
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def serialize_token(refresh_token: str) -> str:
    return f"{TOKEN_FORMAT_VERSION}&{refresh_token}"


def deserialize_token(line: str) -> str:
    version, sep, token = line.strip().partition("&")
    if not sep or version != TOKEN_FORMAT_VERSION or not token:
        raise OAuthError("Unsupported Dropbox token file format")
    return token


class DbxAuthorizer:
    """Produces an authorized :class:`dropbox.Dropbox` client."""

    def __init__(self, app_key: str, redirect_port: int, redirect_path: str, token_path: AbsPath):
        """
        Initialize authorizer.

        Args:
            app_key: Dropbox app key (client id)
            redirect_port: Port of the local callback server
            redirect_path: Path the provider redirects to
            token_path: File holding the refresh token between runs
        """
        self.app_key = app_key
        self.redirect_port = redirect_port
        self.redirect_path = redirect_path
        self.redirect_uri = f"http://localhost:{redirect_port}{redirect_path}"
        self.token_path = token_path

    def load_or_request(self, access_token: Optional[str], console: Console) -> dropbox.Dropbox:
        """
        A caller-supplied access token wins, then the stored token file,
        then a fresh browser authorization.
        """
        if access_token:
            logger.debug("Using caller-supplied Dropbox access token")
            return dropbox.Dropbox(oauth2_access_token=access_token)

        refresh_token = self.load_token(console)
        is_updated = False
        if refresh_token is None:
            refresh_token = self.request_token(console)
            is_updated = True

        try:
            dbx = self._refreshed(refresh_token)
        except DbxAuthError as e:
            if is_updated:
                raise OAuthError("Could not refresh Dropbox access token") from e
            logger.warning("Stored Dropbox token was rejected; authorizing again")
            refresh_token = self.request_token(console)
            is_updated = True
            try:
                dbx = self._refreshed(refresh_token)
            except DbxAuthError as e:
                raise OAuthError("Could not refresh Dropbox access token") from e

        if is_updated:
            self.save_token(refresh_token, console)
        return dbx

    def _refreshed(self, refresh_token: str) -> dropbox.Dropbox:
        dbx = dropbox.Dropbox(oauth2_refresh_token=refresh_token, app_key=self.app_key)
        try:
            dbx.check_and_refresh_access_token()
        except DbxAuthError:
            raise
        except (DropboxException, requests.RequestException) as e:
            raise OAuthError("Could not refresh Dropbox access token") from e
        return dbx

    def load_token(self, console: Console) -> Optional[str]:
        if not self.token_path.exists():
            return None
        try:
            line = self.token_path.load_pretty(None, console)
        except WorkspaceError as e:
            raise OAuthError("Could not load token from file") from e
        return deserialize_token(line)

    def save_token(self, refresh_token: str, console: Console) -> None:
        try:
            self.token_path.save_pretty(
                lambda f: f.write(serialize_token(refresh_token)),
                True,
                None,
                console,
                mode=TOKEN_FILE_MODE,
            )
        except WorkspaceError as e:
            raise OAuthError("Could not save token to file") from e

    def authorize_url(self, state: str, challenge: str) -> str:
        params = {
            "client_id": self.app_key,
            "response_type": "code",
            "redirect_uri": self.redirect_uri,
            "state": state,
            "code_challenge": challenge,
            "code_challenge_method": "S256",
            "token_access_type": "offline",
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    def request_token(self, console: Console) -> str:
        """Run the browser flow and return the refresh token."""
        state = gen_random_state()
        verifier = gen_code_verifier()

        server = CallbackServer(self.redirect_port, self.redirect_path, state)
        open_in_browser(self.authorize_url(state, code_challenge(verifier)), console)
        console.writeln("Authorize Dropbox in web browser.")

        try:
            code = asyncio.run(server.wait_for_code())
        except OSError as e:
            raise OAuthError(f"Could not start callback server on port {self.redirect_port}") from e

        return self.exchange_code(code, verifier)

    def exchange_code(self, code: str, verifier: str) -> str:
        logger.debug("Exchanging authorization code for a token")
        try:
            response = requests.post(
                TOKEN_URL,
                data={
                    "code": code,
                    "grant_type": "authorization_code",
                    "client_id": self.app_key,
                    "code_verifier": verifier,
                    "redirect_uri": self.redirect_uri,
                },
                timeout=30,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            raise OAuthError("Could not get access token from Dropbox") from e

        refresh_token = payload.get("refresh_token")
        if not refresh_token:
            raise OAuthError("Dropbox did not return a refresh token")
        return refresh_token
