"""Unit tests for Dropbox authorization."""

import os
import stat
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlparse

import pytest
import requests
from dropbox.exceptions import AuthError

from acick.domain.exceptions import OAuthError
from acick.infrastructure.abs_path import AbsPath
from acick.infrastructure.dropbox.authorizer import (
    DbxAuthorizer,
    code_challenge,
    deserialize_token,
    gen_random_state,
    serialize_token,
)


@pytest.fixture
def token_path(tmp_path):
    return AbsPath(tmp_path / "dbx_token.txt")


@pytest.fixture
def authorizer(token_path):
    return DbxAuthorizer("app-key", 4100, "/oauth2/callback", token_path)


class TestTokenFormat:
    def test_serialize(self):
        assert serialize_token("refresh") == "1&refresh"
        assert deserialize_token("1&refresh\n") == "refresh"

    @pytest.mark.parametrize("line", ["refresh", "2&refresh", "1&"])
    def test_rejects_unknown_format(self, line):
        with pytest.raises(OAuthError):
            deserialize_token(line)

    def test_state_is_alphanumeric(self):
        state = gen_random_state()

        assert len(state) == 16
        assert state.isalnum()

    def test_code_challenge(self):
        # RFC 7636 appendix B
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
        assert code_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"


class TestLoadOrRequest:
    def test_access_token_wins(self, authorizer, console):
        with patch("acick.infrastructure.dropbox.authorizer.dropbox") as sdk:
            dbx = authorizer.load_or_request("access", console)

        sdk.Dropbox.assert_called_once_with(oauth2_access_token="access")
        assert dbx is sdk.Dropbox.return_value

    def test_stored_token_is_not_saved_again(self, authorizer, token_path, console):
        token_path.save(lambda f: f.write("1&stored"), overwrite=True)

        with patch("acick.infrastructure.dropbox.authorizer.dropbox") as sdk, patch.object(
            DbxAuthorizer, "save_token"
        ) as save_token:
            authorizer.load_or_request(None, console)

        sdk.Dropbox.assert_called_once_with(oauth2_refresh_token="stored", app_key="app-key")
        sdk.Dropbox.return_value.check_and_refresh_access_token.assert_called_once()
        save_token.assert_not_called()

    def test_fresh_token_is_saved_privately(self, authorizer, token_path, console):
        with patch("acick.infrastructure.dropbox.authorizer.dropbox"), patch.object(
            DbxAuthorizer, "request_token", return_value="fresh"
        ):
            authorizer.load_or_request(None, console)

        assert token_path.load() == "1&fresh"
        assert stat.S_IMODE(os.stat(token_path).st_mode) == 0o600

    def test_refresh_failure(self, authorizer, token_path, console):
        token_path.save(lambda f: f.write("1&stored"), overwrite=True)

        with patch("acick.infrastructure.dropbox.authorizer.dropbox") as sdk:
            sdk.Dropbox.return_value.check_and_refresh_access_token.side_effect = requests.ConnectionError("down")
            with pytest.raises(OAuthError):
                authorizer.load_or_request(None, console)

    def test_revoked_stored_token_authorizes_again(self, authorizer, token_path, console):
        token_path.save(lambda f: f.write("1&revoked"), overwrite=True)

        with patch("acick.infrastructure.dropbox.authorizer.dropbox") as sdk, patch.object(
            DbxAuthorizer, "request_token", return_value="fresh"
        ) as request_token:
            sdk.Dropbox.return_value.check_and_refresh_access_token.side_effect = [AuthError("req", None), None]
            authorizer.load_or_request(None, console)

        request_token.assert_called_once()
        assert sdk.Dropbox.call_args.kwargs["oauth2_refresh_token"] == "fresh"
        assert token_path.load() == "1&fresh"

    def test_rejected_fresh_token_is_fatal(self, authorizer, console):
        with patch("acick.infrastructure.dropbox.authorizer.dropbox") as sdk, patch.object(
            DbxAuthorizer, "request_token", return_value="fresh"
        ) as request_token:
            sdk.Dropbox.return_value.check_and_refresh_access_token.side_effect = AuthError("req", None)
            with pytest.raises(OAuthError):
                authorizer.load_or_request(None, console)

        request_token.assert_called_once()


class TestBrowserFlow:
    def test_authorize_url(self, authorizer):
        url = urlparse(authorizer.authorize_url("state123", "challenge"))
        params = {k: v[0] for k, v in parse_qs(url.query).items()}

        assert f"{url.scheme}://{url.netloc}{url.path}" == "https://www.dropbox.com/oauth2/authorize"
        assert params == {
            "client_id": "app-key",
            "response_type": "code",
            "redirect_uri": "http://localhost:4100/oauth2/callback",
            "state": "state123",
            "code_challenge": "challenge",
            "code_challenge_method": "S256",
            "token_access_type": "offline",
        }

    def test_exchange_code(self, authorizer):
        response = MagicMock()
        response.json.return_value = {"access_token": "a", "refresh_token": "r"}

        with patch("acick.infrastructure.dropbox.authorizer.requests.post", return_value=response) as post:
            assert authorizer.exchange_code("code", "verifier") == "r"

        data = post.call_args.kwargs["data"]
        assert data["code"] == "code"
        assert data["code_verifier"] == "verifier"
        assert data["grant_type"] == "authorization_code"

    def test_exchange_without_refresh_token(self, authorizer):
        response = MagicMock()
        response.json.return_value = {"access_token": "a"}

        with patch("acick.infrastructure.dropbox.authorizer.requests.post", return_value=response):
            with pytest.raises(OAuthError):
                authorizer.exchange_code("code", "verifier")

    def test_request_token_runs_callback_server(self, authorizer, console):
        async def fake_wait(self):
            return "the-code"

        with patch(
            "acick.infrastructure.dropbox.authorizer.CallbackServer.wait_for_code", fake_wait
        ), patch("acick.infrastructure.dropbox.authorizer.open_in_browser") as browser, patch.object(
            DbxAuthorizer, "exchange_code", return_value="refresh"
        ) as exchange:
            assert authorizer.request_token(console) == "refresh"

        browser.assert_called_once()
        assert exchange.call_args.args[0] == "the-code"
