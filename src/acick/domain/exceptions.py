"""Exceptions raised by acick.

Every layer wraps the error it received with ``raise ... from err`` so that the
whole chain can be rendered with :func:`format_error_chain`.
"""

from collections.abc import Sequence


class AcickError(Exception):
    """Base exception for all acick errors."""

    pass


# HTTP session


class HttpSessionError(AcickError):
    """Error preparing or persisting an HTTP session."""

    pass


class CookieOpenError(HttpSessionError):
    """Could not open the cookie store file."""

    pass


class CookieLoadError(HttpSessionError):
    """Could not parse the cookie store file."""

    pass


class CookieStoreError(HttpSessionError):
    """Could not write the cookie store file."""

    pass


class BuildRequestError(HttpSessionError):
    """Request could not be built (or cloned for a retry)."""

    pass


class TransportError(AcickError):
    """Network failure, timeout or DNS error."""

    pass


class ServerError(TransportError):
    """Remote service answered with a 5xx status."""

    def __init__(self, status: int, url: str):
        super().__init__(f"Received server error {status} from {url}")
        self.status = status
        self.url = url


class RetryExhaustedError(TransportError):
    """All attempts failed; carries the error of the last attempt."""

    def __init__(self, attempts: int, last_error: Exception):
        super().__init__(f"Gave up after {attempts} attempt(s): {last_error}")
        self.attempts = attempts
        self.last_error = last_error


# Protocol shape


class ProtocolError(AcickError):
    """Unexpected response shape from the remote service."""

    pass


class InvalidResponseError(ProtocolError):
    """Received invalid response."""

    def __init__(self, status: int, url: str):
        super().__init__(f"Received invalid response {status} from {url}")
        self.status = status
        self.url = url


class InvalidResponseCodeError(ProtocolError):
    """Received invalid response code."""

    pass


class InvalidRedirectError(ProtocolError):
    """Found missing or invalid redirection url."""

    pass


# Parsing


class ParsingError(ValueError, AcickError):
    """Error parsing HTML content."""

    pass


class MissingCsrfError(ParsingError):
    """Could not extract csrf token."""

    pass


class EmptyCsrfError(ParsingError):
    """Found empty csrf token."""

    pass


class MissingContestNameError(ParsingError):
    """Could not extract contest name."""

    pass


# Authentication


class AuthError(AcickError):
    """Authentication or authorization failure on the judge site."""

    pass


class InvalidCredentialsError(AuthError):
    """Invalid username or password."""

    pass


class NotLoggedInError(AuthError):
    """User not logged in."""

    pass


class ContestNotFoundError(AuthError):
    """Could not find contest."""

    pass


class NotParticipatingError(AuthError):
    """Contest not participated or not started."""

    pass


class LoggedInAsOtherError(AuthError):
    """Logged in as another user."""

    def __init__(self, user: str):
        super().__init__(f"Logged in as another user: {user}")
        self.user = user


class LoginFailedError(AuthError):
    """Failed to log in."""

    pass


# Not found


class NotFoundError(AcickError):
    """Requested entity does not exist on the service."""

    pass


class NoProblemsError(NotFoundError):
    """Contest has no problems."""

    pass


class ProblemNotFoundError(NotFoundError):
    """Problem is not in the contest."""

    pass


class MissingSamplesError(NotFoundError):
    """Problem found on tasks page but not on tasks print page."""

    pass


class NoAvailableLanguageError(NotFoundError):
    """None of the requested languages is available."""

    def __init__(self, tried: Sequence[str]):
        super().__init__(
            "Could not find available language from the given language list: "
            + ", ".join(tried)
        )
        self.tried = list(tried)


class TestcaseFolderNotFoundError(NotFoundError):
    """Could not find testcases folder for the contest."""

    __test__ = False


# Workspace


class WorkspaceError(AcickError):
    """Filesystem operation in the workspace failed."""

    pass


class ProblemMismatchError(WorkspaceError):
    """Problem file holds a different problem id."""

    pass


class CompileError(AcickError):
    """Compile command exited with a failure."""

    pass


# OAuth


class OAuthError(AcickError):
    """Dropbox authorization failed."""

    pass


class DropboxError(AcickError):
    """Dropbox API call failed."""

    pass


def format_error_chain(err: BaseException) -> str:
    """Render an exception and its causes as ``ctx: ctx: root cause``."""
    messages = []
    seen = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        message = str(current) or type(current).__name__
        if not messages or messages[-1] != message:
            messages.append(message)
        current = current.__cause__ or current.__context__
    return ": ".join(messages)
