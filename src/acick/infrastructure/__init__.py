from .abs_path import AbsPath, SaveResult
from .config import AcickSettings, DropboxConfig, SessionConfig
from .console import Console, ConsoleConfig, ProgressKind
from .http_client import HttpClient

__all__ = [
    "AbsPath",
    "AcickSettings",
    "Console",
    "ConsoleConfig",
    "DropboxConfig",
    "HttpClient",
    "ProgressKind",
    "SaveResult",
    "SessionConfig",
]
