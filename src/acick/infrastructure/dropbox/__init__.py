"""Dropbox access for the full testcase archive."""

from .authorizer import DbxAuthorizer
from .callback_server import CallbackServer
from .client import DropboxClient

__all__ = ["CallbackServer", "DbxAuthorizer", "DropboxClient"]
