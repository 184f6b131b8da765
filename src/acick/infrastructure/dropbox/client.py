"""Thin wrapper over the Dropbox SDK for listing and downloading shared files."""

from typing import IO, Iterator, Optional, Union

import dropbox
import requests
from dropbox.exceptions import DropboxException
from dropbox.files import FileMetadata, FolderMetadata, ListFolderResult, SharedLink
from loguru import logger

from acick.domain.exceptions import DropboxError

Metadata = Union[FileMetadata, FolderMetadata]


class DropboxClient:
    """Lists folders of a shared link and streams its files."""

    def __init__(self, dbx: dropbox.Dropbox):
        self.dbx = dbx

    def list_all(self, path: str, shared_link_url: Optional[str] = None) -> list:
        """Every entry under ``path``, following ``has_more`` until exhausted."""
        shared_link = SharedLink(url=shared_link_url) if shared_link_url else None
        logger.debug(f"Listing Dropbox folder {path!r}")
        try:
            result: ListFolderResult = self.dbx.files_list_folder(path, shared_link=shared_link)
            entries = list(result.entries)
            while result.has_more:
                result = self.dbx.files_list_folder_continue(result.cursor)
                entries.extend(result.entries)
        except DropboxException as e:
            raise DropboxError(f"Could not list Dropbox folder: {path}") from e
        return entries

    def list_all_folders(self, path: str, shared_link_url: Optional[str] = None) -> list[FolderMetadata]:
        return [e for e in self.list_all(path, shared_link_url) if isinstance(e, FolderMetadata)]

    def list_all_files(self, path: str, shared_link_url: Optional[str] = None) -> list[FileMetadata]:
        return [e for e in self.list_all(path, shared_link_url) if isinstance(e, FileMetadata)]

    def get_shared_link_file(self, url: str, path: str) -> Iterator[bytes]:
        """Stream the content of ``path`` inside the shared folder ``url``."""
        try:
            _, response = self.dbx.sharing_get_shared_link_file(url, path=path)
        except DropboxException as e:
            raise DropboxError(f"Could not download Dropbox file: {path}") from e
        return _iter_response(response, path)

    def download_to(self, url: str, path: str, out: IO[bytes]) -> int:
        """Copy a shared file into ``out``; returns the number of bytes written."""
        written = 0
        for chunk in self.get_shared_link_file(url, path):
            out.write(chunk)
            written += len(chunk)
        return written


def _iter_response(response: requests.Response, path: str) -> Iterator[bytes]:
    try:
        with response:
            yield from response.iter_content(chunk_size=64 * 1024)
    except requests.RequestException as e:
        raise DropboxError(f"Could not read Dropbox file: {path}") from e
