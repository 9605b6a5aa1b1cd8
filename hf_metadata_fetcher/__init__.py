"""Resolve metadata for files hosted on a Hugging Face style hub.

Lists repository files, selects them with glob patterns and probes each one
with HEAD for its commit, ETag, download location and size, without
downloading any content.
"""

from .cli import main
from .client import HubClient, get_client, get_file_metadata, get_filenames, get_files_metadata
from .credentials import resolve_token
from .errors import AuthorizationRequired, HttpStatusError, HubClientError, ParseError, TransportError
from .models import FileMetadata, Repo, RepoType

__all__ = [
    "main",
    "HubClient",
    "get_client",
    "get_filenames",
    "get_file_metadata",
    "get_files_metadata",
    "resolve_token",
    "AuthorizationRequired",
    "HttpStatusError",
    "HubClientError",
    "ParseError",
    "TransportError",
    "FileMetadata",
    "Repo",
    "RepoType",
]

if __name__ == "__main__":
    main()
