"""Hub metadata client using httpx."""

import json
import logging
from collections.abc import Iterable
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from pathlib import Path
from urllib.parse import quote

import httpx

from .credentials import resolve_token
from .errors import AuthorizationRequired, HttpStatusError, ParseError, TransportError
from .globs import select_filenames
from .metadata import file_metadata_from_response
from .models import DEFAULT_REVISION, FileMetadata, Repo, RepoType
from .redirects import send_with_redirect_policy
from .settings import get_settings

logger = logging.getLogger(__name__)


def _check_status(response: httpx.Response, success: range) -> httpx.Response:
    status = response.status_code
    if status in success:
        return response
    if 400 <= status < 500:
        raise AuthorizationRequired(status, str(response.request.url))
    raise HttpStatusError(status, str(response.request.url))


class HubClient:
    """Read-only client for hub repository listings and file metadata.

    Holds the endpoint, token and download base for its lifetime. The token
    is resolved once at construction when not given explicitly. Safe to share
    between threads.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        token: str | None = None,
        download_base: Path | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        settings = get_settings()
        self.endpoint = (endpoint or settings.hf_endpoint).rstrip("/")
        self.token = token or resolve_token()
        self.download_base = Path(download_base or settings.hf_download_base).expanduser()
        self.timeout = timeout if timeout is not None else settings.hf_request_timeout

        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        # Listing requests follow redirects as usual.
        self._client = httpx.Client(
            headers=headers,
            timeout=self.timeout,
            follow_redirects=True,
            transport=transport,
        )
        # Metadata probes go through the redirect policy instead.
        self._head_client = httpx.Client(
            headers=headers,
            timeout=self.timeout,
            follow_redirects=False,
            transport=transport,
        )

    def __enter__(self) -> "HubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()
        self._head_client.close()

    def http_get(self, url: str) -> httpx.Response:
        """GET ``url``; raise unless the status is 2xx."""
        try:
            response = self._client.get(url)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"GET {url} failed: {e}") from e
        return _check_status(response, range(200, 300))

    def http_head(self, url: str) -> httpx.Response:
        """HEAD ``url`` under the redirect policy; raise unless 2xx or 3xx.

        Compression is disabled so Content-Length is the real file size.
        """
        try:
            request = self._head_client.build_request(
                "HEAD", url, headers={"Accept-Encoding": "identity"}
            )
            response = send_with_redirect_policy(self._head_client, request)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"HEAD {url} failed: {e}") from e
        return _check_status(response, range(200, 400))

    def list_filenames(self, repo: Repo | str) -> list[str]:
        """All file paths in the repository, in listing order."""
        repo = Repo.parse(repo)
        url = f"{self.endpoint}/{repo.api_path}"
        response = self.http_get(url)
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(f"Invalid repository listing for {repo.id}: {e}") from e

        siblings = body.get("siblings") if isinstance(body, dict) else None
        if not isinstance(siblings, list):
            raise ParseError(f"Repository listing for {repo.id} has no siblings")
        filenames = []
        for sibling in siblings:
            name = sibling.get("rfilename") if isinstance(sibling, dict) else None
            if not isinstance(name, str):
                raise ParseError(f"Invalid sibling in listing for {repo.id}: {sibling!r}")
            filenames.append(name)
        logger.debug("Listed %d files in %s", len(filenames), repo.id)
        return filenames

    def get_filenames(self, repo: Repo | str, globs: str | Iterable[str] | None = None) -> list[str]:
        """Repository filenames matching any of ``globs`` (all when empty)."""
        return select_filenames(self.list_filenames(repo), globs)

    def resolve_url(self, repo: Repo | str, filename: str, revision: str = DEFAULT_REVISION) -> str:
        repo = Repo.parse(repo)
        return f"{self.endpoint}/{repo.id}/resolve/{quote(revision, safe='')}/{quote(filename)}"

    def get_file_metadata(self, url: str) -> FileMetadata:
        """Probe one file URL with HEAD and extract its metadata."""
        response = self.http_head(url)
        return file_metadata_from_response(response, url)

    def get_files_metadata(
        self,
        repo: Repo | str,
        globs: str | Iterable[str] | None = None,
        revision: str = DEFAULT_REVISION,
        max_workers: int = 1,
    ) -> list[FileMetadata]:
        """Metadata for every selected file, in selection order.

        With ``max_workers > 1`` the probes run concurrently. As soon as one
        fails, probes not yet started are cancelled, and the lowest-index
        failure among the probes that ran is raised.
        """
        repo = Repo.parse(repo)
        urls = [self.resolve_url(repo, name, revision) for name in self.get_filenames(repo, globs)]
        if max_workers <= 1 or len(urls) <= 1:
            return [self.get_file_metadata(url) for url in urls]

        executor = ThreadPoolExecutor(max_workers=max_workers)
        try:
            futures = [executor.submit(self.get_file_metadata, url) for url in urls]
            wait(futures, return_when=FIRST_EXCEPTION)
        finally:
            # Drops probes not yet started; running ones are allowed to finish.
            executor.shutdown(wait=True, cancel_futures=True)

        for future in futures:
            if future.cancelled():
                continue
            error = future.exception()
            if error is not None:
                raise error
        return [future.result() for future in futures]


def get_client(**overrides) -> HubClient:
    """Create a HubClient from the current settings, with optional overrides."""
    return HubClient(**overrides)


def get_filenames(
    repo: Repo | str,
    globs: str | Iterable[str] | None = None,
    repo_type: str | RepoType = RepoType.MODEL,
) -> list[str]:
    with get_client() as client:
        return client.get_filenames(Repo.parse(repo, repo_type), globs)


def get_file_metadata(url: str) -> FileMetadata:
    with get_client() as client:
        return client.get_file_metadata(url)


def get_files_metadata(
    repo: Repo | str,
    globs: str | Iterable[str] | None = None,
    repo_type: str | RepoType = RepoType.MODEL,
    revision: str = DEFAULT_REVISION,
    max_workers: int = 1,
) -> list[FileMetadata]:
    with get_client() as client:
        return client.get_files_metadata(
            Repo.parse(repo, repo_type), globs, revision=revision, max_workers=max_workers
        )
