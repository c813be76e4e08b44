"""GitHub repository connector backed by the contents API.

The repository tree is walked depth-first with an explicit stack. The walk
runs in a background thread that hands discovered file paths to the
consumer through a bounded queue:

- the queue depth bounds how far the walk can run ahead of the scanner
- the first fatal error is forwarded through the queue and re-raised
  by the consumer
- a sentinel marks the end of the walk
- if the consumer goes away, the producer stops on its next send

Path emission order follows the stack and is not stable across runs.
"""

from __future__ import annotations

import base64
import binascii
import logging
import queue
import threading
from collections.abc import Iterator
from typing import Any
from urllib.parse import quote

import httpx

from gitpatrol.config import GitPatrolConfig
from gitpatrol.errors import (
    AccessDeniedError,
    ApiError,
    ConstructionError,
    DecodeError,
    EmptyRepositoryError,
    GitPatrolError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
)
from gitpatrol.scanner.patterns import MANIFEST_NAME

logger = logging.getLogger(__name__)

_URL_FORMAT_HINT = "Expected: https://github.com/owner/repo"

# How often a blocked producer re-checks whether the consumer is gone
_PUT_POLL_INTERVAL = 0.1


class _Done:
    """End-of-walk sentinel."""


_DONE = _Done()


class _Failure:
    """Carries a fatal producer error across the queue."""

    def __init__(self, error: BaseException) -> None:
        self.error = error


def parse_repository_url(url: str) -> tuple[str, str]:
    """Split a repository URL into (owner, repo).

    Raises ConstructionError when the URL lacks an owner or repository
    segment.
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise ConstructionError(
            f"Invalid GitHub URL format: {url}. {_URL_FORMAT_HINT}"
        ) from e

    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConstructionError(
            f"Invalid GitHub URL format: {url}. {_URL_FORMAT_HINT}"
        )

    segments = [s for s in parsed.path.split("/") if s]
    if len(segments) < 2:
        raise ConstructionError(
            f"Invalid GitHub URL format: {url}. {_URL_FORMAT_HINT}"
        )

    owner, repo = segments[0], segments[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo:
        raise ConstructionError(
            f"Invalid GitHub URL format: {url}. {_URL_FORMAT_HINT}"
        )
    return owner, repo


class GitHubConnector:
    """Enumerates and reads files of a GitHub repository over HTTP."""

    def __init__(
        self,
        url: str,
        config: GitPatrolConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._owner, self._repo = parse_repository_url(url)
        self._config = config or GitPatrolConfig.load()
        self._url = url

        headers = {
            "User-Agent": self._config.user_agent,
            "Accept": "application/vnd.github.v3+json",
        }
        if self._config.github_token:
            headers["Authorization"] = f"token {self._config.github_token}"

        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self._config.request_timeout)
        self._headers = headers

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def repo(self) -> str:
        return self._repo

    # -- Connector protocol ------------------------------------------------

    def enumerate(self) -> Iterator[str]:
        """Yield every file path in the repository.

        The tree walk starts when iteration starts. Closing the generator
        early stops the background walk.
        """
        channel: queue.Queue[Any] = queue.Queue(maxsize=self._config.queue_size)
        stop = threading.Event()
        producer = threading.Thread(
            target=self._produce,
            args=(channel, stop),
            name=f"gitpatrol-walk-{self._owner}/{self._repo}",
            daemon=True,
        )
        producer.start()

        try:
            while True:
                item = channel.get()
                if item is _DONE:
                    return
                if isinstance(item, _Failure):
                    raise item.error
                yield item
        finally:
            stop.set()

    def fetch(self, path: str) -> str:
        response = self._get(self._contents_url(path), path)
        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON for {path}: {e}") from e

        if not isinstance(payload, dict) or not isinstance(
            payload.get("content"), str
        ):
            raise DecodeError(f"No content field in GitHub response for {path}")

        if payload.get("encoding") == "none" and payload.get("download_url"):
            # Files above the inline size limit come back without content
            raw = self._get(payload["download_url"], path).content
        else:
            blob = payload["content"].replace("\n", "")
            try:
                raw = base64.b64decode(blob, validate=True)
            except (binascii.Error, ValueError) as e:
                raise DecodeError(f"Invalid base64 content for {path}: {e}") from e

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 in {path}: {e}") from e

    def has_manifest(self) -> bool:
        try:
            self._get(self._contents_url(MANIFEST_NAME), MANIFEST_NAME)
        except NotFoundError:
            return False
        return True

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> GitHubConnector:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # -- Tree walk -----------------------------------------------------------

    def _produce(self, channel: queue.Queue[Any], stop: threading.Event) -> None:
        """Background producer: walk the tree and feed the channel."""
        try:
            for path in self._walk(stop):
                if not _put(channel, path, stop):
                    logger.debug("Consumer gone, stopping walk of %s", self._url)
                    return
        except Exception as e:
            _put(channel, _Failure(e), stop)
            return
        _put(channel, _DONE, stop)

    def _walk(self, stop: threading.Event) -> Iterator[str]:
        stack = [""]
        found = 0

        while stack:
            if stop.is_set():
                return
            current = stack.pop()

            try:
                entries = self._list_directory(current)
            except RateLimitedError:
                raise
            except GitPatrolError as e:
                if current == "" or self._config.strict_listing:
                    raise
                logger.warning("Skipping directory %s: %s", current, e)
                continue

            for entry in entries:
                entry_type = entry.get("type")
                entry_path = entry.get("path")
                if not isinstance(entry_path, str):
                    continue
                if entry_type == "dir":
                    stack.append(entry_path)
                elif entry_type == "file":
                    found += 1
                    yield entry_path

        if found == 0:
            raise EmptyRepositoryError(
                f"No files found in repository {self._owner}/{self._repo}"
            )

    def _list_directory(self, path: str) -> list[dict]:
        response = self._get(self._contents_url(path), path or "/")
        try:
            payload = response.json()
        except ValueError as e:
            raise ApiError(
                f"Invalid JSON listing for {path or '/'}",
                response.status_code,
                response.text,
            ) from e

        # Listing a file path returns the file object itself
        if isinstance(payload, dict):
            return [payload]
        if not isinstance(payload, list):
            raise ApiError(
                f"Unexpected listing payload for {path or '/'}",
                response.status_code,
                response.text,
            )
        return [e for e in payload if isinstance(e, dict)]

    # -- HTTP ------------------------------------------------------------------

    def _contents_url(self, path: str) -> str:
        base = self._config.api_url.rstrip("/")
        return (
            f"{base}/repos/{quote(self._owner)}/{quote(self._repo)}"
            f"/contents/{quote(path)}"
        )

    def _get(self, url: str, path: str) -> httpx.Response:
        logger.debug("GET %s", url)
        try:
            response = self._client.get(url, headers=self._headers)
        except httpx.HTTPError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        if response.is_success:
            return response
        raise self._classify(response, path)

    def _classify(self, response: httpx.Response, path: str) -> GitPatrolError:
        """Map an error response onto the exception taxonomy."""
        status = response.status_code
        body = response.text
        repo = f"{self._owner}/{self._repo}"

        if status == 404:
            if path in ("", "/"):
                return NotFoundError(f"Repository not found: {repo}")
            return NotFoundError(f"Path not found in repository {repo}: {path}")

        if status in (403, 429) and "rate limit" in body.lower():
            return RateLimitedError(
                "GitHub API rate limit exceeded. Please try again later. "
                "Consider setting a GITHUB_TOKEN environment variable."
            )

        if status == 403:
            return AccessDeniedError(
                f"Access denied to {repo} - repository may be private. "
                "If you have access, set the GITHUB_TOKEN environment variable."
            )

        return ApiError(f"GitHub API error ({status}): {body}", status, body)


def _put(channel: queue.Queue[Any], item: Any, stop: threading.Event) -> bool:
    """Send an item, giving up once the consumer has gone away."""
    while not stop.is_set():
        try:
            channel.put(item, timeout=_PUT_POLL_INTERVAL)
            return True
        except queue.Full:
            continue
    return False
