"""In-memory connector wrapping a single string."""

from __future__ import annotations

from collections.abc import Iterator

from gitpatrol.errors import EntryNotFoundError


class TextConnector:
    """Presents one piece of text as a single-file source."""

    def __init__(self, content: str, file_path: str = "file.js") -> None:
        self._content = content
        self._file_path = file_path

    def enumerate(self) -> Iterator[str]:
        yield self._file_path

    def fetch(self, path: str) -> str:
        if path != self._file_path:
            raise EntryNotFoundError(f"Unknown path: {path}")
        return self._content

    def has_manifest(self) -> bool:
        return False

    def close(self) -> None:
        pass
