"""Connector protocol — every source kind must satisfy this."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable


@runtime_checkable
class Connector(Protocol):
    """Pairs file enumeration with content retrieval for one source.

    Paths yielded by ``enumerate`` are root-relative and forward-slash
    separated; they are only meaningful to the connector that produced them.
    """

    def enumerate(self) -> Iterator[str]:
        """Yield every file path under the source root, lazily."""
        ...

    def fetch(self, path: str) -> str:
        """Return the decoded text of one file."""
        ...

    def has_manifest(self) -> bool:
        """Whether the source root carries a package.json."""
        ...

    def close(self) -> None:
        """Release any handle held by the connector."""
        ...
