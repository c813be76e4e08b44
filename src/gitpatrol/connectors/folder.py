"""Local directory connector."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from gitpatrol.errors import ConstructionError, DecodeError
from gitpatrol.scanner.patterns import MANIFEST_NAME

logger = logging.getLogger(__name__)


class FolderConnector:
    """Enumerates and reads files below a directory on disk."""

    def __init__(self, root: str | Path) -> None:
        root = Path(root)
        if not root.exists():
            raise ConstructionError(f"Path does not exist: {root}")
        if not root.is_dir():
            raise ConstructionError(f"Not a directory: {root}")
        self._root = root.resolve()

    def enumerate(self) -> Iterator[str]:
        """Walk the tree yielding regular files relative to the root.

        Symlinked directories are not followed, so link cycles cannot
        recurse. Entries that cannot be read are skipped.
        """
        for dirpath, dirnames, filenames in os.walk(
            self._root, onerror=_log_walk_error, followlinks=False
        ):
            dirnames.sort()
            base = Path(dirpath)
            for name in sorted(filenames):
                path = base / name
                try:
                    if not path.is_file():
                        continue
                except OSError as e:
                    logger.debug("Skipping %s: %s", path, e)
                    continue
                yield path.relative_to(self._root).as_posix()

    def fetch(self, path: str) -> str:
        data = (self._root / path).read_bytes()
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 in {path}: {e}") from e

    def has_manifest(self) -> bool:
        return (self._root / MANIFEST_NAME).exists()

    def close(self) -> None:
        pass

    def __enter__(self) -> FolderConnector:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def _log_walk_error(error: OSError) -> None:
    logger.debug("Skipping unreadable entry %s: %s", error.filename, error)
