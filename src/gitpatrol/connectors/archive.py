"""Zip archive connector."""

from __future__ import annotations

import logging
import threading
import zipfile
import zlib
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from gitpatrol.errors import (
    ArchiveReadError,
    ConstructionError,
    DecodeError,
    EntryNotFoundError,
    LockError,
)
from gitpatrol.scanner.patterns import MANIFEST_NAME

logger = logging.getLogger(__name__)


class ZipConnector:
    """Enumerates and reads entries of a zip archive.

    ZipFile is not safe to read from several threads at once, so every
    access to the handle goes through a single lock.
    """

    def __init__(self, path: str | Path, lock_timeout: float = 30.0) -> None:
        path = Path(path)
        try:
            archive = zipfile.ZipFile(path)
        except FileNotFoundError as e:
            raise ConstructionError(f"Zip file does not exist: {path}") from e
        except (zipfile.BadZipFile, OSError) as e:
            raise ConstructionError(f"Cannot open zip file {path}: {e}") from e

        self._path = path
        self._archive = archive
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout
        self._has_manifest = any(
            name.endswith(MANIFEST_NAME) for name in archive.namelist()
        )
        logger.debug("Opened %s (%d entries)", path, len(archive.infolist()))

    @contextmanager
    def _locked(self):
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise LockError(f"Timed out waiting for archive lock on {self._path}")
        try:
            yield self._archive
        finally:
            self._lock.release()

    def enumerate(self) -> Iterator[str]:
        """Yield every entry name verbatim, directory markers included."""
        index = 0
        while True:
            with self._locked() as archive:
                entries = archive.infolist()
                if index >= len(entries):
                    return
                name = entries[index].filename
            index += 1
            yield name

    def fetch(self, path: str) -> str:
        with self._locked() as archive:
            for info in archive.infolist():
                if info.filename == path:
                    data = self._read(archive, info)
                    break
            else:
                raise EntryNotFoundError(f"File not found in zip: {path}")

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 in {path}: {e}") from e

    def _read(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> bytes:
        # Corrupt, encrypted or unsupported entries fail with assorted types
        try:
            return archive.read(info)
        except (
            zipfile.BadZipFile,
            NotImplementedError,
            RuntimeError,
            zlib.error,
        ) as e:
            raise ArchiveReadError(
                f"Cannot read {info.filename} from {self._path}: {e}"
            ) from e

    def has_manifest(self) -> bool:
        return self._has_manifest

    def close(self) -> None:
        with self._locked() as archive:
            archive.close()

    def __enter__(self) -> ZipConnector:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
