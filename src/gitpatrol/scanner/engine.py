"""Scan engine — drives a connector through the detection pipeline."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from gitpatrol.config import GitPatrolConfig
from gitpatrol.connectors import TextConnector, open_connector
from gitpatrol.connectors.base import Connector
from gitpatrol.scanner.detection import analyze_content
from gitpatrol.scanner.models import Finding, ScanResult
from gitpatrol.scanner.patterns import MAX_FILE_SIZE, is_source_file

logger = logging.getLogger(__name__)


class Scanner:
    """Runs enumerate, filter, fetch and analyze over one connector.

    Any error raised while enumerating or fetching aborts the scan; no
    partial result is returned.
    """

    def __init__(
        self,
        connector: Connector,
        target: str = "",
        on_finding: Callable[[Finding], None] | None = None,
    ) -> None:
        self._connector = connector
        self._target = target
        self._on_finding = on_finding

    def scan(self) -> ScanResult:
        start = time.time()
        result = ScanResult(target=self._target)
        result.has_manifest = self._connector.has_manifest()

        logger.debug("Enumerating %s", self._target or "source")
        for path in self._connector.enumerate():
            if not is_source_file(path):
                result.files_skipped += 1
                continue

            logger.debug("Fetching %s", path)
            content = self._connector.fetch(path)
            result.files_scanned += 1
            if len(content.encode("utf-8")) > MAX_FILE_SIZE:
                result.large_files.append(path)

            logger.debug("Analyzing %s (%d chars)", path, len(content))
            _, findings = analyze_content(content, path)
            for finding in findings:
                if self._on_finding:
                    self._on_finding(finding)
                result.findings.append(finding)

        result.duration = time.time() - start
        logger.debug(
            "Scan of %s done: %d files, %d findings",
            self._target or "source",
            result.files_scanned,
            len(result.findings),
        )
        return result


def scan_target(
    target: str | Path,
    config: GitPatrolConfig | None = None,
    on_finding: Callable[[Finding], None] | None = None,
) -> ScanResult:
    """Open the connector for a directory, zip file or GitHub URL and scan it."""
    connector = open_connector(target, config=config)
    try:
        return Scanner(connector, target=str(target), on_finding=on_finding).scan()
    finally:
        connector.close()


def scan_content(content: str, file_path: str = "file.js") -> ScanResult:
    """Scan a single piece of text as if it were one source file."""
    connector = TextConnector(content, file_path=file_path)
    return Scanner(connector, target=file_path).scan()
