"""Source connectors and target-based connector selection."""

from __future__ import annotations

from pathlib import Path

from gitpatrol.config import GitPatrolConfig
from gitpatrol.connectors.archive import ZipConnector
from gitpatrol.connectors.base import Connector
from gitpatrol.connectors.folder import FolderConnector
from gitpatrol.connectors.github import GitHubConnector
from gitpatrol.connectors.text import TextConnector
from gitpatrol.errors import ConstructionError

__all__ = [
    "Connector",
    "FolderConnector",
    "GitHubConnector",
    "TextConnector",
    "ZipConnector",
    "describe_target",
    "open_connector",
]


def open_connector(
    target: str | Path,
    config: GitPatrolConfig | None = None,
) -> Connector:
    """Build the connector matching a CLI target.

    URLs go to GitHub, directories to the folder walker and ``.zip`` paths
    to the archive reader.
    """
    kind = describe_target(target)
    if kind == "github":
        return GitHubConnector(str(target), config=config)
    if kind == "folder":
        return FolderConnector(target)
    if kind == "zip":
        lock_timeout = config.lock_timeout if config else 30.0
        return ZipConnector(target, lock_timeout=lock_timeout)
    raise ConstructionError(
        f"Path must be either a directory or a zip file: {target}"
    )


def describe_target(target: str | Path) -> str:
    """Return the source kind for a target: github, folder, zip or unknown."""
    text = str(target)
    if text.startswith(("http://", "https://")):
        return "github"
    path = Path(target)
    if path.is_dir():
        return "folder"
    if path.suffix.lower() == ".zip":
        return "zip"
    return "unknown"
