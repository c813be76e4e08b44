"""Scanner data models — findings and scan results."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class Finding:
    """A single suspicious line."""

    file_path: str
    line_number: int
    line_length: int
    matched_patterns: tuple[str, ...]
    is_minified: bool


@dataclass
class ScanResult:
    """Aggregate result of one scan."""

    target: str
    findings: list[Finding] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: int = 0
    has_manifest: bool = False
    large_files: list[str] = field(default_factory=list)
    duration: float = 0.0
    timestamp: float = field(default_factory=time.time)

    @property
    def any_suspicious(self) -> bool:
        return bool(self.findings)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["any_suspicious"] = self.any_suspicious
        for finding in data["findings"]:
            finding["matched_patterns"] = list(finding["matched_patterns"])
        return data
