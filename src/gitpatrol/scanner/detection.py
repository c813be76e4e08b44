"""Line-oriented detection of obfuscated JavaScript."""

from __future__ import annotations

from collections.abc import Iterator

from gitpatrol.scanner.models import Finding
from gitpatrol.scanner.patterns import (
    MAX_LINE_LENGTH,
    is_safe,
    match_suspicious,
)


def analyze_content(content: str, file_path: str) -> tuple[bool, list[Finding]]:
    """Classify every line of a file and return (found_any, findings).

    A line is reported when it matches two or more suspicious patterns, or
    when it is minified (longer than MAX_LINE_LENGTH) and matches at least
    one. Lines carrying a safe library signature are never reported.
    """
    findings: list[Finding] = []

    for line_number, line in enumerate(_split_lines(content), start=1):
        finding = analyze_line(line, line_number, file_path)
        if finding is not None:
            findings.append(finding)

    return bool(findings), findings


def analyze_line(line: str, line_number: int, file_path: str) -> Finding | None:
    """Classify one line, returning a Finding or None."""
    if is_safe(line):
        return None

    is_minified = len(line) > MAX_LINE_LENGTH
    matched = match_suspicious(line)

    if len(matched) >= 2 or (is_minified and matched):
        return Finding(
            file_path=file_path,
            line_number=line_number,
            line_length=len(line),
            matched_patterns=matched,
            is_minified=is_minified,
        )
    return None


def _split_lines(content: str) -> Iterator[str]:
    """Split on newlines only, dropping a trailing CR from each line.

    str.splitlines() is avoided because it also breaks on form feeds and
    Unicode separators, which obfuscated code may legitimately contain.
    """
    if not content:
        return
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    for line in lines:
        if line.endswith("\r"):
            line = line[:-1]
        yield line
