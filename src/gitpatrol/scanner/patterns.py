"""Fixed pattern lists used to flag obfuscated JavaScript."""

from __future__ import annotations

# Lines longer than this are treated as minified
MAX_LINE_LENGTH = 500

# Files above this size get a presentation warning; they are still analyzed
MAX_FILE_SIZE = 1_048_576

SUSPICIOUS_PATTERNS: tuple[str, ...] = (
    "_0x",  # hex variable names
    "eval(",
    "\\x",  # hex escape sequences
    "base64",
    "fromCharCode",  # String.fromCharCode
    "unescape(",
)

# Signatures of well-known minified libraries
SAFE_PATTERNS: tuple[str, ...] = (
    "!function(e,t)",  # jQuery
    "/*! ",  # license banner of minified builds
    "(function(f)",  # UMD wrapper
)

SOURCE_EXTENSIONS: tuple[str, ...] = (".js", ".ts", ".jsx", ".tsx")

MANIFEST_NAME = "package.json"


def is_safe(line: str) -> bool:
    """Check if a line carries a known benign library signature."""
    return any(p in line for p in SAFE_PATTERNS)


def match_suspicious(line: str) -> tuple[str, ...]:
    """Return the suspicious patterns found in a line, in list order."""
    return tuple(p for p in SUSPICIOUS_PATTERNS if p in line)


def is_source_file(path: str) -> bool:
    """Check if a path names a JavaScript or TypeScript source file."""
    return path.endswith(SOURCE_EXTENSIONS)
