"""REST API for scanning submitted source text."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, field_validator

from gitpatrol.scanner.engine import scan_content
from gitpatrol.scanner.patterns import SOURCE_EXTENSIONS, is_source_file

router = APIRouter(tags=["scans"])


class ScanRequest(BaseModel):
    content: str
    file_path: str = "file.js"

    @field_validator("file_path")
    @classmethod
    def _source_name(cls, value: str) -> str:
        if not is_source_file(value):
            raise ValueError(
                f"file_path must end in one of {', '.join(SOURCE_EXTENSIONS)}"
            )
        return value


@router.post("/scan")
def scan_text(body: ScanRequest):
    result = scan_content(body.content, file_path=body.file_path).to_dict()
    return {
        "suspicious": result["any_suspicious"],
        "files_scanned": result["files_scanned"],
        "findings": result["findings"],
    }
