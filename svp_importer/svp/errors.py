"""Fatal error types raised while importing SVP project files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class SvpImportError(ValueError):
    """Base class for import failures that abort loading a project."""

    path: str
    detail: str = "svp_import_failed"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "error_type": type(self).__name__,
            "path": self.path,
            "detail": self.detail,
        }

    def __str__(self) -> str:
        return f"{self.detail}: {self.path}"


@dataclass
class SvpReadError(SvpImportError):
    """Raised when the file cannot be read or decoded as text."""

    reason: Optional[str] = None
    detail: str = "cannot_read_svp_file"

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload

    def __str__(self) -> str:
        if self.reason:
            return f"{self.detail}: {self.path} ({self.reason})"
        return super().__str__()


@dataclass
class SvpNoPayloadError(SvpImportError):
    """Raised when the file holds no non-blank JSON payload."""

    detail: str = "svp_contains_no_json_payload"


@dataclass
class SvpNoProjectError(SvpImportError):
    """Raised when none of the payloads decodes into a project."""

    blob_count: int = 0
    detail: str = "no_parsable_json_project"

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["blob_count"] = int(self.blob_count)
        return payload

    def __str__(self) -> str:
        return f"{self.detail}: {self.path} (blobs={self.blob_count})"
