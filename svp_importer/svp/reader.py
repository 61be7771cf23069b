from __future__ import annotations

"""Read SVP files and pick the authoritative project document."""

import json
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import ValidationError

from svp_importer.config import Settings
from svp_importer.svp.errors import SvpNoPayloadError, SvpNoProjectError, SvpReadError
from svp_importer.svp.schema import Project
from svp_importer.utils.logging_utils import get_logger

logger = get_logger(__name__)

BLOB_TERMINATOR = "\0"
TITLE_KEYS = ("name", "projectName", "title")


def read_svp_text(path: str | Path, *, settings: Optional[Settings] = None) -> str:
    """Read the whole file as text, raising SvpReadError on any failure."""
    settings = settings or Settings.from_env()
    path = Path(path)
    try:
        size = path.stat().st_size
        if size > settings.max_file_bytes:
            raise SvpReadError(
                str(path),
                reason=f"file is {size} bytes, limit is {settings.max_file_bytes}",
            )
        with path.open("r", encoding=settings.text_encoding, newline="") as handle:
            return handle.read()
    except SvpReadError:
        logger.error("Error reading SVP file path=%s", path)
        raise
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        logger.error("Error reading SVP file path=%s", path, exc_info=True)
        raise SvpReadError(str(path), reason=str(exc)) from exc


def split_blobs(text: str, *, path: str | Path = "<memory>") -> List[str]:
    """Split the file content into non-blank NUL-delimited JSON candidates."""
    blobs = [
        piece.strip(BLOB_TERMINATOR)
        for piece in text.split(BLOB_TERMINATOR)
    ]
    blobs = [blob for blob in blobs if blob.strip()]
    if not blobs:
        raise SvpNoPayloadError(str(path))
    return blobs


def decode_blob(blob: str) -> Project:
    """Decode one candidate into a project descriptor."""
    return Project.model_validate(json.loads(blob))


def decode_blobs(blobs: Sequence[str], *, path: str | Path = "<memory>") -> List[Project]:
    """Decode every blob, skipping the ones that fail."""
    projects: List[Project] = []
    for index, blob in enumerate(blobs):
        try:
            projects.append(decode_blob(blob))
        except (ValueError, RecursionError, ValidationError) as exc:
            logger.debug(
                "Failed to deserialize one SVP blob; skipping. index=%s chars=%s error=%s",
                index,
                len(blob),
                exc,
            )
    if not projects:
        raise SvpNoProjectError(str(path), blob_count=len(blobs))
    return projects


def select_project(projects: Sequence[Project]) -> Project:
    """Return the highest-version descriptor; ties keep the first one."""
    if not projects:
        raise ValueError("projects must not be empty.")
    return max(projects, key=lambda project: project.rank)


def find_title(blobs: Sequence[str]) -> Optional[str]:
    """Look up a project title in the longest blob, returning None on any failure."""
    if not blobs:
        return None
    longest = max(blobs, key=len)
    try:
        data = json.loads(longest)
    except (ValueError, RecursionError) as exc:
        logger.debug("Title lookup could not parse the longest blob: %s", exc)
        return None
    if not isinstance(data, dict):
        return None
    for key in TITLE_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None
