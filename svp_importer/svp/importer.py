from __future__ import annotations

"""Load Synthesizer V (.svp) project files into a Project."""

import logging
import uuid
from pathlib import Path
from typing import Optional

from svp_importer.config import Settings
from svp_importer.svp.parts import build_tracks, place_parts
from svp_importer.svp.reader import decode_blobs, find_title, read_svp_text, select_project, split_blobs
from svp_importer.svp.timeline import build_tempos, build_time_signatures
from svp_importer.ustx import ExpressionDescriptor, Project
from svp_importer.utils.logging_utils import clear_log_context, get_logger, set_log_context

logger = get_logger(__name__)

OPENING_EXPRESSION = ExpressionDescriptor(
    name="opening",
    abbr="ope",
    min=0,
    max=100,
    default_value=100,
)


def load_svp(file_path: str | Path, *, settings: Optional[Settings] = None) -> Project:
    """Import an SVP file.

    The file may hold several NUL-separated JSON documents; the one with the
    highest ``version`` drives the import. Unreadable files, files without a
    payload and files without any decodable document raise an
    ``SvpImportError`` subclass. Everything else degrades to defaults.
    """
    path = Path(file_path)
    set_log_context(import_id=uuid.uuid4().hex[:12], source_file=path.name)
    try:
        return _load(path, settings)
    finally:
        clear_log_context()


def _load(path: Path, settings: Optional[Settings]) -> Project:
    logger.info("Loading SVP file: %s", path)
    text = read_svp_text(path, settings=settings)
    blobs = split_blobs(text, path=path)
    del text
    svp_project = select_project(decode_blobs(blobs, path=path))
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "SVP: %s blob(s), selected version=%s tracks=%s library=%s",
            len(blobs),
            svp_project.version,
            len(svp_project.tracks),
            len(svp_project.library),
        )

    project = Project()
    project.add_default_expressions()
    project.register_expression(OPENING_EXPRESSION)
    project.file_path = str(path)
    project.name = find_title(blobs) or path.stem

    project.time_signatures = build_time_signatures(svp_project.time)
    project.tempos = build_tempos(svp_project.time)

    tracks = svp_project.sorted_tracks()
    build_tracks(project, tracks)
    place_parts(project, svp_project, tracks)

    project.after_load()
    project.validate_full()
    logger.info(
        "SVP import completed: %s tracks=%s parts=%s",
        project.name,
        len(project.tracks),
        len(project.parts),
    )
    return project
