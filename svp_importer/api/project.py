"""
Project import APIs returning JSON-serializable summaries.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Union

from svp_importer.svp import load_svp
from svp_importer.ustx import Project, VoicePart
from svp_importer.utils.logging_utils import get_logger, summarize_payload

logger = get_logger(__name__)


def import_svp(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Import an SVP file and return a summary of the resulting project.

    Args:
        file_path: Path to the .svp file

    Returns:
        Summary dict with structure:
        {
            "name": str,
            "file_path": str,
            "time_signatures": [{"bar_position", "beat_per_bar", "beat_unit"}],
            "tempos": [{"position", "bpm"}],
            "tracks": [{"track_no", "name", "muted"}],
            "parts": [{"name", "track_no", "position", "duration", "notes", "curves"}],
        }

    Raises:
        SvpImportError: If the file cannot be read or holds no usable project
    """
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("import_svp input=%s", summarize_payload({"file_path": str(file_path)}))
    project = load_svp(file_path)
    summary = summarize_project(project)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("import_svp output=%s", summarize_payload(summary))
    return summary


def summarize_project(project: Project) -> Dict[str, Any]:
    """Convert a project into a plain dict for display or comparison."""
    return {
        "name": project.name,
        "file_path": project.file_path,
        "time_signatures": [
            {
                "bar_position": sig.bar_position,
                "beat_per_bar": sig.beat_per_bar,
                "beat_unit": sig.beat_unit,
            }
            for sig in project.time_signatures
        ],
        "tempos": [
            {"position": tempo.position, "bpm": tempo.bpm}
            for tempo in project.tempos
        ],
        "tracks": [
            {"track_no": track.track_no, "name": track.name, "muted": track.muted}
            for track in project.tracks
        ],
        "parts": [_summarize_part(part) for part in project.parts],
    }


def _summarize_part(part: VoicePart) -> Dict[str, Any]:
    return {
        "name": part.name,
        "track_no": part.track_no,
        "position": part.position,
        "duration": part.duration,
        "notes": [
            {
                "position": note.position,
                "duration": note.duration,
                "tone": note.tone,
                "lyric": note.lyric,
            }
            for note in part.notes
        ],
        "curves": {curve.abbr: len(curve) for curve in part.curves},
    }
