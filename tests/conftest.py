import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest

BLICKS = 1470000


def note(onset: int, duration: int, pitch: int = 60, lyrics: Optional[str] = "la", **extra: Any) -> Dict[str, Any]:
    payload = {"onset": onset, "duration": duration, "pitch": pitch, "lyrics": lyrics}
    payload.update(extra)
    return payload


def group(uuid: str, notes: List[Dict[str, Any]], *, name: Optional[str] = None, points=None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"uuid": uuid, "name": name, "notes": notes}
    if points is not None:
        payload["parameters"] = {"pitchDelta": {"mode": "cubic", "points": points}}
    return payload


def project_doc(
    *,
    version: Optional[int] = 153,
    tracks: Optional[List[Dict[str, Any]]] = None,
    library: Optional[List[Dict[str, Any]]] = None,
    meter=None,
    tempo=None,
) -> Dict[str, Any]:
    doc: Dict[str, Any] = {
        "library": library or [],
        "time": {
            "meter": meter if meter is not None else [{"index": 0, "numerator": 4, "denominator": 4}],
            "tempo": tempo if tempo is not None else [{"position": 0, "bpm": 120.0}],
        },
        "tracks": tracks or [],
        "renderConfig": {"sampleRate": 44100, "numChannels": 1},
    }
    if version is not None:
        doc["version"] = version
    return doc


def track_doc(
    *,
    name: Optional[str] = "Vocals",
    disp_order: int = 0,
    main_notes: Optional[List[Dict[str, Any]]] = None,
    refs: Optional[List[Dict[str, Any]]] = None,
    render_enabled: Optional[bool] = True,
    points=None,
    blick_offset: int = 0,
    pitch_offset: int = 0,
) -> Dict[str, Any]:
    return {
        "name": name,
        "dispColor": "ff7db235",
        "dispOrder": disp_order,
        "renderEnabled": render_enabled,
        "mixer": {"gainDecibel": 0.0, "pan": 0.0, "mute": False, "solo": False},
        "mainGroup": group("main-" + str(disp_order), main_notes or [], name="main", points=points),
        "mainRef": {
            "groupID": "main-" + str(disp_order),
            "blickOffset": blick_offset,
            "pitchOffset": pitch_offset,
            "isInstrumental": False,
            "database": {"name": "", "language": "english"},
        },
        "groups": refs or [],
    }


@pytest.fixture
def write_svp(tmp_path: Path) -> Callable[..., Path]:
    """Write JSON documents (or raw strings) separated by NUL bytes."""

    def _write(*docs: Any, name: str = "song.svp", trailing_nul: bool = True) -> Path:
        pieces = [doc if isinstance(doc, str) else json.dumps(doc) for doc in docs]
        text = "\0".join(pieces)
        if trailing_nul:
            text += "\0"
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def svp_docs() -> SimpleNamespace:
    """Builders for SVP JSON documents."""
    return SimpleNamespace(note=note, group=group, project=project_doc, track=track_doc)
