"""Lenient pydantic models for the JSON documents embedded in SVP files.

Unknown fields are ignored and explicit ``null`` values fall back to the
field default, so partially filled or newer-version documents still decode.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SvpModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Meter(SvpModel):
    index: int = 0
    numerator: int = 4
    denominator: int = 4


class Tempo(SvpModel):
    position: int = 0
    bpm: float = 120.0


class TimeAxis(SvpModel):
    meter: Optional[List[Meter]] = None
    tempo: Optional[List[Tempo]] = None


class NoteAttributes(SvpModel):
    """Per-note vibrato shape; every field is optional."""

    t_f0_vbr_start: Optional[float] = Field(default=None, alias="tF0VbrStart")
    t_f0_vbr_left: Optional[float] = Field(default=None, alias="tF0VbrLeft")
    t_f0_vbr_right: Optional[float] = Field(default=None, alias="tF0VbrRight")
    d_f0_vbr: Optional[float] = Field(default=None, alias="dF0Vbr")
    p_f0_vbr: Optional[float] = Field(default=None, alias="pF0Vbr")
    f_f0_vbr: Optional[float] = Field(default=None, alias="fF0Vbr")


class Note(SvpModel):
    onset: int = 0
    duration: int = 0
    pitch: int = 0
    lyrics: Optional[str] = None
    phonemes: Optional[str] = None
    attributes: Optional[NoteAttributes] = None


class PointCurve(SvpModel):
    mode: Optional[str] = None
    points: Optional[List[float]] = None


class Parameters(SvpModel):
    pitch_delta: Optional[PointCurve] = Field(default=None, alias="pitchDelta")
    vibrato_env: Optional[PointCurve] = Field(default=None, alias="vibratoEnv")
    loudness: Any = None
    tension: Any = None
    breathiness: Any = None
    voicing: Any = None
    gender: Any = None


class Group(SvpModel):
    uuid: Optional[str] = None
    name: Optional[str] = None
    notes: List[Note] = Field(default_factory=list)
    parameters: Optional[Parameters] = None


class Reference(SvpModel):
    group_id: Optional[str] = Field(default=None, alias="groupID")
    blick_offset: int = Field(default=0, alias="blickOffset")
    pitch_offset: int = Field(default=0, alias="pitchOffset")
    is_instrumental: Optional[bool] = Field(default=None, alias="isInstrumental")
    dictionary: Optional[str] = None
    voice: Any = None
    database: Any = None
    audio: Any = None


class Track(SvpModel):
    name: Optional[str] = None
    disp_color: Optional[str] = Field(default=None, alias="dispColor")
    disp_order: int = Field(default=0, alias="dispOrder")
    render_enabled: Optional[bool] = Field(default=None, alias="renderEnabled")
    main_group: Optional[Group] = Field(default=None, alias="mainGroup")
    main_ref: Optional[Reference] = Field(default=None, alias="mainRef")
    groups: Optional[List[Reference]] = None
    mixer: Any = None


class RenderConfig(SvpModel):
    destination: Optional[str] = None
    filename: Optional[str] = None
    num_channels: Optional[int] = Field(default=None, alias="numChannels")
    sample_rate: Optional[int] = Field(default=None, alias="sampleRate")
    bit_depth: Optional[int] = Field(default=None, alias="bitDepth")
    aspiration_format: Optional[str] = Field(default=None, alias="aspirationFormat")
    export_mix_down: Optional[bool] = Field(default=None, alias="exportMixDown")


class Project(SvpModel):
    version: Optional[int] = None
    time: TimeAxis = Field(default_factory=TimeAxis)
    tracks: List[Track] = Field(default_factory=list)
    library: List[Group] = Field(default_factory=list)
    render_config: Optional[RenderConfig] = Field(default=None, alias="renderConfig")

    @property
    def rank(self) -> int:
        return self.version or 0

    def sorted_tracks(self) -> List[Track]:
        return sorted(self.tracks, key=lambda track: track.disp_order)

    def find_group(self, group_id: Optional[str]) -> Optional[Group]:
        for group in self.library:
            if group.uuid == group_id:
                return group
        return None
