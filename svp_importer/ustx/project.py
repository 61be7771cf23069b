from __future__ import annotations

"""In-memory project model populated by importers."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from svp_importer.ustx.curve import Curve
from svp_importer.ustx.expressions import ExpressionDescriptor, default_expressions

RESOLUTION = 480


class ProjectValidationError(ValueError):
    """Raised when a loaded project breaks a structural invariant."""


@dataclass
class TimeSignature:
    bar_position: int = 0
    beat_per_bar: int = 4
    beat_unit: int = 4


@dataclass
class Tempo:
    position: int = 0
    bpm: float = 120.0


@dataclass
class Vibrato:
    length: float = 0.0
    period: float = 175.0
    depth: float = 25.0
    fade_in: float = 10.0
    fade_out: float = 10.0
    shift: float = 0.0
    drift: float = 0.0


@dataclass
class Expression:
    abbr: str
    value: float
    index: Optional[int] = None


@dataclass
class Note:
    position: int = 0
    duration: int = 0
    tone: int = 60
    lyric: str = "a"
    phoneme_override: Optional[str] = None
    vibrato: Vibrato = field(default_factory=Vibrato)
    phoneme_expressions: List[Expression] = field(default_factory=list)

    @property
    def end(self) -> int:
        return self.position + self.duration


@dataclass
class Track:
    track_no: int
    name: str = ""
    muted: bool = False
    singer: Optional[str] = None


@dataclass
class VoicePart:
    name: str = ""
    comment: str = ""
    track_no: int = 0
    position: int = 0
    duration: int = 0
    notes: List[Note] = field(default_factory=list)
    curves: List[Curve] = field(default_factory=list)

    @property
    def end(self) -> int:
        return self.position + self.duration


@dataclass
class Project:
    name: str = "New Project"
    file_path: Optional[str] = None
    resolution: int = RESOLUTION
    expressions: Dict[str, ExpressionDescriptor] = field(default_factory=dict)
    time_signatures: List[TimeSignature] = field(default_factory=lambda: [TimeSignature()])
    tempos: List[Tempo] = field(default_factory=lambda: [Tempo()])
    tracks: List[Track] = field(default_factory=list)
    parts: List[VoicePart] = field(default_factory=list)

    def register_expression(self, descriptor: ExpressionDescriptor) -> None:
        self.expressions[descriptor.abbr] = descriptor

    def add_default_expressions(self) -> None:
        for descriptor in default_expressions():
            self.register_expression(descriptor)

    def create_note(self) -> Note:
        return Note()

    def after_load(self) -> None:
        """Normalize ordering and numbering after an importer filled the project."""
        for index, track in enumerate(self.tracks):
            track.track_no = index
        self.time_signatures.sort(key=lambda sig: sig.bar_position)
        self.tempos.sort(key=lambda tempo: tempo.position)
        for part in self.parts:
            part.notes.sort(key=lambda note: (note.position, note.tone))
            for note in part.notes:
                for expression in note.phoneme_expressions:
                    descriptor = self.expressions.get(expression.abbr)
                    if descriptor is not None:
                        expression.value = descriptor.clamp(expression.value)
        self.parts.sort(key=lambda part: (part.track_no, part.position))

    def validate_full(self) -> None:
        """Check the invariants every loaded project must satisfy."""
        if not self.time_signatures:
            raise ProjectValidationError("Project has no time signatures.")
        if self.time_signatures[0].bar_position != 0:
            raise ProjectValidationError("First time signature must start at bar 0.")
        for sig in self.time_signatures:
            if sig.beat_per_bar <= 0 or sig.beat_unit <= 0:
                raise ProjectValidationError(
                    f"Invalid time signature {sig.beat_per_bar}/{sig.beat_unit} at bar {sig.bar_position}."
                )
        if not self.tempos:
            raise ProjectValidationError("Project has no tempos.")
        if self.tempos[0].position != 0:
            raise ProjectValidationError("First tempo must start at position 0.")
        for tempo in self.tempos:
            if tempo.bpm <= 0:
                raise ProjectValidationError(f"Invalid tempo {tempo.bpm} at {tempo.position}.")
        track_count = len(self.tracks)
        for part in self.parts:
            if part.track_no < 0 or part.track_no >= track_count:
                raise ProjectValidationError(
                    f"Part {part.name!r} refers to missing track {part.track_no}."
                )
            if part.duration < 0:
                raise ProjectValidationError(f"Part {part.name!r} has negative duration.")
            for note in part.notes:
                if note.position < 0:
                    raise ProjectValidationError(
                        f"Note at {note.position} in part {part.name!r} starts before the part."
                    )
            for curve in part.curves:
                if not curve.is_sorted():
                    raise ProjectValidationError(
                        f"Curve {curve.abbr} in part {part.name!r} is not sorted."
                    )
