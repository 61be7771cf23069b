from __future__ import annotations

"""Build tracks and voice parts from SVP track descriptors."""

from typing import List, Optional

from svp_importer.svp.curves import build_pitch_curve
from svp_importer.svp.schema import Group, Note, NoteAttributes, Project as SvpProject, Reference, Track as SvpTrack
from svp_importer.svp.units import blicks_to_ticks
from svp_importer.ustx import VEL, Expression, Project, Track, Vibrato, VoicePart
from svp_importer.ustx import Note as ProjectNote
from svp_importer.utils.logging_utils import get_logger

logger = get_logger(__name__)

CONTINUATION_LYRIC = "+"
PLACEHOLDER_PART_NAME = "Part"
# The source schema carries no per-note velocity.
DEFAULT_VELOCITY = 100


def build_tracks(project: Project, tracks: List[SvpTrack]) -> None:
    """Create one project track per descriptor, in the given order."""
    for index, descriptor in enumerate(tracks):
        name = descriptor.name if descriptor.name and descriptor.name.strip() else f"Track {index + 1}"
        project.tracks.append(
            Track(
                track_no=index,
                name=name,
                muted=descriptor.render_enabled is False,
            )
        )


def resolve_track(project: Project, disp_order: int) -> Track:
    index = disp_order if disp_order >= 0 else len(project.tracks)
    if 0 <= index < len(project.tracks):
        return project.tracks[index]
    if project.tracks:
        return project.tracks[0]
    logger.debug("SVP: no track available for dispOrder=%s; creating a default track.", disp_order)
    track = Track(track_no=0, name="Track 1")
    project.tracks.append(track)
    return track


def place_parts(project: Project, svp_project: SvpProject, tracks: List[SvpTrack]) -> None:
    """Place the inline main group and every library reference of each track."""
    for descriptor in tracks:
        track = resolve_track(project, descriptor.disp_order)
        if descriptor.main_group is not None and descriptor.main_ref is not None:
            build_voice_part(project, track, descriptor.main_ref, descriptor.main_group)
        for ref in descriptor.groups or []:
            group = svp_project.find_group(ref.group_id)
            if group is None:
                logger.debug("SVP: group %s not found in library; adding an empty part.", ref.group_id)
                group = Group(name=PLACEHOLDER_PART_NAME)
            build_voice_part(project, track, ref, group)


def build_voice_part(project: Project, track: Track, ref: Reference, group: Group) -> VoicePart:
    part = VoicePart(name=group.name or "", comment="", track_no=track.track_no)
    if not group.notes:
        part.position = blicks_to_ticks(ref.blick_offset)
        part.duration = 0
        project.parts.append(part)
        return part

    start = min(note.onset + ref.blick_offset for note in group.notes)
    end = max(note.onset + note.duration + ref.blick_offset for note in group.notes)
    part.position = blicks_to_ticks(start)
    part.duration = blicks_to_ticks(end - start)

    for note in group.notes:
        part.notes.append(_build_note(project, note, ref, start))

    points = None
    if group.parameters is not None and group.parameters.pitch_delta is not None:
        points = group.parameters.pitch_delta.points
    curve = build_pitch_curve(project, part, points, ref.blick_offset)
    if curve is not None:
        part.curves.append(curve)

    project.parts.append(part)
    return part


def _build_note(project: Project, note: Note, ref: Reference, part_start: int) -> ProjectNote:
    result = project.create_note()
    result.position = blicks_to_ticks(note.onset + ref.blick_offset - part_start)
    result.duration = blicks_to_ticks(note.duration)
    result.tone = note.pitch + ref.pitch_offset
    result.lyric = normalize_lyric(note.lyrics)
    if note.phonemes and note.phonemes.strip():
        result.phoneme_override = note.phonemes
    if VEL in project.expressions:
        result.phoneme_expressions.append(Expression(abbr=VEL, index=0, value=DEFAULT_VELOCITY))
    if note.attributes is not None:
        apply_vibrato(result.vibrato, note.attributes)
    return result


def normalize_lyric(lyric: Optional[str]) -> str:
    if not lyric or not lyric.strip() or lyric == "-":
        return CONTINUATION_LYRIC
    return lyric


def apply_vibrato(vibrato: Vibrato, attributes: NoteAttributes) -> None:
    if attributes.t_f0_vbr_start is not None:
        vibrato.fade_in = attributes.t_f0_vbr_start
    if attributes.t_f0_vbr_left is not None:
        vibrato.length = attributes.t_f0_vbr_left
    if attributes.t_f0_vbr_right is not None:
        vibrato.fade_out = attributes.t_f0_vbr_right
    if attributes.d_f0_vbr is not None:
        vibrato.depth = attributes.d_f0_vbr
    if attributes.f_f0_vbr is not None:
        vibrato.period = attributes.f_f0_vbr
