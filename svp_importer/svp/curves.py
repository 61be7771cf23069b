from __future__ import annotations

"""Rebuild pitch-deviation curves from SVP point lists."""

from typing import Iterator, Optional, Sequence, Tuple

from svp_importer.svp.units import blicks_to_ticks
from svp_importer.ustx import PITD, Curve, Project, VoicePart
from svp_importer.utils.logging_utils import get_logger

logger = get_logger(__name__)


def iter_point_pairs(points: Sequence[float]) -> Iterator[Tuple[float, float]]:
    """Yield (tick, value) pairs from a flat list; a dangling value is dropped."""
    for i in range(0, len(points) - 1, 2):
        yield points[i], points[i + 1]


def build_pitch_curve(
    project: Project,
    part: VoicePart,
    points: Optional[Sequence[float]],
    blick_offset: int,
) -> Optional[Curve]:
    """Return the pitch-deviation curve for a part, or None when it is skipped."""
    if not points:
        return None
    pairs = list(iter_point_pairs(points))
    if not pairs:
        return None
    if PITD not in project.expressions:
        logger.debug("SVP: pitch curve expression %s not found in project expressions", PITD)
        return None
    try:
        curve = Curve(PITD)
        last_x = 0
        last_y = 0
        for tick, cents in pairs:
            x = max(0, blicks_to_ticks(tick + blick_offset) - part.position)
            y = int(round(cents))
            curve.set(x, y, last_x, last_y)
            last_x, last_y = x, y
        curve.set(part.duration, last_y, last_x, 0)
    except Exception as exc:
        logger.debug("Failed to map pitchDelta into a curve; skipping. part=%r error=%s", part.name, exc)
        return None
    return curve
