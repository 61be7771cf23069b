from __future__ import annotations

"""Time signatures and tempo map from a decoded SVP project."""

from typing import List

from svp_importer.svp.schema import TimeAxis
from svp_importer.svp.units import blicks_to_ticks
from svp_importer.ustx import Tempo, TimeSignature
from svp_importer.utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_BPM = 120.0


def build_time_signatures(time: TimeAxis) -> List[TimeSignature]:
    if not time.meter:
        logger.warning("SVP: no time signatures found; defaulting to 4/4.")
        return [TimeSignature(bar_position=0, beat_per_bar=4, beat_unit=4)]
    signatures = [
        TimeSignature(
            bar_position=meter.index,
            beat_per_bar=meter.numerator,
            beat_unit=meter.denominator,
        )
        for meter in time.meter
    ]
    signatures.sort(key=lambda sig: sig.bar_position)
    signatures[0].bar_position = 0
    return signatures


def build_tempos(time: TimeAxis) -> List[Tempo]:
    if not time.tempo:
        logger.warning("SVP: no tempos found; defaulting to %s BPM.", DEFAULT_BPM)
        return [Tempo(position=0, bpm=DEFAULT_BPM)]
    tempos = [
        Tempo(position=blicks_to_ticks(tempo.position), bpm=tempo.bpm)
        for tempo in time.tempo
    ]
    tempos.sort(key=lambda tempo: tempo.position)
    tempos[0].position = 0
    return tempos
