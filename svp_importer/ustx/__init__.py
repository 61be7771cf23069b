from .curve import Curve
from .expressions import PITD, VEL, ExpressionDescriptor, ExpressionType, default_expressions
from .project import (
    RESOLUTION,
    Expression,
    Note,
    Project,
    ProjectValidationError,
    Tempo,
    TimeSignature,
    Track,
    Vibrato,
    VoicePart,
)

__all__ = [
    "Curve",
    "Expression",
    "ExpressionDescriptor",
    "ExpressionType",
    "Note",
    "PITD",
    "Project",
    "ProjectValidationError",
    "RESOLUTION",
    "Tempo",
    "TimeSignature",
    "Track",
    "VEL",
    "Vibrato",
    "VoicePart",
    "default_expressions",
]
