from __future__ import annotations

"""Expression descriptors and the default expression set."""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import yaml

DEFAULT_EXPRESSIONS_PATH = Path(__file__).resolve().parent / "expressions.yaml"

VEL = "vel"
PITD = "pitd"


class ExpressionType(str, Enum):
    NUMERICAL = "numerical"
    CURVE = "curve"
    OPTIONS = "options"


@dataclass(frozen=True)
class ExpressionDescriptor:
    name: str
    abbr: str
    min: float
    max: float
    default_value: float
    type: ExpressionType = ExpressionType.NUMERICAL
    options: Tuple[str, ...] = field(default_factory=tuple)

    def clamp(self, value: float) -> float:
        if self.type == ExpressionType.OPTIONS or self.max < self.min:
            return value
        return max(self.min, min(self.max, value))


def _descriptor_from_dict(entry: Dict[str, Any]) -> ExpressionDescriptor:
    try:
        return ExpressionDescriptor(
            name=str(entry["name"]),
            abbr=str(entry["abbr"]).lower(),
            min=float(entry["min"]),
            max=float(entry["max"]),
            default_value=float(entry["default"]),
            type=ExpressionType(entry.get("type", "numerical")),
            options=tuple(str(option) for option in entry.get("options") or ()),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid expression entry: {entry!r}") from exc


def load_expressions(path: str | Path) -> List[ExpressionDescriptor]:
    """Load expression descriptors from a YAML list."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Expression config not found at {config_path}")
    data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Expression config must be a list: {config_path}")
    return [_descriptor_from_dict(entry) for entry in data]


@lru_cache(maxsize=1)
def default_expressions() -> Sequence[ExpressionDescriptor]:
    return tuple(load_expressions(DEFAULT_EXPRESSIONS_PATH))
