"""Time unit conversion between SVP blicks and project ticks."""

TICK_RATE = 1470000


def blicks_to_ticks(blicks: float) -> int:
    """Convert blicks to ticks, truncating toward zero."""
    return int(blicks / TICK_RATE) if isinstance(blicks, float) else _trunc_div(int(blicks))


def _trunc_div(blicks: int) -> int:
    quotient = abs(blicks) // TICK_RATE
    return quotient if blicks >= 0 else -quotient
