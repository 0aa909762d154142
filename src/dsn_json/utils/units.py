"""Unit conversion for Specctra DSN lengths."""

from __future__ import annotations

# Specctra assumes inches when a design declares no unit
DEFAULT_UNIT = "inch"

MM_PER_UNIT = {
    "inch": 25.4,
    "mil": 0.0254,
    "cm": 10.0,
    "mm": 1.0,
    "um": 0.001,
}


def to_mm(value: float, unit: str) -> float:
    """Convert a DSN length to millimeters.

    Args:
        value: Numeric value to convert.
        unit: Source unit - one of 'inch', 'mil', 'cm', 'mm', 'um'.

    Returns:
        Value in millimeters.

    Raises:
        ValueError: If unit is not recognized.
    """
    key = unit.lower().strip()
    if key not in MM_PER_UNIT:
        raise ValueError(f"Unknown unit '{unit}'. Supported: {', '.join(MM_PER_UNIT)}")
    return value * MM_PER_UNIT[key]


def from_mm(value: float, unit: str) -> float:
    """Convert millimeters to a DSN unit."""
    key = unit.lower().strip()
    if key not in MM_PER_UNIT:
        raise ValueError(f"Unknown unit '{unit}'. Supported: {', '.join(MM_PER_UNIT)}")
    return value / MM_PER_UNIT[key]
