"""Pixel resolution and tilt angle calculation.

The tilt angle is measured from vertical: a wall inclined by this angle moves
sideways by exactly one pixel per printed layer, so its edge never shows the
stair-step pattern of the LCD grid.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import InputState, RawValue
from .validation import parse_number


@dataclass(frozen=True)
class AngleResult:
    """Angle for one axis.

    ``raw`` keeps full precision for geometry, ``display`` is rounded for the
    user and ``complement`` is ``90 - display``.
    """

    raw: float
    display: float
    complement: float

    def to_dict(self) -> Dict[str, Any]:
        return {"raw": self.raw, "display": self.display, "complement": self.complement}


def effective_pixel(state: InputState, axis: str) -> Optional[float]:
    """Pixel pitch for ``axis`` ("x" or "y"): the printer's, else the manual value."""

    if axis not in ("x", "y"):
        raise ValueError(f"Unknown axis: {axis!r}")
    if state.selected_printer is not None:
        return state.selected_printer.pixel_x if axis == "x" else state.selected_printer.pixel_y
    raw = state.manual_pixel_x if axis == "x" else state.manual_pixel_y
    return parse_number(raw)


def has_square_pixels(state: InputState) -> bool:
    # Both axes must be known; two missing values do not count as square.
    pixel_x = effective_pixel(state, "x")
    pixel_y = effective_pixel(state, "y")
    return pixel_x is not None and pixel_y is not None and pixel_x == pixel_y


def is_manual_mode(state: InputState) -> bool:
    return state.selected_printer is None and (
        state.manual_pixel_x is not None or state.manual_pixel_y is not None
    )


def calculate_angle(
    layer_height: RawValue,
    pixel_size: RawValue,
    *,
    valid: bool = True,
    precision: Optional[int] = None,
) -> Optional[float]:
    """Return ``atan(pixel_size / layer_height)`` in degrees, or ``None``.

    ``None`` is returned whenever the overall input is invalid or either
    argument is missing or not strictly positive.
    """

    if not valid:
        return None
    layer = parse_number(layer_height)
    pixel = parse_number(pixel_size)
    if layer is None or layer <= 0:
        return None
    if pixel is None or pixel <= 0:
        return None
    degrees = math.degrees(math.atan(pixel / layer))
    if precision is not None:
        return round(degrees, precision)
    return degrees


def complementary_angle(angle: Optional[float]) -> Optional[float]:
    if angle is None:
        return None
    return 90 - angle


def angle_result(
    layer_height: RawValue,
    pixel_size: RawValue,
    *,
    valid: bool = True,
    precision: int = 4,
) -> Optional[AngleResult]:
    raw = calculate_angle(layer_height, pixel_size, valid=valid)
    if raw is None:
        return None
    display = round(raw, precision)
    return AngleResult(raw=raw, display=display, complement=90 - display)


__all__ = [
    "AngleResult",
    "effective_pixel",
    "has_square_pixels",
    "is_manual_mode",
    "calculate_angle",
    "complementary_angle",
    "angle_result",
]
