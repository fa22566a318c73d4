"""Per-field validation of the numeric inputs."""

from __future__ import annotations

import math
from typing import Dict, Optional

from .config import CalculatorSettings, InputState, RawValue

INVALID_NUMBER = "Please enter a valid number"


def parse_number(value: RawValue) -> Optional[float]:
    """Return ``value`` as a finite float, or ``None`` if it is not one."""

    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def is_blank(value: RawValue) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _fmt_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def validate(value: RawValue, minimum: float = 1, maximum: float = 10000) -> Optional[str]:
    """Return an error message for ``value`` or ``None`` when it is acceptable.

    Empty input is not an error because every field is optional.
    """

    if is_blank(value):
        return None
    number = parse_number(value)
    if number is None:
        return INVALID_NUMBER
    if number < minimum:
        return f"Value must be at least {_fmt_bound(minimum)}μm"
    if number > maximum:
        return f"Value must not exceed {_fmt_bound(maximum)}μm"
    return None


def validation_errors(state: InputState, settings: Optional[CalculatorSettings] = None) -> Dict[str, Optional[str]]:
    settings = settings or CalculatorSettings()
    pixel = settings.pixel_range
    layer = settings.layer_range
    # Manual sizes are ignored while a printer is selected.
    manual = state.selected_printer is None
    return {
        "manual_pixel_x": validate(state.manual_pixel_x, pixel.minimum, pixel.maximum) if manual else None,
        "manual_pixel_y": validate(state.manual_pixel_y, pixel.minimum, pixel.maximum) if manual else None,
        "layer_height": validate(state.layer_height, layer.minimum, layer.maximum),
    }


def is_valid(errors: Dict[str, Optional[str]]) -> bool:
    return all(message is None for message in errors.values())


__all__ = ["INVALID_NUMBER", "parse_number", "is_blank", "validate", "validation_errors", "is_valid"]
