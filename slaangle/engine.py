"""Derived values of the calculator.

Every output is recomputed from a single :class:`InputState` snapshot when
asked for.  Nothing is cached; the host decides when to call :func:`derive`,
usually right after each input change.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .angles import AngleResult, angle_result, effective_pixel, has_square_pixels, is_manual_mode
from .config import CalculatorSettings, InputState, Printer
from .geometry import Diagram, build_diagram
from .search import filtered_list, partition_by_favorite
from .validation import is_valid, validation_errors


@dataclass(frozen=True)
class Derived:
    errors: Dict[str, Optional[str]]
    is_valid: bool
    pixel_x: Optional[float]
    pixel_y: Optional[float]
    square_pixels: bool
    manual_mode: bool
    angle_x: Optional[AngleResult]
    angle_y: Optional[AngleResult]
    diagrams: Dict[str, Diagram]
    favorite_printers: List[Printer] = field(default_factory=list)
    other_printers: List[Printer] = field(default_factory=list)

    @property
    def can_show_results(self) -> bool:
        return self.angle_x is not None and self.is_valid

    @property
    def visible_printers(self) -> List[Printer]:
        return self.favorite_printers + self.other_printers

    def to_dict(self) -> Dict[str, Any]:
        return {
            "errors": dict(self.errors),
            "is_valid": self.is_valid,
            "pixel_x": self.pixel_x,
            "pixel_y": self.pixel_y,
            "square_pixels": self.square_pixels,
            "manual_mode": self.manual_mode,
            "can_show_results": self.can_show_results,
            "angle_x": self.angle_x.to_dict() if self.angle_x else None,
            "angle_y": self.angle_y.to_dict() if self.angle_y else None,
            "diagrams": {name: diagram.to_dict() for name, diagram in self.diagrams.items()},
            "favorite_printers": [p.to_dict() for p in self.favorite_printers],
            "other_printers": [p.to_dict() for p in self.other_printers],
        }


def _diagrams(
    square: bool,
    angle_x: Optional[AngleResult],
    angle_y: Optional[AngleResult],
    settings: CalculatorSettings,
) -> Dict[str, Diagram]:
    placements = settings.diagrams
    fallback = settings.fallback_angle

    def raw(result: Optional[AngleResult]) -> Optional[float]:
        return result.raw if result is not None else None

    if square:
        return {"combined": build_diagram(raw(angle_x), placements["combined"], fallback_angle=fallback)}
    return {
        "x": build_diagram(raw(angle_x), placements["x"], fallback_angle=fallback),
        "y": build_diagram(raw(angle_y), placements["y"], fallback_angle=fallback),
    }


def derive(
    state: InputState,
    printers: Sequence[Printer] = (),
    settings: Optional[CalculatorSettings] = None,
) -> Derived:
    """Compute every derived value from ``state`` and the loaded ``printers``."""

    settings = settings or CalculatorSettings()
    errors = validation_errors(state, settings)
    valid = is_valid(errors)
    pixel_x = effective_pixel(state, "x")
    pixel_y = effective_pixel(state, "y")
    precision = settings.display_precision
    angle_x = angle_result(state.layer_height, pixel_x, valid=valid, precision=precision)
    angle_y = angle_result(state.layer_height, pixel_y, valid=valid, precision=precision)
    square = has_square_pixels(state)
    starred, others = partition_by_favorite(filtered_list(printers, state.search_query), state.favorites)
    return Derived(
        errors=errors,
        is_valid=valid,
        pixel_x=pixel_x,
        pixel_y=pixel_y,
        square_pixels=square,
        manual_mode=is_manual_mode(state),
        angle_x=angle_x,
        angle_y=angle_y,
        diagrams=_diagrams(square, angle_x, angle_y, settings),
        favorite_printers=starred,
        other_printers=others,
    )


class DerivationEngine:
    """:func:`derive` bound to a settings object and a printer list."""

    def __init__(self, settings: Optional[CalculatorSettings] = None, printers: Sequence[Printer] = ()) -> None:
        self.settings = settings or CalculatorSettings()
        self.printers: List[Printer] = list(printers)

    def derive(self, state: InputState) -> Derived:
        return derive(state, self.printers, self.settings)


__all__ = ["Derived", "derive", "DerivationEngine"]
