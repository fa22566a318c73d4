"""Configuration models for the SLA angle calculator."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_CATALOG = PACKAGE_DIR / "data" / "printers.json"
DEFAULT_FAVORITES = Path.home() / ".slaangle" / "favorites.json"

# Raw host input: a number, the text of an input box, or nothing.
RawValue = Union[float, int, str, None]


@dataclass(frozen=True)
class Printer:
    """One entry of the printer catalog. Pixel pitch is in micrometres."""

    id: str
    manufacturer: str
    model: str
    pixel_x: float
    pixel_y: float

    @property
    def display_name(self) -> str:
        return f"{self.manufacturer} {self.model}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Printer":
        return cls(
            id=str(data["id"]),
            manufacturer=str(data["manufacturer"]),
            model=str(data["model"]),
            pixel_x=float(data["pixelX"]),
            pixel_y=float(data["pixelY"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "manufacturer": self.manufacturer,
            "model": self.model,
            "pixelX": self.pixel_x,
            "pixelY": self.pixel_y,
        }


@dataclass(frozen=True)
class FieldRange:
    """Inclusive bounds for a numeric input field."""

    minimum: float
    maximum: float


@dataclass(frozen=True)
class DiagramPlacement:
    """Where one diagram instance is drawn inside its viewbox."""

    name: str
    center_x: float = 100.0
    base_y: float = 170.0
    block_width: float = 60.0
    block_height: float = 110.0
    arc_radius: float = 40.0
    label_offset: float = 14.0
    label_dx: float = -10.0
    label_dy: float = -25.0
    view_width: float = 220.0
    view_height: float = 200.0


def _default_diagrams() -> Dict[str, DiagramPlacement]:
    return {
        "combined": DiagramPlacement(name="combined", arc_radius=40.0, label_dx=-10.0, label_dy=-25.0),
        "x": DiagramPlacement(name="x", arc_radius=36.0, label_offset=12.0, label_dx=-10.0, label_dy=-25.0),
        "y": DiagramPlacement(name="y", arc_radius=36.0, label_offset=12.0, label_dx=-7.0, label_dy=-25.0),
    }


@dataclass
class CalculatorSettings:
    """Aggregate settings for validation, angles, diagrams and storage."""

    pixel_range: FieldRange = field(default_factory=lambda: FieldRange(1, 10000))
    layer_range: FieldRange = field(default_factory=lambda: FieldRange(10, 200))
    default_layer_height: float = 50.0
    max_favorites: int = 20
    display_precision: int = 4
    fallback_angle: float = 45.0
    catalog_source: Union[str, Path] = DEFAULT_CATALOG
    favorites_path: Path = DEFAULT_FAVORITES
    request_timeout: float = 5.0
    diagrams: Dict[str, DiagramPlacement] = field(default_factory=_default_diagrams)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "CalculatorSettings":
        env = os.environ if environ is None else environ
        settings = cls()
        catalog = env.get("SLAANGLE_CATALOG")
        if catalog:
            settings.catalog_source = catalog
        favorites = env.get("SLAANGLE_FAVORITES")
        if favorites:
            settings.favorites_path = Path(favorites)
        return settings


@dataclass
class InputState:
    """Mutable source of truth written by the host UI."""

    selected_printer: Optional[Printer] = None
    manual_pixel_x: RawValue = None
    manual_pixel_y: RawValue = None
    layer_height: RawValue = 50.0
    favorites: List[str] = field(default_factory=list)
    search_query: str = ""
    highlighted_index: int = 0
    dropdown_open: bool = False
    loading: bool = False
    load_error: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: CalculatorSettings) -> "InputState":
        return cls(layer_height=settings.default_layer_height)


__all__ = [
    "RawValue",
    "Printer",
    "FieldRange",
    "DiagramPlacement",
    "CalculatorSettings",
    "InputState",
]
