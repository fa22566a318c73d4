"""Geometry for the tilted cross-section diagrams.

Diagram coordinates follow SVG conventions: X grows to the right and Y grows
downwards.  Angles passed to the arc helpers are measured counterclockwise
from the positive X axis as on paper, so the Y component is inverted when
converting to diagram coordinates.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .config import DiagramPlacement

XY = Tuple[float, float]


def fmt_coord(value: float) -> str:
    text = f"{value:.2f}"
    return "0.00" if text == "-0.00" else text


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TiltedRectangle:
    """Rectangle rotated about its bottom-left corner and re-seated on the base line."""

    bottom_left: XY
    bottom_right: XY
    top_right: XY
    top_left: XY

    @property
    def corners(self) -> List[XY]:
        return [self.bottom_left, self.bottom_right, self.top_right, self.top_left]

    @property
    def polygon_points(self) -> List[XY]:
        """Corners as a closed ring (first point repeated)."""
        pts = self.corners
        return pts + [pts[0]]

    @property
    def left_edge(self) -> Tuple[XY, XY]:
        return self.bottom_left, self.top_left

    def svg_points(self) -> str:
        return " ".join(f"{fmt_coord(x)},{fmt_coord(y)}" for x, y in self.corners)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "corners": {
                "bottom_left": list(self.bottom_left),
                "bottom_right": list(self.bottom_right),
                "top_right": list(self.top_right),
                "top_left": list(self.top_left),
            },
            "polygon_points": self.svg_points(),
            "left_edge": [list(p) for p in self.left_edge],
        }


@dataclass(frozen=True)
class ArcPath:
    """Circular arc described the way an SVG ``A`` command needs it."""

    center: XY
    radius: float
    start: XY
    end: XY
    large_arc: bool
    sweep: bool

    @property
    def d(self) -> str:
        return (
            f"M {fmt_coord(self.start[0])} {fmt_coord(self.start[1])} "
            f"A {fmt_coord(self.radius)} {fmt_coord(self.radius)} 0 {int(self.large_arc)} {int(self.sweep)} "
            f"{fmt_coord(self.end[0])} {fmt_coord(self.end[1])}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "center": list(self.center),
            "radius": self.radius,
            "start": list(self.start),
            "end": list(self.end),
            "large_arc": self.large_arc,
            "sweep": self.sweep,
            "d": self.d,
        }


def _polar(center_x: float, center_y: float, radius: float, angle_deg: float) -> XY:
    a = math.radians(angle_deg)
    return (center_x + radius * math.cos(a), center_y - radius * math.sin(a))


def _rotate_cw(point: XY, pivot: XY, angle_deg: float) -> XY:
    # With Y pointing down the usual rotation matrix turns clockwise on screen.
    theta = math.radians(angle_deg)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    dx = point[0] - pivot[0]
    dy = point[1] - pivot[1]
    return (pivot[0] + dx * cos_t - dy * sin_t, pivot[1] + dx * sin_t + dy * cos_t)


def tilted_rectangle(
    center_x: float,
    base_y: float,
    width: float,
    height: float,
    angle_deg: float,
) -> TiltedRectangle:
    """Tilt an upright block clockwise by ``angle_deg`` about its bottom-left corner.

    After the rotation the block is moved vertically so that its lowest
    corner rests on ``base_y`` again.
    """

    left = center_x - width / 2.0
    right = center_x + width / 2.0
    top = base_y - height
    pivot = (left, base_y)
    rotated = [
        _rotate_cw(p, pivot, angle_deg)
        for p in ((left, base_y), (right, base_y), (right, top), (left, top))
    ]
    lowest = max(y for _, y in rotated)
    # Measured from the lowest corner so that corner lands on base_y exactly.
    seated = [(x, base_y - (lowest - y)) for x, y in rotated]
    return TiltedRectangle(*seated)


def angle_arc(
    center_x: float,
    center_y: float,
    radius: float,
    start_angle: float,
    end_angle: float,
    sweep: bool = False,
) -> ArcPath:
    """Arc from ``start_angle`` to ``end_angle`` (degrees, counterclockwise from +X)."""

    span = abs(end_angle - start_angle)
    return ArcPath(
        center=(center_x, center_y),
        radius=radius,
        start=_polar(center_x, center_y, radius, start_angle),
        end=_polar(center_x, center_y, radius, end_angle),
        large_arc=span > 180.0,
        sweep=bool(sweep),
    )


def label_position(
    center_x: float,
    center_y: float,
    radius: float,
    start_angle: float,
    end_angle: float,
    offset: float,
) -> XY:
    """Point on the bisector of the arc, ``offset`` beyond its radius."""

    return _polar(center_x, center_y, radius + offset, (start_angle + end_angle) / 2.0)


# ---------------------------------------------------------------------------
# Diagram assembly
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Diagram:
    """Everything needed to draw one tilted cross-section."""

    name: str
    angle: float
    fallback: bool
    block: TiltedRectangle
    pivot: XY
    reference_line: Tuple[XY, XY]
    arc: ArcPath
    angle_label: XY
    edge_label: XY
    base_line: Tuple[XY, XY]
    view_box: Tuple[float, float, float, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "angle": self.angle,
            "fallback": self.fallback,
            "block": self.block.to_dict(),
            "pivot": list(self.pivot),
            "reference_line": [list(p) for p in self.reference_line],
            "arc": self.arc.to_dict(),
            "angle_label": list(self.angle_label),
            "edge_label": list(self.edge_label),
            "base_line": [list(p) for p in self.base_line],
            "view_box": list(self.view_box),
        }


def build_diagram(
    angle_deg: Optional[float],
    placement: DiagramPlacement,
    *,
    fallback_angle: float = 45.0,
) -> Diagram:
    """Lay out one diagram; a missing angle is drawn at ``fallback_angle``."""

    fallback = angle_deg is None
    angle = fallback_angle if angle_deg is None else float(angle_deg)
    block = tilted_rectangle(
        placement.center_x,
        placement.base_y,
        placement.block_width,
        placement.block_height,
        angle,
    )
    pivot = block.bottom_left
    # The left face leans away from vertical (90 degrees) by the tilt angle.
    start = 90.0 - angle
    end = 90.0
    arc = angle_arc(pivot[0], pivot[1], placement.arc_radius, start, end, sweep=False)
    reference_top = (pivot[0], pivot[1] - (placement.arc_radius + placement.label_offset * 2))
    angle_label = label_position(pivot[0], pivot[1], placement.arc_radius, start, end, placement.label_offset)
    top_left = block.top_left
    edge_label = (top_left[0] + placement.label_dx, top_left[1] + placement.label_dy)
    return Diagram(
        name=placement.name,
        angle=angle,
        fallback=fallback,
        block=block,
        pivot=pivot,
        reference_line=(pivot, reference_top),
        arc=arc,
        angle_label=angle_label,
        edge_label=edge_label,
        base_line=((0.0, placement.base_y), (placement.view_width, placement.base_y)),
        view_box=(0.0, 0.0, placement.view_width, placement.view_height),
    )


__all__ = [
    "XY",
    "TiltedRectangle",
    "ArcPath",
    "Diagram",
    "tilted_rectangle",
    "angle_arc",
    "label_position",
    "build_diagram",
]
