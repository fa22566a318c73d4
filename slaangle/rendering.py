"""SVG markup for a :class:`~slaangle.geometry.Diagram`."""
from __future__ import annotations

from typing import Optional

from .geometry import Diagram, fmt_coord

BLOCK_FILL = "#dbeafe"
BLOCK_STROKE = "#1e3a8a"
EDGE_STROKE = "#dc2626"
GUIDE_STROKE = "#6b7280"


def format_angle(value: Optional[float], precision: int = 2) -> str:
    if value is None:
        return "—"
    return f"{value:.{precision}f}°"


def render_diagram_svg(diagram: Diagram, *, label: Optional[str] = None) -> str:
    """Draw the tilted block, the vertical guide and the angle arc."""

    x0, y0, width, height = diagram.view_box
    (bx0, by0), (bx1, by1) = diagram.base_line
    (rx0, ry0), (rx1, ry1) = diagram.reference_line
    (ex0, ey0), (ex1, ey1) = diagram.block.left_edge
    text = label if label is not None else format_angle(diagram.angle, 1)
    elements = [
        f'<line x1="{fmt_coord(bx0)}" y1="{fmt_coord(by0)}" x2="{fmt_coord(bx1)}" y2="{fmt_coord(by1)}" '
        f'stroke="{GUIDE_STROKE}" stroke-width="1" />',
        f'<polygon points="{diagram.block.svg_points()}" fill="{BLOCK_FILL}" '
        f'stroke="{BLOCK_STROKE}" stroke-width="1.5" />',
        f'<line x1="{fmt_coord(ex0)}" y1="{fmt_coord(ey0)}" x2="{fmt_coord(ex1)}" y2="{fmt_coord(ey1)}" '
        f'stroke="{EDGE_STROKE}" stroke-width="3" />',
        f'<line x1="{fmt_coord(rx0)}" y1="{fmt_coord(ry0)}" x2="{fmt_coord(rx1)}" y2="{fmt_coord(ry1)}" '
        f'stroke="{GUIDE_STROKE}" stroke-width="1" stroke-dasharray="4 3" />',
        f'<path d="{diagram.arc.d}" fill="none" stroke="{EDGE_STROKE}" stroke-width="1.5" />',
        f'<text x="{fmt_coord(diagram.angle_label[0])}" y="{fmt_coord(diagram.angle_label[1])}" '
        f'font-size="11" text-anchor="middle" fill="{EDGE_STROKE}">{text}</text>',
    ]
    caption = "example" if diagram.fallback else "wall"
    elements.append(
        f'<text x="{fmt_coord(diagram.edge_label[0])}" y="{fmt_coord(diagram.edge_label[1])}" '
        f'font-size="9" fill="{GUIDE_STROKE}">{caption}</text>'
    )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{fmt_coord(x0)} {fmt_coord(y0)} {fmt_coord(width)} {fmt_coord(height)}" '
        f'preserveAspectRatio="xMidYMid meet">' + "".join(elements) + "</svg>"
    )


__all__ = ["format_angle", "render_diagram_svg"]
