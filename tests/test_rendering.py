from slaangle.config import DiagramPlacement
from slaangle.geometry import build_diagram
from slaangle.rendering import format_angle, render_diagram_svg


def test_format_angle():
    assert format_angle(21.80140948, 4) == "21.8014°"
    assert format_angle(None) == "—"


def test_svg_contains_block_and_arc():
    diagram = build_diagram(30.0, DiagramPlacement(name="x"))
    svg = render_diagram_svg(diagram)
    assert svg.startswith("<svg")
    assert f'points="{diagram.block.svg_points()}"' in svg
    assert diagram.arc.d in svg
    assert "30.0°" in svg
    assert ">wall<" in svg


def test_fallback_diagram_is_marked():
    svg = render_diagram_svg(build_diagram(None, DiagramPlacement(name="x")), label="?")
    assert ">example<" in svg
    assert ">?<" in svg
