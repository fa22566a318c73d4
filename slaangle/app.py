"""NiceGUI page for the SLA angle calculator."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from nicegui import app, events, ui

from .config import CalculatorSettings
from .controller import CalculatorController
from .engine import Derived
from .rendering import format_angle, render_diagram_svg

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Global state shared between UI and backend
# ---------------------------------------------------------------------------
settings = CalculatorSettings.from_env()
controller = CalculatorController(settings=settings)

# UI element references (populated in create_ui)
printer_label: Optional[ui.label] = None  # type: ignore[assignment]
search_input: Optional[ui.input] = None  # type: ignore[assignment]
printer_list: Optional[ui.column] = None  # type: ignore[assignment]
pixel_x_input: Optional[ui.input] = None  # type: ignore[assignment]
pixel_y_input: Optional[ui.input] = None  # type: ignore[assignment]
layer_input: Optional[ui.input] = None  # type: ignore[assignment]
error_labels: Dict[str, ui.label] = {}
results_column: Optional[ui.column] = None  # type: ignore[assignment]
diagram_row: Optional[ui.row] = None  # type: ignore[assignment]
status_area: Optional[ui.textarea] = None  # type: ignore[assignment]


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

def _render_printer_list(derived: Derived) -> None:
    if printer_list is None:
        return
    printer_list.clear()
    state = controller.state
    with printer_list:
        if state.loading:
            ui.label("Loading printers ...").classes("text-sm text-gray-500")
            return
        if state.load_error:
            ui.label(state.load_error).classes("text-sm text-red-600")
            return
        if not state.dropdown_open:
            return
        items = derived.visible_printers
        if not items:
            ui.label("No printers match your search.").classes("text-sm text-gray-500")
            return
        for index, printer in enumerate(items):
            highlighted = index == state.highlighted_index
            with ui.row().classes("items-center gap-2 w-full" + (" bg-blue-100" if highlighted else "")):
                star = "star" if controller.is_favorite(printer.id) else "star_border"
                ui.button(icon=star, on_click=lambda e, pid=printer.id: _toggle_favorite(pid)).props("flat dense round")
                ui.label(printer.display_name).classes("cursor-pointer grow").on(
                    "click", lambda e, p=printer: _select(p)
                )
                ui.label(f"{printer.pixel_x:g} × {printer.pixel_y:g} μm").classes("text-xs text-gray-500")


def _render_results(derived: Derived) -> None:
    if results_column is None or diagram_row is None:
        return
    results_column.clear()
    with results_column:
        if not derived.can_show_results:
            ui.label("Enter a pixel size and layer height to see the tilt angle.").classes("text-gray-500")
        elif derived.square_pixels:
            ui.label(f"Tilt angle: {format_angle(derived.angle_x.display, 4)}").classes("text-xl font-semibold")
            ui.label(f"Complementary: {format_angle(derived.angle_x.complement, 4)}")
        else:
            for axis, result in (("X", derived.angle_x), ("Y", derived.angle_y)):
                text = format_angle(result.display, 4) if result else format_angle(None)
                ui.label(f"Tilt angle {axis}: {text}").classes("text-lg font-semibold")
                if result:
                    ui.label(f"Complementary {axis}: {format_angle(result.complement, 4)}")
    diagram_row.clear()
    with diagram_row:
        for name, diagram in derived.diagrams.items():
            with ui.column().classes("items-center"):
                ui.label("Both axes" if name == "combined" else f"{name.upper()} axis").classes("text-sm")
                ui.html(render_diagram_svg(diagram)).classes("w-64 h-56")


def _refresh() -> None:
    derived = controller.derived()
    if printer_label is not None:
        selected = controller.state.selected_printer
        if selected is not None:
            printer_label.text = f"{selected.display_name} ({selected.pixel_x:g} × {selected.pixel_y:g} μm)"
        elif derived.manual_mode:
            printer_label.text = "Manual pixel size"
        else:
            printer_label.text = "No printer selected"
    for field_name, label in error_labels.items():
        label.text = derived.errors.get(field_name) or ""
    _render_printer_list(derived)
    _render_results(derived)
    if status_area is not None:
        status_area.value = "\n".join(controller.status_messages)


def _reset_inputs() -> None:
    # The on_change handlers see empty strings and leave the selection alone.
    for element in (pixel_x_input, pixel_y_input, search_input):
        if element is not None:
            element.value = ""


def _select(printer) -> None:
    controller.select_printer(printer)
    _reset_inputs()
    _refresh()


def _clear_selection() -> None:
    controller.clear_selection()
    _refresh()


def _toggle_favorite(printer_id: str) -> None:
    controller.toggle_favorite(printer_id)
    _refresh()


def _set_manual(axis: str, value) -> None:
    controller.set_manual_pixel(axis, value if value != "" else None)
    _refresh()


def _set_layer(value) -> None:
    controller.set_layer_height(value if value != "" else None)
    _refresh()


def _set_search(value) -> None:
    if value and not controller.state.dropdown_open:
        controller.open_dropdown()
    controller.set_search(value or "")
    _refresh()


def _handle_key(event: events.GenericEventArguments) -> None:
    key = (event.args or {}).get("key", "")
    outcome = controller.handle_key(key)
    if outcome.selected is not None:
        _reset_inputs()
    _refresh()


def _toggle_dropdown() -> None:
    if controller.state.dropdown_open:
        controller.close_dropdown()
    else:
        controller.open_dropdown()
        if search_input is not None:
            search_input.value = ""
    _refresh()


# ---------------------------------------------------------------------------
# UI construction
# ---------------------------------------------------------------------------

def create_ui() -> None:
    global printer_label, search_input, printer_list, pixel_x_input, pixel_y_input
    global layer_input, results_column, diagram_row, status_area

    ui.page_title("SLA Angle Calculator")
    ui.markdown("# SLA Angle Calculator")

    with ui.row().classes("w-full gap-6"):
        with ui.column().classes("w-1/3 gap-4"):
            with ui.card().classes("w-full"):
                ui.label("Printer").classes("text-lg font-semibold")
                printer_label = ui.label("No printer selected").classes("text-sm text-gray-600")
                search_input = ui.input(
                    label="Search printers", placeholder="Manufacturer or model",
                    on_change=lambda e: _set_search(e.value),
                ).classes("w-full")
                search_input.on("keydown", _handle_key, args=["key"])
                with ui.row().classes("gap-2"):
                    ui.button("Browse", on_click=_toggle_dropdown)
                    ui.button("Clear", on_click=_clear_selection)
                printer_list = ui.column().classes("w-full gap-1 max-h-80 overflow-auto")

            with ui.card().classes("w-full"):
                ui.label("Manual pixel size").classes("text-lg font-semibold")
                pixel_x_input = ui.input(label="Pixel X (μm)", on_change=lambda e: _set_manual("x", e.value))
                error_labels["manual_pixel_x"] = ui.label("").classes("text-xs text-red-600")
                pixel_y_input = ui.input(label="Pixel Y (μm)", on_change=lambda e: _set_manual("y", e.value))
                error_labels["manual_pixel_y"] = ui.label("").classes("text-xs text-red-600")

            with ui.card().classes("w-full"):
                ui.label("Layer").classes("text-lg font-semibold")
                layer_input = ui.input(
                    label="Layer height (μm)", value=f"{settings.default_layer_height:g}",
                    on_change=lambda e: _set_layer(e.value),
                )
                error_labels["layer_height"] = ui.label("").classes("text-xs text-red-600")

        with ui.column().classes("w-2/3 gap-4"):
            with ui.card().classes("w-full"):
                ui.label("Result").classes("text-lg font-semibold")
                results_column = ui.column().classes("gap-1")
            with ui.card().classes("w-full"):
                ui.label("Diagram").classes("text-lg font-semibold")
                diagram_row = ui.row().classes("gap-4")
            with ui.card().classes("w-full"):
                ui.label("Status log").classes("text-lg font-semibold")
                status_area = ui.textarea(value="", auto_resize=True)
                status_area.props("readonly")

    _refresh()


@app.get("/api/derived")
def api_derived() -> Dict:
    return controller.derived().to_dict()


def run(**kwargs) -> None:
    controller.startup()
    logger.info("Serving calculator with %d printers", len(controller.printers))
    ui.run(**kwargs)


@ui.page("/")
def index() -> None:
    create_ui()
