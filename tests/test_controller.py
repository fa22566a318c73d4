import json

from slaangle.config import CalculatorSettings
from slaangle.controller import CalculatorController
from slaangle.favorites import FavoritesStore


def test_startup_loads_catalog(controller):
    assert len(controller.printers) == 4
    assert not controller.state.loading
    assert controller.state.load_error is None


def test_catalog_failure_keeps_manual_mode_usable(tmp_path):
    settings = CalculatorSettings(catalog_source=tmp_path / "missing.json", favorites_path=tmp_path / "fav.json")
    ctrl = CalculatorController(settings=settings)
    ctrl.startup()
    assert ctrl.printers == []
    assert ctrl.state.load_error == "Printer database not found"
    ctrl.set_manual_pixel("x", 20)
    ctrl.set_manual_pixel("y", 20)
    assert ctrl.derived().angle_x.display == 21.8014


def test_selecting_a_printer_clears_manual_values(controller):
    controller.set_manual_pixel("x", 50)
    controller.set_manual_pixel("y", 60)
    controller.select_printer("mars-3")
    assert controller.state.manual_pixel_x is None
    assert controller.state.manual_pixel_y is None
    assert controller.derived().pixel_x == 35.0
    controller.clear_selection()
    assert controller.derived().pixel_x is None


def test_toggle_favorite_persists(controller, settings):
    assert controller.toggle_favorite("sonic-mini-8k") is True
    assert json.loads(settings.favorites_path.read_text(encoding="utf-8")) == ["sonic-mini-8k"]
    assert [p.id for p in controller.visible_printers()][0] == "sonic-mini-8k"
    assert controller.toggle_favorite("sonic-mini-8k") is False
    assert controller.state.favorites == []


def test_favorites_cap(controller):
    for i in range(20):
        controller.toggle_favorite(f"p{i}")
    assert controller.toggle_favorite("mars-3") is False
    assert len(controller.state.favorites) == 20
    assert "limited to 20" in controller.status_messages[-1]


def test_favorites_loaded_at_startup(settings):
    FavoritesStore(settings.favorites_path).save(["photon-m5s"])
    ctrl = CalculatorController(settings=settings)
    ctrl.startup()
    assert ctrl.is_favorite("photon-m5s")


def test_search_clamps_highlight(controller):
    controller.open_dropdown()
    controller.handle_key("End")
    assert controller.state.highlighted_index == 3
    controller.set_search("phrozen")
    assert controller.state.highlighted_index == 0
    assert [p.id for p in controller.visible_printers()] == ["sonic-mini-8k"]


def test_keyboard_selection(controller):
    controller.handle_key("ArrowDown")
    assert controller.state.dropdown_open
    controller.handle_key("ArrowDown")
    outcome = controller.handle_key("Enter")
    assert outcome.selected.id == "saturn-3-ultra"
    assert controller.state.selected_printer.id == "saturn-3-ultra"
    assert not controller.state.dropdown_open


def test_snapshot_shape(controller):
    controller.set_layer_height("abc")
    snap = controller.snapshot()
    assert snap["input"]["layer_height"] == "abc"
    assert snap["derived"]["errors"]["layer_height"] == "Please enter a valid number"
    assert snap["derived"]["angle_x"] is None


def test_manual_entry_switches_back_to_manual_mode(controller):
    controller.select_printer("mars-3")
    controller.set_manual_pixel("x", 20000)
    assert controller.state.selected_printer is None
    derived = controller.derived()
    assert derived.manual_mode
    assert derived.errors["manual_pixel_x"] == "Value must not exceed 10000μm"
    assert derived.angle_x is None


def test_blank_manual_entry_keeps_selection(controller):
    controller.select_printer("mars-3")
    controller.set_manual_pixel("y", "")
    controller.set_manual_pixel("x", None)
    assert controller.state.selected_printer.id == "mars-3"
    assert controller.derived().angle_x is not None


def test_catalog_reload_clamps_highlight(controller, catalog_file):
    controller.open_dropdown()
    controller.handle_key("End")
    assert controller.state.highlighted_index == 3
    shorter = json.loads(catalog_file.read_text(encoding="utf-8"))[:2]
    catalog_file.write_text(json.dumps(shorter), encoding="utf-8")
    controller.load_printers()
    assert controller.state.highlighted_index == 1
    catalog_file.unlink()
    controller.load_printers()
    assert controller.printers == []
    assert controller.state.highlighted_index == 0
