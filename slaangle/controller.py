"""High level orchestration shared by the NiceGUI page and the HTTP API."""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .catalog import CatalogLoadError, load_catalog
from .config import CalculatorSettings, InputState, Printer, RawValue
from .engine import Derived, derive
from .favorites import FavoritesStore, toggle_favorite
from .navigation import KeyOutcome, clamp_highlight, close_dropdown, handle_key, open_dropdown
from .search import dropdown_items
from .validation import is_blank

logger = logging.getLogger(__name__)

STATUS_HISTORY = 250


@dataclass
class CalculatorController:
    """Single writer of the :class:`InputState`; reads go through :func:`derive`."""

    settings: CalculatorSettings = field(default_factory=CalculatorSettings)
    favorites_store: FavoritesStore = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.favorites_store is None:
            self.favorites_store = FavoritesStore(self.settings.favorites_path, self.settings.max_favorites)
        self.state = InputState.from_settings(self.settings)
        self.printers: List[Printer] = []
        self.status_messages: List[str] = []
        self._lock = threading.RLock()

    def _append_status(self, message: str) -> None:
        timestamp = time.strftime("%H:%M:%S")
        self.status_messages.append(f"[{timestamp}] {message}")
        del self.status_messages[:-STATUS_HISTORY]

    def _visible(self) -> List[Printer]:
        return dropdown_items(self.printers, self.state.search_query, self.state.favorites)

    def _clamp(self) -> None:
        self.state.highlighted_index = clamp_highlight(self.state.highlighted_index, len(self._visible()))

    # ------------------------------------------------------------------
    # Startup I/O
    # ------------------------------------------------------------------
    def load_favorites(self) -> List[str]:
        with self._lock:
            self.state.favorites = self.favorites_store.load()
            self._clamp()
            return list(self.state.favorites)

    def load_printers(self) -> List[Printer]:
        with self._lock:
            self.state.loading = True
            self.state.load_error = None
        try:
            printers = load_catalog(self.settings.catalog_source, timeout=self.settings.request_timeout)
        except CatalogLoadError as exc:
            logger.error("Printer load error (%s): %s", exc.kind.value, exc)
            with self._lock:
                self.printers = []
                self.state.load_error = exc.message
                self._append_status(exc.message)
        else:
            with self._lock:
                self.printers = printers
                self._append_status(f"Loaded {len(printers)} printers")
        finally:
            with self._lock:
                self.state.loading = False
                self._clamp()
        return list(self.printers)

    def startup(self) -> None:
        self.load_favorites()
        self.load_printers()

    # ------------------------------------------------------------------
    # Input mutations
    # ------------------------------------------------------------------
    def find_printer(self, printer_id: str) -> Optional[Printer]:
        for printer in self.printers:
            if printer.id == printer_id:
                return printer
        return None

    def select_printer(self, printer: Union[Printer, str]) -> Printer:
        with self._lock:
            if isinstance(printer, str):
                found = self.find_printer(printer)
                if found is None:
                    raise KeyError(f"Unknown printer: {printer}")
                printer = found
            self.state.selected_printer = printer
            self.state.manual_pixel_x = None
            self.state.manual_pixel_y = None
            self.state.search_query = ""
            close_dropdown(self.state)
            self._clamp()
            self._append_status(f"Selected {printer.display_name}")
            return printer

    def clear_selection(self) -> None:
        with self._lock:
            self.state.selected_printer = None
            self._clamp()

    def set_manual_pixel(self, axis: str, value: RawValue) -> None:
        if axis not in ("x", "y"):
            raise ValueError(f"Unknown axis: {axis!r}")
        with self._lock:
            # Typing a manual size switches back to manual mode.
            if not is_blank(value):
                self.state.selected_printer = None
            if axis == "x":
                self.state.manual_pixel_x = value
            else:
                self.state.manual_pixel_y = value
            self._clamp()

    def set_layer_height(self, value: RawValue) -> None:
        with self._lock:
            self.state.layer_height = value
            self._clamp()

    def set_search(self, query: str) -> None:
        with self._lock:
            self.state.search_query = query or ""
            self.state.highlighted_index = 0
            self._clamp()

    def toggle_favorite(self, printer_id: str) -> bool:
        """Toggle ``printer_id`` and persist; returns whether it is now a favorite."""
        with self._lock:
            before = self.state.favorites
            after = toggle_favorite(before, printer_id, self.settings.max_favorites)
            if after == before and printer_id not in before:
                self._append_status(f"Favorites are limited to {self.settings.max_favorites} printers")
            self.state.favorites = after
            self.favorites_store.save(after)
            self._clamp()
            return printer_id in after

    def is_favorite(self, printer_id: str) -> bool:
        return printer_id in self.state.favorites

    # ------------------------------------------------------------------
    # Dropdown
    # ------------------------------------------------------------------
    def open_dropdown(self) -> None:
        with self._lock:
            open_dropdown(self.state)

    def close_dropdown(self) -> None:
        with self._lock:
            close_dropdown(self.state)

    def visible_printers(self) -> List[Printer]:
        with self._lock:
            return self._visible()

    def handle_key(self, key: str) -> KeyOutcome:
        with self._lock:
            outcome = handle_key(self.state, key, self._visible())
            if outcome.selected is not None:
                self.select_printer(outcome.selected)
            return outcome

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def derived(self) -> Derived:
        with self._lock:
            return derive(self.state, self.printers, self.settings)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            state = self.state
            return {
                "input": {
                    "selected_printer": state.selected_printer.to_dict() if state.selected_printer else None,
                    "manual_pixel_x": state.manual_pixel_x,
                    "manual_pixel_y": state.manual_pixel_y,
                    "layer_height": state.layer_height,
                    "favorites": list(state.favorites),
                    "search_query": state.search_query,
                    "highlighted_index": state.highlighted_index,
                    "dropdown_open": state.dropdown_open,
                    "loading": state.loading,
                    "load_error": state.load_error,
                },
                "derived": self.derived().to_dict(),
            }


__all__ = ["CalculatorController"]
