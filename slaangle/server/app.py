"""FastAPI application exposing the calculator as a JSON API."""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..config import CalculatorSettings, InputState, Printer
from ..controller import CalculatorController
from ..engine import derive

INPUT_FIELDS = ("manual_pixel_x", "manual_pixel_y", "layer_height", "search_query", "printer_id")


def create_controller(settings: Optional[CalculatorSettings] = None) -> CalculatorController:
    controller = CalculatorController(settings=settings or CalculatorSettings.from_env())
    controller.startup()
    return controller


def _state_from_payload(payload: Dict[str, Any], controller: CalculatorController) -> InputState:
    state = InputState.from_settings(controller.settings)
    printer = payload.get("printer")
    printer_id = payload.get("printer_id")
    if isinstance(printer, dict):
        try:
            state.selected_printer = Printer.from_dict(printer)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed printer: {exc}") from exc
    elif printer_id is not None:
        state.selected_printer = controller.find_printer(str(printer_id))
        if state.selected_printer is None:
            raise KeyError(f"Unknown printer: {printer_id}")
    else:
        state.manual_pixel_x = payload.get("manual_pixel_x")
        state.manual_pixel_y = payload.get("manual_pixel_y")
    if "layer_height" in payload:
        state.layer_height = payload["layer_height"]
    state.search_query = str(payload.get("search_query") or "")
    state.favorites = [str(f) for f in payload.get("favorites", controller.state.favorites)]
    return state


def create_app(controller: CalculatorController) -> FastAPI:
    app = FastAPI(title="SLA Angle Calculator")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.controller = controller

    @app.get("/api/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/printers")
    def printers() -> Dict[str, Any]:
        return {
            "printers": [p.to_dict() for p in controller.printers],
            "error": controller.state.load_error,
        }

    @app.get("/api/state")
    def get_state() -> Dict[str, Any]:
        return controller.snapshot()

    @app.post("/api/state")
    def post_state(payload: Dict[str, Any]) -> Dict[str, Any]:
        unknown = sorted(set(payload) - set(INPUT_FIELDS))
        if unknown:
            raise HTTPException(status_code=400, detail=f"Unknown fields: {', '.join(unknown)}")
        if "manual_pixel_x" in payload:
            controller.set_manual_pixel("x", payload["manual_pixel_x"])
        if "manual_pixel_y" in payload:
            controller.set_manual_pixel("y", payload["manual_pixel_y"])
        # A printer chosen in the same request wins over manual sizes.
        if "printer_id" in payload:
            if payload["printer_id"] is None:
                controller.clear_selection()
            else:
                try:
                    controller.select_printer(str(payload["printer_id"]))
                except KeyError as exc:
                    raise HTTPException(status_code=404, detail=str(exc)) from exc
        if "layer_height" in payload:
            controller.set_layer_height(payload["layer_height"])
        if "search_query" in payload:
            controller.set_search(str(payload["search_query"] or ""))
        return controller.snapshot()

    @app.post("/api/derive")
    def post_derive(payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            state = _state_from_payload(payload, controller)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except (TypeError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return derive(state, controller.printers, controller.settings).to_dict()

    @app.post("/api/favorites/{printer_id}")
    def post_favorite(printer_id: str) -> Dict[str, Any]:
        favorite = controller.toggle_favorite(printer_id)
        return {"ok": True, "favorite": favorite, "favorites": list(controller.state.favorites)}

    @app.post("/api/key")
    def post_key(payload: Dict[str, Any]) -> Dict[str, Any]:
        key = payload.get("key")
        if not isinstance(key, str):
            raise HTTPException(status_code=400, detail="key is required")
        outcome = controller.handle_key(key)
        return {
            "selected": outcome.selected.to_dict() if outcome.selected else None,
            "prevent_default": outcome.prevent_default,
            "dropdown_open": controller.state.dropdown_open,
            "highlighted_index": controller.state.highlighted_index,
        }

    return app


app = create_app(create_controller())


__all__ = ["app", "create_app", "create_controller"]
