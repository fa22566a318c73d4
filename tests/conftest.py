from __future__ import annotations

import json
from pathlib import Path

import pytest

from slaangle.config import CalculatorSettings, Printer
from slaangle.controller import CalculatorController
from slaangle.favorites import FavoritesStore

PRINTERS = [
    Printer("mars-3", "Elegoo", "Mars 3", 35.0, 35.0),
    Printer("saturn-3-ultra", "Elegoo", "Saturn 3 Ultra", 19.0, 24.0),
    Printer("sonic-mini-8k", "Phrozen", "Sonic Mini 8K", 22.0, 22.0),
    Printer("photon-m5s", "Anycubic", "Photon Mono M5s", 19.0, 24.0),
]


@pytest.fixture
def printers():
    return list(PRINTERS)


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "printers.json"
    path.write_text(json.dumps([p.to_dict() for p in PRINTERS]), encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path: Path, catalog_file: Path) -> CalculatorSettings:
    return CalculatorSettings(catalog_source=catalog_file, favorites_path=tmp_path / "favorites.json")


@pytest.fixture
def controller(settings: CalculatorSettings) -> CalculatorController:
    ctrl = CalculatorController(
        settings=settings,
        favorites_store=FavoritesStore(settings.favorites_path, settings.max_favorites),
    )
    ctrl.startup()
    return ctrl
