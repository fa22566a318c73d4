"""Loading the static printer catalog from a file or URL."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, List, Union

import requests

from .config import Printer

logger = logging.getLogger(__name__)


class LoadErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"
    NETWORK = "network"
    GENERIC = "generic"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    LoadErrorKind.NOT_FOUND: "Printer database not found",
    LoadErrorKind.MALFORMED: "Printer database is corrupted",
    LoadErrorKind.NETWORK: "Network error while loading the printer database",
    LoadErrorKind.GENERIC: "Failed to load printer database",
}


class CatalogLoadError(RuntimeError):
    """Raised when the printer catalog cannot be read or understood."""

    def __init__(self, kind: LoadErrorKind, detail: str = "") -> None:
        super().__init__(detail or kind.message)
        self.kind = kind
        self.detail = detail

    @property
    def message(self) -> str:
        return self.kind.message


def parse_catalog(payload: Any) -> List[Printer]:
    """Convert decoded JSON into printers, rejecting anything malformed."""

    if not isinstance(payload, list):
        raise CatalogLoadError(LoadErrorKind.MALFORMED, "catalog must be a JSON array")
    printers: List[Printer] = []
    for index, record in enumerate(payload):
        if not isinstance(record, dict):
            raise CatalogLoadError(LoadErrorKind.MALFORMED, f"entry {index} is not an object")
        try:
            printer = Printer.from_dict(record)
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogLoadError(LoadErrorKind.MALFORMED, f"entry {index}: {exc}") from exc
        if printer.pixel_x <= 0 or printer.pixel_y <= 0:
            raise CatalogLoadError(LoadErrorKind.MALFORMED, f"entry {index}: pixel size must be positive")
        printers.append(printer)
    return printers


def _is_url(source: Union[str, Path]) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def _fetch_url(url: str, timeout: float) -> Any:
    try:
        response = requests.get(url, timeout=timeout)
    except (requests.ConnectionError, requests.Timeout) as exc:
        raise CatalogLoadError(LoadErrorKind.NETWORK, str(exc)) from exc
    except requests.RequestException as exc:
        raise CatalogLoadError(LoadErrorKind.GENERIC, str(exc)) from exc
    if response.status_code == 404:
        raise CatalogLoadError(LoadErrorKind.NOT_FOUND, f"HTTP 404 for {url}")
    if not response.ok:
        raise CatalogLoadError(LoadErrorKind.GENERIC, f"HTTP {response.status_code}")
    try:
        return response.json()
    except ValueError as exc:
        raise CatalogLoadError(LoadErrorKind.MALFORMED, str(exc)) from exc


def _read_file(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise CatalogLoadError(LoadErrorKind.NOT_FOUND, str(exc)) from exc
    except OSError as exc:
        raise CatalogLoadError(LoadErrorKind.GENERIC, str(exc)) from exc
    try:
        return json.loads(text)
    except ValueError as exc:
        raise CatalogLoadError(LoadErrorKind.MALFORMED, str(exc)) from exc


def load_catalog(source: Union[str, Path], *, timeout: float = 5.0) -> List[Printer]:
    """Read and parse the catalog from a local path or an ``http(s)`` URL."""

    if _is_url(source):
        payload = _fetch_url(str(source), timeout)
    else:
        payload = _read_file(Path(source))
    printers = parse_catalog(payload)
    logger.info("Loaded %d printers from %s", len(printers), source)
    return printers


__all__ = ["LoadErrorKind", "CatalogLoadError", "parse_catalog", "load_catalog"]
