"""Favorite printers and their JSON file store."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Sequence, Union

logger = logging.getLogger(__name__)

MAX_FAVORITES = 20


def toggle_favorite(favorites: Sequence[str], printer_id: str, max_favorites: int = MAX_FAVORITES) -> List[str]:
    """Return a new list with ``printer_id`` removed, or appended if there is room.

    Adding past ``max_favorites`` leaves the list unchanged.
    """

    updated = list(favorites)
    if printer_id in updated:
        updated.remove(printer_id)
    elif len(updated) < max_favorites:
        updated.append(printer_id)
    return updated


class FavoritesStore:
    """Persist the ordered list of favorite printer ids as a JSON array."""

    def __init__(self, path: Union[str, Path], max_favorites: int = MAX_FAVORITES) -> None:
        self.path = Path(path)
        self.max_favorites = max_favorites

    def load(self) -> List[str]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load favorites from %s: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring favorites in %s: expected a list, got %s", self.path, type(data).__name__)
            return []
        ids = [str(item) for item in data if isinstance(item, (str, int)) and not isinstance(item, bool)]
        return ids[: self.max_favorites]

    def save(self, favorites: Sequence[str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(list(favorites)), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to save favorites to %s: %s", self.path, exc)


__all__ = ["MAX_FAVORITES", "toggle_favorite", "FavoritesStore"]
