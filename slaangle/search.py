"""Printer search and favorites-first ordering for the selection list."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .config import Printer


def filtered_list(printers: Sequence[Printer], query: str) -> List[Printer]:
    """Printers whose "manufacturer model" contains ``query``, ignoring case."""

    needle = (query or "").strip().lower()
    if not needle:
        return list(printers)
    return [p for p in printers if needle in p.display_name.lower()]


def partition_by_favorite(
    printers: Sequence[Printer], favorite_ids: Iterable[str]
) -> Tuple[List[Printer], List[Printer]]:
    favorites = set(favorite_ids)
    starred = [p for p in printers if p.id in favorites]
    others = [p for p in printers if p.id not in favorites]
    return starred, others


def dropdown_items(printers: Sequence[Printer], query: str, favorite_ids: Iterable[str]) -> List[Printer]:
    """The navigable list: matching favorites first, then the other matches."""

    starred, others = partition_by_favorite(filtered_list(printers, query), favorite_ids)
    return starred + others


__all__ = ["filtered_list", "partition_by_favorite", "dropdown_items"]
