"""Keyboard handling for the printer selection list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .config import InputState, Printer


@dataclass(frozen=True)
class KeyOutcome:
    """Result of a key press: a printer to commit, and whether to swallow the key."""

    selected: Optional[Printer] = None
    prevent_default: bool = False


def clamp_highlight(index: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


def open_dropdown(state: InputState) -> None:
    state.dropdown_open = True
    state.search_query = ""
    state.highlighted_index = 0


def close_dropdown(state: InputState) -> None:
    state.dropdown_open = False


def handle_key(state: InputState, key: str, items: Sequence[Printer]) -> KeyOutcome:
    """Apply ``key`` to the list state.

    ``items`` is the list currently shown to the user.  The caller commits
    ``KeyOutcome.selected`` as the new printer selection.
    """

    if not state.dropdown_open:
        if key in ("ArrowDown", "ArrowUp"):
            open_dropdown(state)
            return KeyOutcome(prevent_default=True)
        return KeyOutcome()

    last = len(items) - 1
    if key == "ArrowDown":
        state.highlighted_index = clamp_highlight(state.highlighted_index + 1, len(items))
        return KeyOutcome(prevent_default=True)
    if key == "ArrowUp":
        state.highlighted_index = clamp_highlight(state.highlighted_index - 1, len(items))
        return KeyOutcome(prevent_default=True)
    if key == "Home":
        state.highlighted_index = 0
        return KeyOutcome(prevent_default=True)
    if key == "End":
        state.highlighted_index = max(0, last)
        return KeyOutcome(prevent_default=True)
    if key == "Enter":
        if 0 <= state.highlighted_index <= last:
            close_dropdown(state)
            return KeyOutcome(selected=items[state.highlighted_index], prevent_default=True)
        return KeyOutcome(prevent_default=True)
    if key == "Escape":
        close_dropdown(state)
        return KeyOutcome(prevent_default=True)
    if key == "Tab":
        # Focus moves on normally.
        close_dropdown(state)
        return KeyOutcome()
    return KeyOutcome()


__all__ = ["KeyOutcome", "clamp_highlight", "open_dropdown", "close_dropdown", "handle_key"]
