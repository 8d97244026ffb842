"""Presentation helpers: search, sorting, grouping and plain-text export."""

from __future__ import annotations

from typing import Dict, Iterable, List, Literal

from larder.models.shopping import ShoppingListItem
from larder.shopping.departments import group_by_department

SortOrder = Literal["asc", "desc", "dept"]

ALL_ITEMS = "All Items"
HIDDEN_ITEMS = frozenset({"water"})


def capitalize_name(name: str) -> str:
    """Upper-case the first letter of every word, leaving the rest untouched."""
    return " ".join(word[:1].upper() + word[1:] for word in name.split(" "))


def format_quantity(quantity: float) -> str:
    return f"{quantity:g}"


def organize_items(
    items: Iterable[ShoppingListItem],
    search: str = "",
    sort: SortOrder = "dept",
) -> Dict[str, List[ShoppingListItem]]:
    """Filter, sort and group items for display.

    Tap water is never listed. ``search`` is a case-insensitive substring match on the
    name. ``dept`` groups by department in display order; ``asc`` and ``desc`` return a
    single ``All Items`` group sorted by name.
    """
    term = (search or "").strip().lower()
    visible = [
        item
        for item in items
        if item.name.strip().lower() not in HIDDEN_ITEMS and (not term or term in item.name.lower())
    ]
    if sort in ("asc", "desc"):
        visible.sort(key=lambda item: item.name.lower(), reverse=sort == "desc")

    display = [item.model_copy(update={"name": capitalize_name(item.name)}) for item in visible]
    if sort == "dept":
        return group_by_department(display)
    return {ALL_ITEMS: display}


def format_item_line(item: ShoppingListItem) -> str:
    parts = ["[x]" if item.checked else "[ ]", format_quantity(item.quantity)]
    if item.unit:
        parts.append(item.unit)
    parts.append(item.name)
    line = " ".join(parts)
    if item.notes:
        line = f"{line} ({item.notes})"
    return line


def format_for_clipboard(items: Iterable[ShoppingListItem]) -> str:
    """Render items as department sections suitable for pasting into notes apps."""
    sections = []
    for department, grouped in organize_items(items, sort="dept").items():
        lines = "\n".join(format_item_line(item) for item in grouped)
        sections.append(f"## {department}\n{lines}")
    return "\n\n".join(sections)


__all__ = [
    "ALL_ITEMS",
    "SortOrder",
    "capitalize_name",
    "format_for_clipboard",
    "organize_items",
]
