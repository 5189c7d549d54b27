"""
Entry store mutations.

Every function takes an EntryMap and returns a new one; the input map is
never touched, so a FormState holding it stays a valid snapshot.
Invalid input is normalized (0 / no-op) instead of raising.
"""
from __future__ import annotations
from typing import Any, List
import logging
import re

from .schemas import Entry, EntryMap, EntryRow, EntryType

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def validate_quantity(raw: Any) -> int:
    """
    Parse the leading integer of the quantity text and clamp it at zero.

    "12" -> 12, "12abc" -> 12, "3.9" -> 3, "-5" -> 0, "abc" -> 0, None -> 0
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return max(0, raw)
    match = _LEADING_INT.match(str(raw))
    if not match:
        return 0
    try:
        value = int(match.group(1))
    except ValueError:
        # digit run past the interpreter's int conversion limit
        logger.debug(f"quantity too long to parse ({len(match.group(1))} digits)")
        return 0
    return max(0, value)


def _copy(entries: EntryMap) -> EntryMap:
    # Entry objects are frozen, so copying the two dict levels is enough
    return {product: dict(rooms) for product, rooms in entries.items()}


def add_entry(entries: EntryMap, product: str, room: str, entry_type: EntryType, quantity: int) -> EntryMap:
    """
    Write quantity for (product, room), overwriting whatever was there.

    issued -> {issued: q, returned: 0}; returned -> {issued: 0, returned: q}.
    No-op when product/room is missing or quantity is not positive.
    """
    if not product or not room:
        logger.debug(f"add_entry ignored: product={product!r} room={room!r}")
        return entries
    if not isinstance(quantity, int) or quantity <= 0:
        logger.debug(f"add_entry ignored: quantity={quantity!r}")
        return entries

    if entry_type == "issued":
        entry = Entry(issued=quantity, returned=0)
    elif entry_type == "returned":
        entry = Entry(issued=0, returned=quantity)
    else:
        logger.debug(f"add_entry ignored: unknown type {entry_type!r}")
        return entries

    updated = _copy(entries)
    updated.setdefault(product, {})[room] = entry
    return updated


def delete_entry(entries: EntryMap, product: str, room: str) -> EntryMap:
    """Remove (product, room); drop the product key once its rooms are gone."""
    if room not in entries.get(product, {}):
        return entries

    updated = _copy(entries)
    del updated[product][room]
    if not updated[product]:
        del updated[product]
    return updated


def list_entries(entries: EntryMap) -> List[EntryRow]:
    """Rows for the review table, one per stored pair with a non-zero side."""
    rows = []
    for product, rooms in entries.items():
        for room, entry in rooms.items():
            if entry.is_empty:
                continue
            rows.append(EntryRow(
                product=product,
                room=room,
                issued=entry.issued,
                returned=entry.returned,
                net_total=entry.net_total,
            ))
    return rows
