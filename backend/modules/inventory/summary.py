"""
Summary aggregation for the inventory form.

All functions here are pure: they read an EntryMap (plus the vocabularies that
fix display order) and build fresh summary rows. Calling them on every request
is fine.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from .catalog import Vocabulary, room_badge
from .schemas import (
    EntryMap,
    GrandTotals,
    NetTotalDisplay,
    ProductSummary,
    RoomSummary,
)


def summarize_by_product(entries: EntryMap, products: Vocabulary) -> List[ProductSummary]:
    """
    Totals per product across all rooms.

    Order follows the product vocabulary, not insertion order. Products with
    nothing issued and nothing returned are left out.
    """
    summaries = []
    for product in products:
        total_issued = 0
        total_returned = 0
        for entry in entries.get(product, {}).values():
            total_issued += entry.issued
            total_returned += entry.returned

        if total_issued > 0 or total_returned > 0:
            summaries.append(ProductSummary(
                id=product,
                product=products.label_for(product),
                total_issued=total_issued,
                total_returned=total_returned,
                net_total=total_issued - total_returned,
            ))
    return summaries


def summarize_by_room(
    entries: EntryMap,
    products: Vocabulary,
    rooms: Optional[Vocabulary] = None,
) -> List[RoomSummary]:
    """
    Totals per room across all products.

    Rooms come out in first-seen order: walk products in vocabulary order and,
    inside each product, its room keys. Labels come from ``rooms`` when given,
    otherwise the raw room id is used.
    """
    room_totals: Dict[str, List[int]] = {}
    for product in products:
        for room, entry in entries.get(product, {}).items():
            totals = room_totals.setdefault(room, [0, 0])
            totals[0] += entry.issued
            totals[1] += entry.returned

    summaries = []
    for room, (total_issued, total_returned) in room_totals.items():
        if total_issued == 0 and total_returned == 0:
            continue
        summaries.append(RoomSummary(
            id=room,
            room=rooms.label_for(room) if rooms is not None else room,
            badge=room_badge(room),
            total_issued=total_issued,
            total_returned=total_returned,
            net_total=total_issued - total_returned,
        ))
    return summaries


def grand_totals(product_summaries: Iterable[ProductSummary]) -> GrandTotals:
    total_issued = 0
    total_returned = 0
    for s in product_summaries:
        total_issued += s.total_issued
        total_returned += s.total_returned
    return GrandTotals(
        total_issued=total_issued,
        total_returned=total_returned,
        net_total=total_issued - total_returned,
    )


def format_net_total(net_total: int) -> NetTotalDisplay:
    """
    Render a net total: 0 -> "0" (no badge), positive -> "+N", negative -> "-N".
    """
    if net_total > 0:
        return NetTotalDisplay(text=f"+{net_total}", tone="positive")
    if net_total < 0:
        return NetTotalDisplay(text=str(net_total), tone="negative")
    return NetTotalDisplay(text="0", tone="neutral")
