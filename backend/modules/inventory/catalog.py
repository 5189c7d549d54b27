"""
Closed vocabularies for the inventory form.

Products, rooms and reporters are ordered (identifier, label) sequences. The
declared order is the display order of every summary, so it must be kept as
configured. Each vocabulary can be overridden from settings with a
comma-separated list of ``id:Label`` pairs (``id`` alone reuses the id as label).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple
import logging

from core.config import settings

logger = logging.getLogger(__name__)


DEFAULT_PRODUCTS: List[Tuple[str, str]] = [
    ("roundTables", "Round Tables"),
    ("rectTables", "Rectangular Tables"),
    ("chairs", "Chairs"),
    ("tablecloths", "Tablecloths"),
    ("napkins", "Napkins"),
    ("easels", "Easels"),
    ("projectors", "Projectors"),
    ("microphones", "Microphones"),
]

DEFAULT_ROOMS: List[Tuple[str, str]] = [
    ("yaupon", "Yaupon"),
    ("sycamore", "Sycamore"),
    ("riverBirch", "River Birch"),
    ("magnolia", "Magnolia"),
    ("cedar", "Cedar"),
    ("wingedElm", "Winged Elm"),
    ("redMaple", "Red Maple"),
    ("ballroom", "Ballroom"),
]

DEFAULT_REPORTERS: List[Tuple[str, str]] = [
    ("frontDesk", "Front Desk"),
    ("banquetCaptain", "Banquet Captain"),
    ("setupCrew", "Setup Crew"),
    ("eventManager", "Event Manager"),
]

# Room -> badge style category
ROOM_BADGES: Dict[str, str] = {
    "yaupon": "blue",
    "sycamore": "green",
    "riverBirch": "yellow",
    "magnolia": "purple",
    "cedar": "red",
    "wingedElm": "orange",
    "redMaple": "pink",
    "ballroom": "indigo",
}
DEFAULT_BADGE = "gray"


def room_badge(room: str) -> str:
    return ROOM_BADGES.get(room, DEFAULT_BADGE)


@dataclass(frozen=True)
class Vocabulary:
    """An ordered, closed set of identifiers with display labels."""
    items: Tuple[Tuple[str, str], ...]

    def __iter__(self) -> Iterator[str]:
        return (ident for ident, _ in self.items)

    def __contains__(self, ident: object) -> bool:
        return any(ident == i for i, _ in self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def ids(self) -> List[str]:
        return [ident for ident, _ in self.items]

    def label_for(self, ident: str) -> str:
        for i, label in self.items:
            if i == ident:
                return label
        return ident

    def as_options(self) -> List[Dict[str, str]]:
        return [{"value": i, "label": label} for i, label in self.items]


def parse_vocabulary(raw: Optional[str], default: List[Tuple[str, str]]) -> Vocabulary:
    """
    Parse ``"id:Label,id2:Label 2"`` into a Vocabulary.

    Empty / missing -> default. Duplicate ids keep their first position.
    Never raises.
    """
    if not raw or not raw.strip():
        return Vocabulary(tuple(default))

    items: List[Tuple[str, str]] = []
    seen = set()
    for part in raw.split(','):
        part = part.strip()
        if not part:
            continue
        ident, _, label = part.partition(':')
        ident = ident.strip()
        label = label.strip() or ident
        if not ident or ident in seen:
            continue
        seen.add(ident)
        items.append((ident, label))

    if not items:
        logger.warning(f"Vocabulary setting '{raw}' had no usable entries, using defaults")
        return Vocabulary(tuple(default))
    return Vocabulary(tuple(items))


@dataclass(frozen=True)
class Catalog:
    products: Vocabulary
    rooms: Vocabulary
    reporters: Vocabulary

    def as_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            "products": self.products.as_options(),
            "rooms": [
                {**opt, "badge": room_badge(opt["value"])}
                for opt in self.rooms.as_options()
            ],
            "reporters": self.reporters.as_options(),
        }


def load_catalog() -> Catalog:
    """Build the catalog from settings (falls back to the built-in vocabularies)."""
    return Catalog(
        products=parse_vocabulary(settings.INVENTORY_PRODUCTS, DEFAULT_PRODUCTS),
        rooms=parse_vocabulary(settings.INVENTORY_ROOMS, DEFAULT_ROOMS),
        reporters=parse_vocabulary(settings.INVENTORY_REPORTERS, DEFAULT_REPORTERS),
    )
