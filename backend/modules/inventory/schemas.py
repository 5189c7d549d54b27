from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


EntryType = Literal["issued", "returned"]


class Entry(BaseModel):
    """Quantities for one (product, room) pair. At most one side is non-zero."""
    model_config = ConfigDict(frozen=True)

    issued: int = Field(0, ge=0)
    returned: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _one_side_only(self) -> "Entry":
        if self.issued and self.returned:
            raise ValueError("issued and returned are mutually exclusive")
        return self

    @property
    def is_empty(self) -> bool:
        return not self.issued and not self.returned

    @property
    def net_total(self) -> int:
        return self.issued - self.returned


EntryMap = Dict[str, Dict[str, Entry]]


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


class FormState(BaseModel):
    """The whole in-progress form. Replaced by value on every edit, never mutated."""
    model_config = ConfigDict(frozen=True)

    date: str = ""
    reporter: str = ""
    entries: EntryMap = Field(default_factory=dict)

    @field_validator("date")
    @classmethod
    def _iso_date(cls, v: str) -> str:
        if v:
            date.fromisoformat(v)
        return v

    @field_validator("entries")
    @classmethod
    def _prune_empty(cls, v: EntryMap) -> EntryMap:
        # keep the map sparse: no zero entries, no empty product maps
        pruned: EntryMap = {}
        for product, rooms in v.items():
            kept = {room: e for room, e in rooms.items() if not e.is_empty}
            if kept:
                pruned[product] = kept
        return pruned

    @classmethod
    def empty(cls) -> "FormState":
        return cls(date=today_iso(), reporter="", entries={})

    def backend_payload(self) -> dict:
        return self.model_dump(mode="json")


class _Totals(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    total_issued: int = Field(0, alias="totalIssued")
    total_returned: int = Field(0, alias="totalReturned")
    net_total: int = Field(0, alias="netTotal")


class ProductSummary(_Totals):
    id: str
    product: str


class RoomSummary(_Totals):
    id: str
    room: str
    badge: str = "gray"


class GrandTotals(_Totals):
    pass


class EntryRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    product: str
    room: str
    issued: int
    returned: int
    net_total: int = Field(alias="netTotal")


class NetTotalDisplay(BaseModel):
    text: str
    tone: Literal["neutral", "positive", "negative"]


class Notice(BaseModel):
    """One-shot user-visible message (rendered as a toast by the front end)."""
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


# ---- Request bodies ----

class EntryIn(BaseModel):
    product: str = ""
    room: str = ""
    type: EntryType = "issued"
    # raw text from the quantity input; normalized by validate_quantity
    quantity: Union[str, int, None] = None


class DateIn(BaseModel):
    date: str


class ReporterIn(BaseModel):
    reporter: str


# ---- Responses ----

class FormSummaryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    products: List[ProductSummary]
    rooms: List[RoomSummary]
    totals: GrandTotals


class FormStatusOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    form: FormState
    autosave_status: str = Field(alias="autosaveStatus")
    autosave_text: str = Field(alias="autosaveText")
    save_status: str = Field(alias="saveStatus")
    export_status: str = Field(alias="exportStatus")
    notice: Optional[Notice] = None
