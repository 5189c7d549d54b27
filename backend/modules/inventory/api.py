from __future__ import annotations
from typing import Any, Dict, List
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from common.deps import get_form_session
from core.errors import AppError
from .schemas import DateIn, EntryIn, FormStatusOut, FormSummaryOut, ReporterIn
from .session import FormSession
from .summary import format_net_total

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
def inventory_form_health():
    return {"status": "Inventory form module ready"}


@router.get("/", response_model=FormStatusOut)
def get_form(session: FormSession = Depends(get_form_session)):
    """Current form plus auto-save / submit status"""
    return session.status()


@router.get("/catalog")
def get_catalog(session: FormSession = Depends(get_form_session)):
    """Products, rooms and reporters in display order"""
    return session.catalog.as_dict()


# ---- Entries ----
@router.get("/entries")
def get_entries(session: FormSession = Depends(get_form_session)) -> List[Dict[str, Any]]:
    """Review rows, each with its rendered net total"""
    catalog = session.catalog
    rows = []
    for row in session.entry_rows():
        rows.append({
            **row.model_dump(by_alias=True),
            "productLabel": catalog.products.label_for(row.product),
            "roomLabel": catalog.rooms.label_for(row.room),
            "netDisplay": format_net_total(row.net_total).model_dump(),
        })
    return rows


@router.post("/entries", response_model=FormStatusOut)
def add_entry(body: EntryIn, session: FormSession = Depends(get_form_session)):
    session.add_entry(body.product, body.room, body.type, body.quantity)
    return session.status()


@router.delete("/entries/{product}/{room}", response_model=FormStatusOut)
def delete_entry(product: str, room: str, session: FormSession = Depends(get_form_session)):
    session.delete_entry(product, room)
    return session.status()


# ---- Header fields ----
@router.put("/date", response_model=FormStatusOut)
def set_date(body: DateIn, session: FormSession = Depends(get_form_session)):
    session.set_date(body.date)
    return session.status()


@router.put("/reporter", response_model=FormStatusOut)
def set_reporter(body: ReporterIn, session: FormSession = Depends(get_form_session)):
    session.set_reporter(body.reporter)
    return session.status()


# ---- Summary ----
@router.get("/summary", response_model=FormSummaryOut)
def get_summary(session: FormSession = Depends(get_form_session)):
    """Per-product and per-room totals plus grand totals"""
    return session.summary()


# ---- Actions ----
@router.post("/save")
def save_form(session: FormSession = Depends(get_form_session)):
    """Send the form to the inventory backend (400 on missing fields, 502 on backend failure)"""
    try:
        result = session.submit_for_save()
    except AppError:
        # the notice travels in the error body
        session.pop_notice()
        raise
    return {"detail": "Inventory entry saved", "result": result, "notice": session.pop_notice()}


@router.post("/export")
def export_form(session: FormSession = Depends(get_form_session)):
    """CSV export of the current form, delivered as a download"""
    try:
        export = session.submit_for_export()
    finally:
        session.pop_notice()
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.post("/clear", response_model=FormStatusOut)
def clear_form(session: FormSession = Depends(get_form_session)):
    session.clear_form()
    return session.status()
