"""
Form session controller.

Owns the single in-progress FormState and everything that happens around it:
restore on start, debounced auto-save, backend save, CSV export and clear.
The state is replaced by value on every edit, so a snapshot taken for a
backend call never changes under it.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, List, Optional
import logging
import threading

from core.config import settings
from core.errors import FormValidationError, InventoryApiError
from core import scheduler as sched_mod
from . import entries as entry_ops
from .catalog import Catalog, load_catalog
from .client import InventoryApiClient
from .schemas import (
    EntryRow,
    EntryType,
    FormState,
    FormStatusOut,
    FormSummaryOut,
    Notice,
    today_iso,
)
from .storage import FormStorage
from .summary import grand_totals, summarize_by_product, summarize_by_room

logger = logging.getLogger(__name__)

AUTOSAVE_JOB_ID = 'form_autosave'
REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"


class AutoSaveStatus(str, Enum):
    LOADED = 'loaded'
    SAVING = 'saving'
    SAVED = 'saved'

    @property
    def text(self) -> str:
        return {
            AutoSaveStatus.LOADED: 'Data loaded',
            AutoSaveStatus.SAVING: 'Saving...',
            AutoSaveStatus.SAVED: 'Auto-saved',
        }[self]


class SubmitStatus(str, Enum):
    IDLE = 'idle'
    SUBMITTING = 'submitting'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    media_type: str = 'text/csv'


def export_filename(on: Optional[date] = None) -> str:
    day = on.isoformat() if on else today_iso()
    return f"inventory-export-{day}.csv"


class FormSession:
    """One editor's inventory form and its save/export lifecycle"""

    def __init__(
        self,
        storage: Optional[FormStorage] = None,
        client: Optional[InventoryApiClient] = None,
        scheduler=None,
        catalog: Optional[Catalog] = None,
        autosave_delay: Optional[float] = None,
        job_id: str = AUTOSAVE_JOB_ID,
    ):
        self.storage = storage or FormStorage()
        self.client = client or InventoryApiClient()
        self.scheduler = scheduler or sched_mod.scheduler
        self.catalog = catalog or load_catalog()
        self.autosave_delay = settings.AUTOSAVE_DELAY_SECONDS if autosave_delay is None else autosave_delay
        self.job_id = job_id

        self._lock = threading.RLock()
        self._state = FormState.empty()
        self._notice: Optional[Notice] = None
        # bumped whenever a scheduled auto-save stops being wanted
        self._generation = 0

        self.autosave_status = AutoSaveStatus.SAVED
        self.save_status = SubmitStatus.IDLE
        self.export_status = SubmitStatus.IDLE

    # ---- lifecycle ----

    @property
    def state(self) -> FormState:
        return self._state

    def start(self) -> FormState:
        """Restore the saved form if there is one, otherwise keep a fresh form"""
        saved = self.storage.load_saved()
        with self._lock:
            if saved is not None:
                self._state = saved
                self.autosave_status = AutoSaveStatus.LOADED
                logger.info(f"Restored saved form for {saved.date} ({len(saved.entries)} products)")
            else:
                self._state = FormState.empty()
                self.autosave_status = AutoSaveStatus.SAVED
            return self._state

    def _replace(self, new_state: FormState) -> FormState:
        with self._lock:
            if new_state == self._state:
                return self._state
            self._state = new_state
            self.autosave_status = AutoSaveStatus.SAVING
            self._generation += 1
            sched_mod.schedule_once(
                self.scheduler, self.job_id, self._run_autosave, self.autosave_delay, args=(self._generation,)
            )
            return self._state

    def _run_autosave(self, generation: Optional[int] = None) -> None:
        with self._lock:
            if generation is not None and generation != self._generation:
                # superseded while it waited on the lock
                logger.debug(f"Skipping stale auto-save (generation {generation}, now {self._generation})")
                return
            snapshot = self._state
            self.storage.auto_save(snapshot)
            self.autosave_status = AutoSaveStatus.SAVED

    def flush(self) -> bool:
        """Run a pending auto-save right away. Returns False if none was pending."""
        with self._lock:
            if not sched_mod.cancel_job(self.scheduler, self.job_id):
                return False
            self._run_autosave()
            return True

    # ---- edits ----

    def add_entry(self, product: str, room: str, entry_type: EntryType, quantity: Any) -> FormState:
        if product and product not in self.catalog.products:
            logger.warning(f"Ignoring entry for unknown product '{product}'")
            return self._state
        if room and room not in self.catalog.rooms:
            logger.warning(f"Ignoring entry for unknown room '{room}'")
            return self._state

        qty = entry_ops.validate_quantity(quantity)
        with self._lock:
            current = self._state
            updated = entry_ops.add_entry(current.entries, product, room, entry_type, qty)
            if updated is current.entries:
                return current
            return self._replace(current.model_copy(update={'entries': updated}))

    def delete_entry(self, product: str, room: str) -> FormState:
        with self._lock:
            current = self._state
            updated = entry_ops.delete_entry(current.entries, product, room)
            if updated is current.entries:
                return current
            return self._replace(current.model_copy(update={'entries': updated}))

    def set_date(self, value: str) -> FormState:
        value = (value or '').strip()
        if value:
            try:
                value = date.fromisoformat(value).isoformat()
            except ValueError:
                logger.warning(f"Ignoring invalid form date '{value}'")
                return self._state
        with self._lock:
            return self._replace(self._state.model_copy(update={'date': value}))

    def set_reporter(self, value: str) -> FormState:
        value = (value or '').strip()
        if value and value not in self.catalog.reporters:
            logger.warning(f"Ignoring unknown reporter '{value}'")
            return self._state
        with self._lock:
            return self._replace(self._state.model_copy(update={'reporter': value}))

    # ---- derived views ----

    def entry_rows(self) -> List[EntryRow]:
        return entry_ops.list_entries(self._state.entries)

    def summary(self) -> FormSummaryOut:
        entries = self._state.entries
        products = summarize_by_product(entries, self.catalog.products)
        return FormSummaryOut(
            products=products,
            rooms=summarize_by_room(entries, self.catalog.products, self.catalog.rooms),
            totals=grand_totals(products),
        )

    def status(self) -> FormStatusOut:
        return FormStatusOut(
            form=self._state,
            autosave_status=self.autosave_status.value,
            autosave_text=self.autosave_status.text,
            save_status=self.save_status.value,
            export_status=self.export_status.value,
            notice=self.pop_notice(),
        )

    def pop_notice(self) -> Optional[Notice]:
        notice, self._notice = self._notice, None
        return notice

    def _notify(self, title: str, description: str, variant: str = 'default') -> Notice:
        self._notice = Notice(title=title, description=description, variant=variant)
        return self._notice

    # ---- backend ----

    def submit_for_save(self) -> Any:
        """
        Send the current form to the backend.

        Raises FormValidationError when date or reporter is missing and
        InventoryApiError when the backend call fails; in both cases the form
        and the saved copy are left exactly as they were.

        Edits made while the request is in flight are not part of the save;
        their pending auto-save and the saved copy are left alone.
        """
        snapshot = self._state
        if not snapshot.date or not snapshot.reporter:
            notice = self._notify("Validation Error", REQUIRED_FIELDS_MESSAGE, 'destructive')
            raise FormValidationError(REQUIRED_FIELDS_MESSAGE, notice=notice.model_dump())

        self.save_status = SubmitStatus.SUBMITTING
        try:
            result = self.client.save_entry(snapshot)
        except InventoryApiError as e:
            self.save_status = SubmitStatus.FAILED
            notice = self._notify("Error", "Failed to save inventory entry", 'destructive')
            logger.error(f"Save failed for form dated {snapshot.date}: {e}")
            raise InventoryApiError("Failed to save inventory entry", notice=notice.model_dump()) from e

        with self._lock:
            if self._state is snapshot:
                sched_mod.cancel_job(self.scheduler, self.job_id)
                self._generation += 1
                self.storage.clear_saved()
                self.autosave_status = AutoSaveStatus.SAVED
            else:
                logger.info("Form changed during save; keeping its pending auto-save")
            self.save_status = SubmitStatus.SUCCEEDED
        self._notify("Success", "Inventory entry saved successfully")
        logger.info(f"Inventory entry saved for {snapshot.date} by {snapshot.reporter}")
        return result

    def submit_for_export(self) -> ExportFile:
        """Ask the backend for a CSV of the current form. Never touches the form."""
        snapshot = self._state
        self.export_status = SubmitStatus.SUBMITTING
        try:
            content = self.client.export_csv(snapshot)
        except InventoryApiError as e:
            self.export_status = SubmitStatus.FAILED
            notice = self._notify("Error", "Failed to export inventory data", 'destructive')
            logger.error(f"Export failed: {e}")
            raise InventoryApiError("Failed to export inventory data", notice=notice.model_dump()) from e

        self.export_status = SubmitStatus.SUCCEEDED
        self._notify("Success", "Inventory data exported successfully")
        return ExportFile(filename=export_filename(), content=content)

    def clear_form(self) -> FormState:
        """Start over with an empty form and forget the saved copy"""
        with self._lock:
            sched_mod.cancel_job(self.scheduler, self.job_id)
            self._generation += 1
            self._state = FormState.empty()
            self.storage.clear_saved()
            self.autosave_status = AutoSaveStatus.SAVED
        self._notify("Form Cleared", "All form data has been cleared")
        return self._state
