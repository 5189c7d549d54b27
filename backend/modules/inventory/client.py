"""
HTTP client for the inventory backend.

Two calls: save a finished form (POST /api/inventory) and export a form as
CSV (POST /api/inventory/export). Any transport error, non-2xx status or
unusable body is raised as InventoryApiError; nothing is retried here.
"""
import requests
import logging
from typing import Optional, Dict, Any

from core.config import settings
from core.errors import InventoryApiError
from .schemas import FormState

logger = logging.getLogger(__name__)


class InventoryApiClient:
    """Client for the inventory save/export endpoints"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.INVENTORY_API_BASE_URL or '').rstrip('/')
        if not self.base_url:
            raise ValueError("INVENTORY_API_BASE_URL environment variable not set")
        self.timeout = timeout if timeout is not None else settings.INVENTORY_API_TIMEOUT
        self.session = session or requests.Session()
        self.headers = {'Content-Type': 'application/json'}

    def _post(self, path: str, body: Dict[str, Any]) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, json=body, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            return response
        except requests.exceptions.RequestException as e:
            logger.error(f"Inventory API error on {path}: {e}")
            raise InventoryApiError(f"Inventory API error: {e}") from e

    def save_entry(self, form: FormState) -> Any:
        """Persist a completed form. Returns the backend's JSON body."""
        response = self._post('/api/inventory', {
            'date': form.date,
            'reporter': form.reporter,
            'entries': form.backend_payload()['entries'],
        })
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Inventory API returned a non-JSON body for save: {e}")
            raise InventoryApiError("Inventory API returned an invalid response") from e

    def export_csv(self, form: FormState) -> bytes:
        """Ask the backend to render the form as CSV. Returns the raw bytes."""
        response = self._post('/api/inventory/export', {
            'entryId': None,
            'formData': form.backend_payload(),
        })
        return response.content
