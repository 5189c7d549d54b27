"""
Durable key-value slot for the in-progress form.

Each key is one JSON file inside the storage directory. Everything here is
best-effort: failures are logged and swallowed, never raised to the caller.
"""
from typing import Optional
from pathlib import Path
import logging

from pydantic import ValidationError

from core.config import settings
from .schemas import FormState

logger = logging.getLogger(__name__)


class FormStorage:
    """Saves / restores / clears the whole FormState under one key"""

    def __init__(self, data_dir: Optional[Path] = None, key: Optional[str] = None):
        self.data_dir = Path(data_dir or settings.FORM_STORAGE_DIR)
        self.key = key or settings.FORM_STORAGE_KEY
        self.state_file = self.data_dir / f'{self.key}.json'

    def auto_save(self, state: FormState) -> None:
        """Write the form; no retry on failure"""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            payload = state.model_dump_json(indent=2)
            tmp_file = self.data_dir / f'{self.key}.json.tmp'
            with open(tmp_file, 'w', encoding='utf-8') as f:
                f.write(payload)
            tmp_file.replace(self.state_file)
            logger.debug(f"Form auto-saved to {self.state_file}")
        except Exception as e:
            logger.warning(f"Failed to auto-save form data: {e}")

    def load_saved(self) -> Optional[FormState]:
        """Return the saved form, or None when missing or unreadable"""
        if not self.state_file.exists():
            return None
        try:
            with open(self.state_file, 'r', encoding='utf-8') as f:
                raw = f.read()
            return FormState.model_validate_json(raw)
        except (OSError, ValidationError, ValueError) as e:
            logger.warning(f"Failed to load saved form data: {e}")
            return None

    def clear_saved(self) -> None:
        try:
            self.state_file.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to clear saved form data: {e}")
