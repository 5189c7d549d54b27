from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # CORS – keep env parsing simple: store raw string, parse in app.py
    ALLOW_ORIGINS: Optional[str] = None

    # Inventory backend (save + CSV export)
    INVENTORY_API_BASE_URL: str = "http://localhost:5000"
    INVENTORY_API_TIMEOUT: float = 30.0

    # Local form persistence (one JSON file per key)
    FORM_STORAGE_DIR: str = "data"
    FORM_STORAGE_KEY: str = "inventoryFormData"
    AUTOSAVE_DELAY_SECONDS: float = 1.0

    # Vocabularies: comma-separated "id:Label" pairs, empty -> built-in defaults.
    # Stored raw for the same reason as ALLOW_ORIGINS.
    INVENTORY_PRODUCTS: Optional[str] = None
    INVENTORY_ROOMS: Optional[str] = None
    INVENTORY_REPORTERS: Optional[str] = None

    class Config:
        case_sensitive = False


settings = Settings()
