import os
import time
import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

# Load environment variables from .env file for local development
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.middleware import install_middleware
from core.errors import install_handlers
from core.scheduler import start_scheduler, shutdown_scheduler

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("app")

NULL_SENTINELS = {"null", "none", "undefined", "false", "0"}


def _normalize_origin(origin: str) -> Optional[str]:
    sanitized = origin.strip().rstrip('/')
    if not sanitized:
        return None
    if sanitized.lower() in NULL_SENTINELS:
        return None
    return sanitized


def _parse_origins(raw: Optional[str]):
    """
    Accepts:
      - JSON array: '["https://a.com","https://b.com"]'
      - Comma-separated string: 'https://a.com,https://b.com'
      - Empty / missing -> []
    Never raises; always returns a list[str].
    """
    raw = (raw or '').strip()
    if not raw:
        return []

    if raw.startswith('['):
        try:
            val = json.loads(raw)
            if isinstance(val, list):
                origins = [_normalize_origin(str(x)) for x in val]
                return [o for o in origins if o]
        except json.JSONDecodeError as e:
            logger.warning(f"ALLOW_ORIGINS JSON parse error: {e}, falling back to comma-separated")

    fallback = [_normalize_origin(p) for p in raw.split(',')]
    return [p for p in fallback if p]


allow_origins = _parse_origins(settings.ALLOW_ORIGINS) or [
    "http://localhost:3000",
    "http://localhost:5000",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5000",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tests may install their own session before startup
    if getattr(app.state, "form_session", None) is None:
        from modules.inventory.session import FormSession
        app.state.form_session = FormSession()
    app.state.form_session.start()
    start_scheduler()
    logger.info(f"Form session ready (autosave: {app.state.form_session.autosave_status.value})")
    try:
        yield
    finally:
        # don't lose the last edits to a pending debounce
        app.state.form_session.flush()
        shutdown_scheduler()


BOOT_T0 = time.time()
app = FastAPI(
    title='Inventory Form API',
    version='1.0.0',
    docs_url='/api/docs',
    openapi_url='/api/openapi.json',
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Middleware & error handlers ---------------------------------------------
install_middleware(app)   # request logging
install_handlers(app)     # AppError → JSON

# --- Health ------------------------------------------------------------------
@app.get('/api/health')
def health():
    return {'status': 'ok', 'uptime': round(time.time() - BOOT_T0, 2)}


# --- Router composition (feature-first) --------------------------------------
API = '/api/v1'

from modules.inventory import form_router  # noqa: E402
app.include_router(form_router, prefix=f'{API}/inventory/form', tags=['inventory-form'])


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "false").lower() == "true"

    uvicorn.run("app:app", host=host, port=port, reload=reload)
