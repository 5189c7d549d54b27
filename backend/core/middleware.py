import time
import logging
from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def install_middleware(app: FastAPI):
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        t0 = time.time()
        resp = await call_next(request)
        dt = time.time() - t0
        # Keep logs short and useful
        logger.info(f"{request.method} {request.url.path} {resp.status_code} {dt * 1000:.1f}ms")
        return resp
