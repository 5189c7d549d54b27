import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base error mapped to a JSON response by install_handlers."""
    status_code = 500
    title = "Error"

    def __init__(self, message: str, *, status_code: int = None, notice: dict = None):
        super().__init__(message)
        self.message = message
        self.notice = notice
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        body = {"detail": self.message, "title": self.title}
        if self.notice is not None:
            body["notice"] = self.notice
        return body


class FormValidationError(AppError):
    status_code = 400
    title = "Validation Error"


class InventoryApiError(AppError):
    """Inventory backend unreachable or answered with a failure."""
    status_code = 502
    title = "Backend Error"


def install_handlers(app: FastAPI):
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
