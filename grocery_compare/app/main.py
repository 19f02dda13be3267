import json
import logging
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from grocery_compare.app.logging import configure_logging, event
from grocery_compare.app.schemas import CompareRequest, ComparisonResult, ErrorResponse
from grocery_compare.app.settings import Settings, get_settings, settings
from grocery_compare.services.comparison import ComparisonService, ErrorKind

configure_logging(settings.log_level)

app = FastAPI(title="Grocery Price Comparison Proxy")
logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal server error occurred."

ERROR_RESPONSES = {
    ErrorKind.METHOD_NOT_ALLOWED: (405, "Method Not Allowed"),
    ErrorKind.NO_IMAGES: (400, "No images provided."),
    ErrorKind.CONFIGURATION: (500, INTERNAL_ERROR_MESSAGE),
    ErrorKind.UPSTREAM: (500, INTERNAL_ERROR_MESSAGE),
    ErrorKind.DECODING: (500, INTERNAL_ERROR_MESSAGE),
}


def error_response(kind: ErrorKind, headers: dict | None = None) -> JSONResponse:
    status_code, message = ERROR_RESPONSES[kind]
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


def get_comparison_service(
    app_settings: Annotated[Settings, Depends(get_settings)],
) -> ComparisonService:
    return ComparisonService(app_settings)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return error_response(ErrorKind.METHOD_NOT_ALLOWED, headers=exc.headers)
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers)


async def _parse_request(request: Request) -> CompareRequest | None:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(body, dict):
        return None
    try:
        return CompareRequest.model_validate(body)
    except ValidationError:
        return None


@app.post(
    "/api/gemini",
    responses={
        200: {"model": ComparisonResult},
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def compare_prices(
    request: Request,
    service: Annotated[ComparisonService, Depends(get_comparison_service)],
):
    """Forward grocery photos to Gemini and relay its price comparison."""
    try:
        payload = await _parse_request(request)
        if payload is None:
            logger.warning("Rejected comparison request: no images provided")
            return error_response(ErrorKind.NO_IMAGES)

        image_count = len(payload.images)
        event(f"comparison request received: {image_count} image(s)", {"image_count": image_count})
        outcome = await service.compare(payload.images)
        if not outcome.ok:
            return error_response(outcome.error)
        return JSONResponse(outcome.result, status_code=200)
    except Exception:  # noqa: BLE001
        logger.exception("comparison handler failed")
        return error_response(ErrorKind.UPSTREAM)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
