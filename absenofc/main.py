"""
AbsenOfc Log Activity - FastAPI application entry point
"""
import logging

import requests
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from absenofc.api.v1.api import api_router
from absenofc.core.config import settings
from atams.exceptions import BadRequestException, NotFoundException

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, debug=settings.DEBUG)


def _message(exc: Exception) -> str:
    return getattr(exc, "message", None) or getattr(exc, "detail", None) or str(exc)


@app.exception_handler(BadRequestException)
async def bad_request_handler(request: Request, exc: BadRequestException):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": _message(exc)}
    )


@app.exception_handler(NotFoundException)
async def not_found_handler(request: Request, exc: NotFoundException):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"success": False, "message": _message(exc)}
    )


@app.exception_handler(requests.RequestException)
async def backend_error_handler(request: Request, exc: requests.RequestException):
    logger.warning("Backend request failed on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"success": False, "message": f"Backend unavailable: {exc}"}
    )


@app.get("/health")
async def health():
    return {"status": "ok", "app": settings.APP_NAME, "version": settings.APP_VERSION}


app.include_router(api_router, prefix="/api/v1")
