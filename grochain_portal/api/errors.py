"""Translate domain exceptions into HTTP responses"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from grochain_portal.domain.exceptions import (
    ApiResponseError,
    ApiTransportError,
    NotAuthenticatedError,
    ValidationError,
)

# Upstream statuses passed through unchanged; everything else becomes 502
PASSTHROUGH_STATUSES = {400, 401, 403, 404, 409}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiTransportError)
    async def transport_error(request: Request, exc: ApiTransportError):
        request_id = getattr(request.state, "request_id", "unknown")
        logging.error(f"GroChain API unreachable: {exc}", extra={"request_id": request_id})
        return JSONResponse(status_code=503, content={"detail": "GroChain service unavailable"})

    @app.exception_handler(ApiResponseError)
    async def response_error(request: Request, exc: ApiResponseError):
        request_id = getattr(request.state, "request_id", "unknown")
        logging.warning(
            f"GroChain API error: {exc.message}",
            extra={"request_id": request_id, "upstream_status": exc.status_code},
        )
        status = exc.status_code if exc.status_code in PASSTHROUGH_STATUSES else 502
        return JSONResponse(status_code=status, content={"detail": exc.message})

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content={"detail": exc.errors})

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated(request: Request, exc: NotAuthenticatedError):
        return JSONResponse(status_code=401, content={"detail": str(exc)})
