"""
Exception handlers mapping engine errors onto HTTP responses.

Absence (no rule, no path, no suggestions) is a normal 200 response; only
rejected input, missing missions, invalid transitions and an unavailable
store become errors.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from kinship.errors import (
    GraphUnavailableError,
    InvalidInputError,
    InvalidRelationshipError,
    MissionError,
    MissionNotFoundError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the kinship error handlers on an app (main app and test apps)."""

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
        content: dict[str, object] = {"detail": str(exc)}
        if isinstance(exc, InvalidRelationshipError):
            content["value"] = str(exc.value)
        return JSONResponse(status_code=422, content=content)

    @app.exception_handler(MissionError)
    async def mission_error_handler(request: Request, exc: MissionError) -> JSONResponse:
        status_code = 404 if isinstance(exc, MissionNotFoundError) else 409
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.exception_handler(GraphUnavailableError)
    async def graph_unavailable_handler(request: Request, exc: GraphUnavailableError) -> JSONResponse:
        logger.error(f"Connection data unavailable for {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"detail": "Connection data is temporarily unavailable"})
