"""
app/api/errors.py

Problem-detail exception handlers for the HTTP layer.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.schemas.deals import ProblemDetailResponse

logger = logging.getLogger(__name__)

_PROBLEM_MEDIA_TYPE = "application/problem+json"


def _problem_response(
    request: Request,
    *,
    status_code: int,
    title: str,
    detail: str,
    errors: list[str] | None = None,
    error: str | None = None,
) -> JSONResponse:
    body = ProblemDetailResponse(
        title=title,
        status=status_code,
        detail=detail,
        instance=request.url.path,
        errors=errors,
        error=error,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        media_type=_PROBLEM_MEDIA_TYPE,
    )


def _format_location(loc: Sequence[Any]) -> str:
    """
    Render a pydantic error location, e.g. ("body", 0, "dealAmount") -> "deals[0].dealAmount".
    """

    parts = list(loc)
    if parts and parts[0] == "body":
        parts = parts[1:]
        path = "deals"
    else:
        path = ""

    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "request"


async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        first = errors[0]
        return _problem_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            title="Bad Request",
            detail="Malformed JSON Request",
            error=str(first.get("ctx", {}).get("error", first.get("msg", "Invalid JSON"))),
        )

    messages = [f"{_format_location(error.get('loc', ()))}: {error.get('msg')}" for error in errors]
    logger.info("Rejected deal import request path=%s errors=%d", request.url.path, len(messages))
    return _problem_response(
        request,
        status_code=status.HTTP_400_BAD_REQUEST,
        title="Validation Error",
        detail="Validation failed for one or more fields",
        errors=messages,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error path=%s", request.url.path)
    return _problem_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        title="Internal Server Error",
        detail="An unexpected error occurred",
    )


def register_exception_handlers(application: FastAPI) -> None:
    application.add_exception_handler(RequestValidationError, handle_request_validation_error)
    application.add_exception_handler(Exception, handle_unexpected_error)
