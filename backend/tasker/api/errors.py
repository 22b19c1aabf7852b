"""Render planner failures as JSON error responses."""
from __future__ import annotations

import logging
from typing import Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse

from tasker.llm.errors import PlannerError

logger = logging.getLogger(__name__)

ERROR_STATUS: Dict[str, int] = {
    "missing_credential": status.HTTP_400_BAD_REQUEST,
    "transport_error": status.HTTP_503_SERVICE_UNAVAILABLE,
    "upstream_error": status.HTTP_502_BAD_GATEWAY,
    "empty_payload": status.HTTP_502_BAD_GATEWAY,
    "no_content": status.HTTP_502_BAD_GATEWAY,
    "unrecognized_shape": status.HTTP_502_BAD_GATEWAY,
    "cancelled": status.HTTP_409_CONFLICT,
}


async def planner_error_handler(request: Request, exc: PlannerError) -> JSONResponse:
    status_code = ERROR_STATUS.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    request_id = getattr(request.state, "request_id", None)
    logger.warning("%s %s failed: %s (%s)", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.kind,
            "message": exc.message,
            "retryable": exc.retryable,
            "request_id": request_id,
        },
    )
