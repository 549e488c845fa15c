"""FastAPI application serving round level data and chart previews."""

from __future__ import annotations

import uuid
from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .indicator import HELP_LINK, NAME, SHORT_NAME, SOURCE_CODE_LINK
from .levels_api import router as levels_router
from .logging_setup import REQUEST_ID_CONTEXT
from .telemetry import prometheus_response

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request ID to the logging context and echo it on the response."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = REQUEST_ID_CONTEXT.set(request_id)
        try:
            response = await call_next(request)
        finally:
            REQUEST_ID_CONTEXT.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


app = FastAPI(
    title="Psychological Round Levels",
    description="Round price levels with magnitude and edge-fade tiers for chart overlays.",
    version="0.1.0",
)

app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(levels_router)


@app.get("/metrics", include_in_schema=False)
async def metrics_endpoint() -> Response:
    payload, content_type = prometheus_response()
    return Response(content=payload, media_type=content_type)


@app.get("/healthz", summary="Readiness probe")
async def healthz() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/about", summary="Indicator identification")
async def about() -> Dict[str, str]:
    return {
        "name": NAME,
        "short_name": SHORT_NAME,
        "help_link": HELP_LINK,
        "source_code_link": SOURCE_CODE_LINK,
    }
