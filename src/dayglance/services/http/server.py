from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Dict, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import ORJSONResponse, Response

from ...api import ErrorPayload, TimelinePayload
from ...bootstrap import configure_logging
from ...config import get_settings
from ...domain import ScheduleError
from ..context import ServiceContext
from ..schedule import ScheduleRequest, ScheduleService

logger = logging.getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml; charset=utf-8"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

app = FastAPI(title="dayglance", version="0.1.0")


@lru_cache(maxsize=1)
def get_schedule_service() -> ScheduleService:
    return ScheduleService.from_context(ServiceContext())


def image_headers(cache_max_age: int, cdn_max_age: int) -> Dict[str, str]:
    return {
        "Cache-Control": f"public, max-age={cache_max_age}, s-maxage={cdn_max_age}",
        "CDN-Cache-Control": f"public, max-age={cdn_max_age}",
        **CORS_HEADERS,
        "Vary": "Accept-Encoding, Origin",
    }


@app.exception_handler(ScheduleError)
async def schedule_error_handler(request: Request, exc: ScheduleError) -> ORJSONResponse:
    if exc.status_code >= 500:
        logger.error("%s failure for %s: %s", exc.category, request.url.path, exc.message)
    else:
        logger.info("Rejected %s: %s", request.url.path, exc.message)
    return ORJSONResponse(
        ErrorPayload.from_error(exc).model_dump(), status_code=exc.status_code, headers=CORS_HEADERS
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> ORJSONResponse:
    logger.exception("Unexpected error in %s", request.url.path)
    payload = ErrorPayload(error=f"Internal server error: {exc}", category="internal")
    return ORJSONResponse(payload.model_dump(), status_code=500, headers=CORS_HEADERS)


def _schedule_request(
    user: str = Query(default=""),
    date: str = Query(default=""),
    tz: str = Query(default="UTC"),
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
) -> ScheduleRequest:
    logger.debug("API request received: user=%s date=%s tz=%s start=%s end=%s", user, date, tz, start, end)
    return ScheduleRequest(
        user=user,
        date=date,
        tz=tz,
        start=(start or "").strip() or None,
        end=(end or "").strip() or None,
    )


@app.get("/api/schedule.svg")
def schedule_svg(
    request: ScheduleRequest = Depends(_schedule_request),
    service: ScheduleService = Depends(get_schedule_service),
) -> Response:
    rendered = service.render(request)
    http = get_settings().http
    return Response(
        content=rendered.svg,
        media_type=SVG_MEDIA_TYPE,
        headers=image_headers(http.cache_max_age, http.cdn_max_age),
    )


@app.get("/api/schedule.json")
def schedule_json(
    request: ScheduleRequest = Depends(_schedule_request),
    service: ScheduleService = Depends(get_schedule_service),
) -> ORJSONResponse:
    timeline = service.build_timeline(request)
    payload = TimelinePayload.from_domain(timeline).model_dump(by_alias=True)
    return ORJSONResponse(payload, headers=CORS_HEADERS)


@app.options("/api/schedule.svg")
@app.options("/api/schedule.json")
def schedule_options() -> Response:
    return Response(status_code=200, headers={**CORS_HEADERS, "Access-Control-Max-Age": "86400"})


@app.get("/healthz")
def healthz() -> ORJSONResponse:
    return ORJSONResponse({"status": "ok"})


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    configure_logging()
    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving dayglance on %s:%s", host, port)
    asyncio.run(serve(app, config))
