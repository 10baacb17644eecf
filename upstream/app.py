"""
Mock upstream endpoints.

- /delay/{duration}   sleep, then empty 200
- /json/{kind}        {"time": ...}; kind=invalid returns broken JSON
- /xml                fixed sample document
- /soap               stub, empty 200
- /size/{size}        random [a-zA-Z] payload of the given size (any method)
- /resource[/{id}]    seeded in-memory resources

Delay headers (X-Delay, X-Delay-Percent, X-Slowdown, X-Slowdown-From) are
documented in upstream.delay.

Run: upstream --addr :8081
Example: curl -i -H 'X-Delay: 200ms' http://localhost:8081/json/valid
"""

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Path, Query, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from . import config, delay
from .errors import InvalidFormat, NotFound
from .logs import LoggingMiddleware
from .randstr import generate
from .resources import ResourceStore
from .sizes import parse_size

logger = logging.getLogger("upstream")

# src: httpbin.org/xml
SAMPLE_XML = """<?xml version='1.0' encoding='us-ascii'?>
<!--  A SAMPLE set of slides  -->
<slideshow title="Sample Slide Show" date="Date of publication" author="Yours Truly">
  <!-- TITLE SLIDE -->
  <slide type="all">
    <title>Wake up to WonderWidgets!</title>
  </slide>

  <!-- OVERVIEW -->
  <slide type="all">
    <title>Overview</title>
    <item>Why <em>WonderWidgets</em> are great</item>
    <item/>
    <item>Who <em>buys</em> WonderWidgets</item>
  </slide>
</slideshow>"""

ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
_ID_RE = re.compile(r"[+-]?[0-9]+")

router = APIRouter()


# --- Dependencies ---
def get_store(request: Request) -> ResourceStore:
    return request.app.state.resources


async def apply_delay(request: Request, slowdown: bool = False) -> float:
    return await delay.simulate(request.headers, request.app.state.started_at, slowdown=slowdown)


def parse_limit(raw: Optional[str]) -> int:
    """Non-integer or negative limits read as 0, i.e. the store default."""
    try:
        return max(0, int(raw))
    except (TypeError, ValueError):
        return 0


# --- Endpoints ---
@router.get("/delay/{duration}")
async def fixed_delay_response(duration: str = Path(...)):
    """Sleep for the duration in the path, return an empty 200."""
    seconds = delay.parse_duration(duration)
    if seconds > 0:
        await asyncio.sleep(seconds)
    return Response(status_code=200)


@router.get("/json/{kind}")
async def json_handler(request: Request, kind: str = Path(...)):
    """Current time as JSON; kind=invalid drops the key's opening quote."""
    await apply_delay(request, slowdown=True)
    now = str(datetime.now().astimezone())
    if kind == "invalid":
        body = '{time": "%s"}' % now
    else:
        body = '{"time": "%s"}' % now
    return Response(content=body, media_type="application/json")


@router.get("/xml")
async def xml_handler():
    """Return the sample slideshow XML."""
    return Response(content=SAMPLE_XML, media_type="application/xml")


@router.post("/soap")
async def soap_handler():
    # TODO: build a SOAP envelope once a client needs one
    return Response(status_code=200)


@router.api_route("/size/{size}", methods=ANY_METHOD)
async def size_handler(request: Request, size: str = Path(...)):
    """Random letters, as many as the human-readable size asks for."""
    n = parse_size(size)
    await apply_delay(request)
    payload = await run_in_threadpool(generate, n)
    return PlainTextResponse(payload)


@router.get("/resource")
@router.get("/resource/")
async def resource_index_handler(
    request: Request,
    limit: Optional[str] = Query(None),
    store: ResourceStore = Depends(get_store),
):
    """First `limit` resources keyed by their position, starting at "0"."""
    await apply_delay(request)
    subset = {str(i): res.model_dump() for i, res in enumerate(store.list(parse_limit(limit)))}
    return JSONResponse(subset)


@router.get("/resource/{id}")
async def resource_show_handler(
    request: Request,
    id: str = Path(...),
    store: ResourceStore = Depends(get_store),
):
    """One resource by id, 404 when it was never seeded."""
    await apply_delay(request)
    if not _ID_RE.fullmatch(id):
        raise InvalidFormat("id", id)
    res_id = int(id)
    try:
        res = store.get(res_id)
    except NotFound:
        return PlainTextResponse("Not Found", status_code=404)
    return JSONResponse(res.model_dump())


# --- Error handling ---
async def invalid_format_handler(request: Request, exc: InvalidFormat):
    logger.warning("%s %s aborted: %s", request.method, request.url.path, exc)
    return Response(status_code=400)


# --- App ---
def create_app(
    resource_count: int = config.RESOURCE_COUNT,
    default_limit: int = config.RESOURCE_DEFAULT_LIMIT,
    name_length: int = config.RESOURCE_NAME_LENGTH,
    started_at: Optional[datetime] = None,
) -> FastAPI:
    """Build the app; resources are seeded and the start time is fixed here."""
    app = FastAPI(title="Mock Upstream", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.started_at = started_at or datetime.now(timezone.utc)
    app.state.resources = ResourceStore.seed(resource_count, name_length=name_length, default_limit=default_limit)
    app.add_middleware(LoggingMiddleware)
    app.add_exception_handler(InvalidFormat, invalid_format_handler)
    app.include_router(router)
    return app
