import json
import logging
import time
import uuid
from datetime import datetime, timedelta, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("upstream")


# --- Logging ---
def log_access(request: Request, status: int, latency_ms: int, req_id: str):
    """Write one JSON access line to stdout."""
    entry = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "method": request.method,
        "path": request.url.path,
        "status": status,
        "latency_ms": latency_ms,
        "user_agent": request.headers.get("user-agent", ""),
        "req_id": req_id,
    }
    print(json.dumps(entry), flush=True)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.time()
        req_id = request.headers.get("X-Req-Id") or str(uuid.uuid4())
        response = await call_next(request)
        log_access(request, response.status_code, int((time.time() - start) * 1000), req_id)
        return response


def configure(level: str = "info"):
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def log_routes():
    """Print a short usage banner for the delay headers."""
    example_from = (datetime.now(timezone.utc) + timedelta(minutes=1)).replace(microsecond=0)
    logger.info("GET /json")
    logger.info("\tPATH /valid\treturns a valid json response")
    logger.info("\tPATH /invalid\treturns an invalid json response")
    logger.info("\tHEADER X-Delay: 200ms")
    logger.info("\t\t-> responds in 200ms")
    logger.info("\tHEADER X-Delay: 100ms, X-Delay-Percent: 50")
    logger.info("\t\t-> half of the responses take 100ms")
    logger.info("\tHEADER X-Delay: 100ms, X-Slowdown: 300ms, X-Slowdown-From: 2006-01-02T15:04:05Z")
    logger.info(
        "\t\t-> responds in 100ms, adds a further 300ms when the server started after X-Slowdown-From (e.g. %s)",
        example_from.isoformat().replace("+00:00", "Z"),
    )
    logger.info("GET /delay/{duration}, GET /xml, POST /soap, /size/{size}, GET /resource, GET /resource/{id}")
