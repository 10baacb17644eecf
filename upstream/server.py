import logging
import socket
from typing import Optional, Tuple

import uvicorn

from . import config
from .app import create_app
from .logs import log_routes

logger = logging.getLogger("upstream")


def parse_address(address: str) -> Tuple[str, int]:
    """Split 'host:port' (or ':port' for all interfaces, '[::1]:port' for IPv6)."""
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit() or int(port) > 65535:
        raise ValueError(f"invalid listen address: {address!r}")
    return host.strip("[]"), int(port)


def _bind(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    return socket.create_server((host, port), family=family)


def _run(address: str, certfile: Optional[str] = None, keyfile: Optional[str] = None):
    host, port = parse_address(address)
    app = create_app()
    logger.info("config: %s", config.get_env_vars())
    log_routes()

    cfg = uvicorn.Config(
        app,
        host=host or "0.0.0.0",
        port=port,
        log_level=config.LOG_LEVEL,
        access_log=False,
        ssl_certfile=certfile,
        ssl_keyfile=keyfile,
    )
    # Loads the TLS context too, so a bad cert/key fails before we bind.
    cfg.load()
    sock = _bind(host, port)
    try:
        uvicorn.Server(cfg).run(sockets=[sock])
    finally:
        sock.close()


def serve(address: str):
    """Serve plain HTTP on address until shutdown; startup errors are raised."""
    logger.info("starting server on %s", address)
    _run(address)


def serve_tls(address: str, cert_path: str, key_path: str):
    """Serve HTTPS on address with the given PEM cert and key files."""
    logger.info("starting TLS server on %s", address)
    _run(address, certfile=cert_path, keyfile=key_path)
