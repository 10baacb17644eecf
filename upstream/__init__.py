from .app import create_app
from .errors import InvalidFormat, NotFound, UpstreamError
from .server import serve, serve_tls

__all__ = [
    "InvalidFormat",
    "NotFound",
    "UpstreamError",
    "create_app",
    "serve",
    "serve_tls",
]
