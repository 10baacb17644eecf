import argparse
import logging
import sys

from . import config, logs
from .server import serve, serve_tls

logger = logging.getLogger("upstream")


def main(argv=None):
    ap = argparse.ArgumentParser(prog="upstream", description="Mock upstream server for testing clients and proxies")
    ap.add_argument("--addr", default=config.UPSTREAM_ADDR, help="listen address for the server")
    ap.add_argument("--cert", help="TLS certificate file (PEM)")
    ap.add_argument("--key", help="TLS private key file (PEM)")
    args = ap.parse_args(argv)

    if bool(args.cert) != bool(args.key):
        ap.error("--cert and --key must be given together")

    logs.configure(config.LOG_LEVEL)
    try:
        if args.cert:
            serve_tls(args.addr, args.cert, args.key)
        else:
            serve(args.addr)
    except (OSError, ValueError) as e:
        logger.error("server failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
