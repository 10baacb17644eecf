import socket

import pytest

from upstream import serve, serve_tls
from upstream.server import parse_address


@pytest.mark.parametrize(
    "address,expected",
    [
        (":8081", ("", 8081)),
        ("127.0.0.1:9000", ("127.0.0.1", 9000)),
        ("localhost:80", ("localhost", 80)),
        ("[::1]:8443", ("::1", 8443)),
    ],
)
def test_parse_address(address, expected):
    assert parse_address(address) == expected


@pytest.mark.parametrize("address", ["", "8081", "host:", "host:port", ":70000"])
def test_parse_address_invalid(address):
    with pytest.raises(ValueError):
        parse_address(address)


def test_serve_bad_address():
    with pytest.raises(ValueError):
        serve("nowhere")


def test_serve_port_in_use():
    busy = socket.create_server(("127.0.0.1", 0))
    try:
        port = busy.getsockname()[1]
        with pytest.raises(OSError):
            serve(f"127.0.0.1:{port}")
    finally:
        busy.close()


def test_serve_tls_missing_cert(tmp_path):
    with pytest.raises(OSError):
        serve_tls("127.0.0.1:0", str(tmp_path / "cert.pem"), str(tmp_path / "key.pem"))
