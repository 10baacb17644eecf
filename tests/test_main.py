import pytest

from upstream import __main__ as cli


def test_cert_without_key_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        cli.main(["--cert", "cert.pem"])
    assert exc.value.code == 2


def test_plain_serve(monkeypatch):
    calls = []
    monkeypatch.setattr(cli, "serve", lambda addr: calls.append(("serve", addr)))
    cli.main(["--addr", ":9999"])
    assert calls == [("serve", ":9999")]


def test_tls_serve(monkeypatch):
    calls = []
    monkeypatch.setattr(cli, "serve_tls", lambda addr, cert, key: calls.append((addr, cert, key)))
    cli.main(["--addr", ":9443", "--cert", "c.pem", "--key", "k.pem"])
    assert calls == [(":9443", "c.pem", "k.pem")]


def test_default_address(monkeypatch):
    calls = []
    monkeypatch.setattr(cli, "serve", calls.append)
    cli.main([])
    assert calls == [cli.config.UPSTREAM_ADDR]


def test_startup_failure_exits_nonzero(monkeypatch):
    def fail(addr):
        raise OSError("address already in use")

    monkeypatch.setattr(cli, "serve", fail)
    with pytest.raises(SystemExit) as exc:
        cli.main(["--addr", ":1"])
    assert exc.value.code == 1
