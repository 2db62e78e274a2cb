# =============================================
# File: tests/test_serve_cli.py
# Purpose: Server profile loading (config.json test/product) and uvicorn wiring
# =============================================
import sys, os, json
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import pytest

from oborobot.cli import serve


def _write_config(tmp_path, data):
    p = tmp_path / "config.json"
    p.write_text(json.dumps(data), encoding="utf-8")
    return str(p)


CONFIG = {
    "test": {"schema": "https", "host": "localhost", "port": "8443"},
    "product": {"schema": "http", "host": "0.0.0.0", "port": "80"},
}


def test_load_profile(tmp_path):
    path = _write_config(tmp_path, CONFIG)
    cfg = serve.load_profile(path, "test")
    assert cfg.schema_ == "https"
    assert cfg.port == 8443
    cert, key = cfg.cert_paths("test")
    assert cert.replace("\\", "/") == "cert_key/test/cert.pem"
    assert key.replace("\\", "/") == "cert_key/test/key.pem"

def test_unknown_profile_rejected(tmp_path):
    path = _write_config(tmp_path, CONFIG)
    with pytest.raises(ValueError):
        serve.load_profile(path, "staging")

def test_missing_config_exits_1(tmp_path):
    with pytest.raises(SystemExit) as ei:
        serve.main(["test", "--config", str(tmp_path / "nope.json")])
    assert ei.value.code == 1

def test_main_runs_uvicorn_with_tls(tmp_path, monkeypatch):
    import uvicorn
    calls = {}
    monkeypatch.setattr(uvicorn, "run", lambda app, **kw: calls.update(app=app, **kw))

    serve.main(["test", "--config", _write_config(tmp_path, CONFIG)])
    assert calls["app"] == "oborobot.main:app"
    assert calls["port"] == 8443
    assert "ssl_certfile" in calls and "ssl_keyfile" in calls

def test_main_plain_http(tmp_path, monkeypatch):
    import uvicorn
    calls = {}
    monkeypatch.setattr(uvicorn, "run", lambda app, **kw: calls.update(app=app, **kw))

    serve.main(["product", "--config", _write_config(tmp_path, CONFIG)])
    assert calls["host"] == "0.0.0.0"
    assert "ssl_certfile" not in calls
