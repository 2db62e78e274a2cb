# =============================================
# File: tests/test_logging.py
# =============================================
import sys, os, json
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from conftest import USER_ID


def _find_json_events(caplog, name: str):
    out = []
    for rec in caplog.records:
        try:
            data = json.loads(rec.message)
        except Exception:
            continue
        if data.get("event") == name:
            out.append(data)
    return out


def test_structured_log_on_success(client, caplog):
    caplog.set_level("INFO", logger="oborobot")
    r = client.post("/api/question", json={"userID": USER_ID, "value": "Go Python", "lang": "en"})
    assert r.status_code == 200

    evts = _find_json_events(caplog, "request.completed")
    assert evts
    evt = evts[-1]
    assert evt["path"] == "/api/question"
    assert evt["status"] == 200
    assert evt["request_id"] == r.headers["X-Request-ID"]
    assert isinstance(evt["latency_ms"], int)
    assert evt["user_id"] == USER_ID
    assert evt["question_number"] == 1
    assert len(evt["qhash"]) == 10
    # raw phrase never logged
    assert "Go Python" not in json.dumps(evt)


def test_structured_log_carries_error_kind(client, caplog):
    caplog.set_level("INFO", logger="oborobot")
    r = client.post("/api/question", json={"userID": USER_ID, "value": "Rust", "lang": "en"})
    assert r.status_code == 404

    evt = _find_json_events(caplog, "request.completed")[-1]
    assert evt["status"] == 404
    assert evt["error_kind"] == "no_match"
