import time

from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from elderly_assistant.utils.rate_limit import optional_rate_limit, rate_limit_health_info


def _make_app(times=2, seconds=60):
    app = FastAPI()

    @app.get("/limitedA", dependencies=[Depends(optional_rate_limit(times, seconds))])
    def limited_a():
        return {"ok": True}

    @app.get("/limitedB", dependencies=[Depends(optional_rate_limit(times, seconds))])
    def limited_b():
        return {"ok": True}

    @app.get("/rl_info")
    def rl_info(request: Request):
        return rate_limit_health_info(request)

    return app


def test_rate_limit_fallback_blocks_after_limit(monkeypatch):
    client = TestClient(_make_app(times=2, seconds=60))
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")

    assert client.get("/limitedA").status_code == 200
    assert client.get("/limitedA").status_code == 200
    assert client.get("/limitedA").status_code == 429


def test_rate_limit_is_per_path_and_forwarded_ip_behind_trusted_proxy(monkeypatch):
    client = TestClient(_make_app(times=2, seconds=60))
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    monkeypatch.setattr("elderly_assistant.config.TRUST_FORWARDED_FOR", True)
    ip1 = {"X-Forwarded-For": "10.0.0.1"}
    ip2 = {"X-Forwarded-For": "10.0.0.2, 172.16.0.1"}

    assert client.get("/limitedA", headers=ip1).status_code == 200
    assert client.get("/limitedA", headers=ip1).status_code == 200
    assert client.get("/limitedA", headers=ip1).status_code == 429

    # Autre chemin, même IP: quota indépendant
    assert client.get("/limitedB", headers=ip1).status_code == 200
    # Même chemin, autre IP: quota indépendant
    assert client.get("/limitedA", headers=ip2).status_code == 200
    assert client.get("/limitedA", headers=ip2).status_code == 200
    assert client.get("/limitedA", headers=ip2).status_code == 429


def test_forwarded_for_is_ignored_without_trusted_proxy(monkeypatch):
    client = TestClient(_make_app(times=2, seconds=60))
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    monkeypatch.setattr("elderly_assistant.config.TRUST_FORWARDED_FOR", False)

    codes = [client.get("/limitedA", headers={"X-Forwarded-For": f"1.2.3.{i}"}).status_code for i in range(4)]

    # Chaque requête falsifie une IP différente: même quota (IP réelle du client)
    assert codes == [200, 200, 429, 429]


def test_rate_limit_resets_after_window_sleep(monkeypatch):
    client = TestClient(_make_app(times=2, seconds=1))
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")

    assert client.get("/limitedA").status_code == 200
    assert client.get("/limitedA").status_code == 200
    assert client.get("/limitedA").status_code == 429

    time.sleep(1.1)
    assert client.get("/limitedA").status_code == 200


def test_rate_limit_disabled_flag_bypasses_limit(monkeypatch):
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)
    app = _make_app(times=2, seconds=60)
    client = TestClient(app)
    app.state.rate_limit_enabled = False

    for _ in range(5):
        assert client.get("/limitedA").status_code == 200


def test_rate_limit_health_info(monkeypatch):
    app = _make_app()
    client = TestClient(app)
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")

    assert client.get("/rl_info").json() == {"enabled": None, "local_fallback": True}

    app.state.rate_limit_enabled = True
    assert client.get("/rl_info").json()["enabled"] is True
