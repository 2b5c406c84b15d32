import pytest
from flask import Flask

from mrprime import api
from mrprime.api import mr_bp
from mrprime.config import Settings
from mrprime.errors import TaskFailure, TrialTimeout


@pytest.fixture
def client():
    app = Flask(__name__)
    app.config["MR_SETTINGS"] = Settings(trials=10, workers=2, timeout_s=5.0,
                                         max_bits=256, log_level="WARNING")
    app.register_blueprint(mr_bp)
    return app.test_client()


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.get_json()
    assert body["ok"] is True and body["max_bits"] == 256


def test_isprime_serial(client):
    r = client.get("/api/isprime?n=97")
    assert r.status_code == 200
    body = r.get_json()
    assert body["probable_prime"] is True
    assert body["n"] == "97" and body["trials"] == 10 and body["workers"] is None
    assert "X-Compute-ms" in r.headers


def test_isprime_concurrent(client):
    r = client.get("/api/isprime", query_string={"n": str(2**127 - 1), "trials": 8, "workers": 3})
    body = r.get_json()
    assert r.status_code == 200
    assert body["probable_prime"] is True and body["workers"] == 3 and body["bits"] == 127

    r = client.get("/api/isprime", query_string={"n": "561", "trials": 20, "workers": 2})
    assert r.get_json()["probable_prime"] is False


@pytest.mark.parametrize("qs", [
    {"n": "8"}, {"n": "1"}, {"n": "abc"}, {"n": ""}, {"n": "-7"},
    {"n": "97", "trials": "x"}, {"n": "97", "trials": "0"}, {"n": "97", "workers": "0"},
    {"n": str(2**300 + 1)},
    {"n": "9" * 5001},
    {"n": "\u00b2"},
    {"n": "0" * 5001},
])
def test_isprime_bad_requests(client, qs):
    r = client.get("/api/isprime", query_string=qs)
    assert r.status_code == 400
    assert r.get_json()["ok"] is False


def test_isprime_timeout_maps_to_504(client, monkeypatch):
    def stalled(self, n, trials):
        raise TrialTimeout(n, trials, 0, self.timeout_s)
    monkeypatch.setattr(api.ConcurrentEngine, "is_probable_prime", stalled)
    r = client.get("/api/isprime", query_string={"n": "97", "workers": 2})
    assert r.status_code == 504


def test_isprime_task_failure_maps_to_500(client, monkeypatch):
    def broken(self, n, trials):
        raise TaskFailure(n, 1, ArithmeticError("boom"))
    monkeypatch.setattr(api.ConcurrentEngine, "is_probable_prime", broken)
    r = client.get("/api/isprime", query_string={"n": "97", "workers": 2})
    assert r.status_code == 500
    assert "trial 1" in r.get_json()["error"]
