"""Console app: lifespan mount/unmount and the prediction panel API."""

import time

import httpx
import pytest
from fastapi.testclient import TestClient

from fixtures import RecordingHandler, make_client
from netpulse import main


def _wait_for(tc: TestClient, predicate, timeout: float = 2.0) -> dict:
    deadline = time.monotonic() + timeout
    state = tc.get("/api/state").json()
    while not predicate(state) and time.monotonic() < deadline:
        time.sleep(0.01)
        state = tc.get("/api/state").json()
    return state


def _service(health_status=200, issue_type="latency_spike"):
    def respond(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/health":
            return httpx.Response(health_status)
        if request.url.path == "/predict":
            return httpx.Response(200, json={"predicted_issue_type": issue_type})
        return httpx.Response(404)

    return RecordingHandler(respond)


@pytest.fixture
def service():
    return _service()


@pytest.fixture
def console(monkeypatch, service):
    monkeypatch.setattr(main, "client", make_client(service))
    with TestClient(main.app) as tc:
        yield tc


class TestLifespan:

    def test_probe_runs_on_startup(self, console, service):
        state = _wait_for(console, lambda s: s["health"] != "unknown")
        assert state["health"] == "healthy"
        assert state["health_badge"]["text"] == "Online"
        assert service.calls_to("/health")

    def test_shutdown_tears_down_core(self, monkeypatch, service):
        monkeypatch.setattr(main, "client", make_client(service))
        with TestClient(main.app):
            probe = main.get_probe()
        assert not probe.running
        assert not main.client.started
        with pytest.raises(RuntimeError):
            main.get_controller()

    def test_health_endpoint(self, console):
        _wait_for(console, lambda s: s["health"] != "unknown")
        body = console.get("/health").json()
        assert body["status"] == "ok"
        assert body["prediction_service"] == "healthy"


class TestPredictionApi:

    def test_predict_round_trip(self, console, service):
        resp = console.post("/api/predict")
        assert resp.status_code == 200
        assert resp.json()["accepted"] is True
        state = _wait_for(console, lambda s: s["outcome"]["kind"] != "pending")
        assert state["outcome"] == {"kind": "succeeded", "issue_type": "latency_spike"}
        assert state["classification"]["label"] == "LATENCY SPIKE"
        assert state["classification"]["description"] == "Unusual delay in network response times detected"
        assert state["submit_button"]["disabled"] is False
        assert len(service.calls_to("/predict")) == 1

    def test_reset_clears_result(self, console):
        console.post("/api/predict")
        _wait_for(console, lambda s: s["outcome"]["kind"] != "pending")
        state = console.post("/api/reset").json()
        assert state["outcome"] == {"kind": "idle"}
        assert state["classification"] is None

    def test_unhealthy_service_gates_submission(self, monkeypatch):
        service = _service(health_status=503)
        monkeypatch.setattr(main, "client", make_client(service))
        with TestClient(main.app) as tc:
            state = _wait_for(tc, lambda s: s["health"] == "unhealthy")
            assert state["can_submit"] is False
            assert state["submit_button"]["disabled"] is True
            body = tc.post("/api/predict").json()
            assert body["accepted"] is False
            assert body["outcome"] == {"kind": "idle"}
        assert service.calls_to("/predict") == []


class TestFormApi:

    def test_non_numeric_input_normalizes_to_zero(self, console):
        resp = console.post("/api/form", json={"field": "packet_size", "value": "abc"})
        assert resp.status_code == 200
        assert resp.json()["packet_size"] == 0
        assert console.get("/api/state").json()["form"]["packet_size"] == 0

    def test_string_field(self, console):
        resp = console.post("/api/form", json={"field": "protocol", "value": "ICMP"})
        assert resp.json()["protocol"] == "ICMP"

    def test_unknown_field(self, console):
        resp = console.post("/api/form", json={"field": "ttl", "value": "64"})
        assert resp.status_code == 422

    def test_edit_is_sent_with_next_prediction(self, console, service):
        console.post("/api/form", json={"field": "latency_ms", "value": "250.5"})
        console.post("/api/predict")
        _wait_for(console, lambda s: s["outcome"]["kind"] != "pending")
        predict_call = service.calls_to("/predict")[0]
        assert b'"latency_ms":250.5' in predict_call.content


class TestPage:

    def test_page_renders(self, console):
        resp = console.get("/")
        assert resp.status_code == 200
        assert "Network Status Prediction" in resp.text
        assert 'value="192.168.1.1"' in resp.text
        assert "Predict Network Status" in resp.text

    def test_ui_alias(self, console):
        assert console.get("/ui").status_code == 200

    def test_operator_values_are_escaped(self, console):
        console.post("/api/form", json={"field": "source_ip", "value": '"><script>x</script>'})
        text = console.get("/").text
        assert "<script>x</script>" not in text

    def test_placeholder_text_in_operator_values_is_kept_literal(self, console):
        console.post("/api/form", json={"field": "timestamp", "value": "__SOURCE_IP__"})
        console.post("/api/form", json={"field": "source_ip", "value": "__INITIAL_STATE__"})
        text = console.get("/").text
        assert 'id="timestamp" name="timestamp" value="__SOURCE_IP__"' in text
        assert 'id="source_ip" name="source_ip" value="__INITIAL_STATE__"' in text
        assert '"timestamp": "__SOURCE_IP__"' in text
        assert '"source_ip": "__INITIAL_STATE__"' in text


class TestErrors:

    def test_unhandled_error_is_a_500(self, monkeypatch, service):
        def broken():
            raise httpx.ConnectError("should not leak as 503")

        monkeypatch.setattr(main, "client", make_client(service))
        monkeypatch.setattr(main, "current_state", broken)
        with TestClient(main.app, raise_server_exceptions=False) as tc:
            resp = tc.get("/api/state")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}
