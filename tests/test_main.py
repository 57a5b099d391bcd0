"""
Testes da API web (FastAPI).
"""

import pytest
from fastapi.testclient import TestClient

import main


@pytest.fixture
def client():
    main.sessions.clear()
    main.last_used.clear()
    return TestClient(main.app)


class TestRunEndpoint:

    def test_run_when_valid_program_then_output(self, client):
        code = "10 INPUT A\n20 INPUT B\n30 IF A > B THEN 60\n40 PRINT B\n50 END\n60 PRINT A"
        response = client.post("/api/run", json={"code": code, "inputs": ["7", "3"]})
        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["output"] == " ?  ? 7\n"
        assert body["errors"] == []

    def test_run_when_bad_line_then_reports_line_error(self, client):
        response = client.post("/api/run", json={"code": "10 PRINT 1\n20 LET\n30 PRINT 2"})
        body = response.json()
        assert body["success"] is False
        assert body["errors"] == ["Linha 2: SYNTAX ERROR"]
        assert body["output"] == "1\n2\n"

    def test_run_when_runtime_error_then_reported(self, client):
        response = client.post("/api/run", json={"code": "10 PRINT 1\n20 PRINT z"})
        body = response.json()
        assert body["success"] is False
        assert body["output"] == "1\n"
        assert body["errors"] == ["VARIABLE NOT DEFINED"]

    def test_run_when_endless_loop_then_limit(self, client, monkeypatch):
        monkeypatch.setattr(main, "settings", main.Settings(max_steps=100))
        response = client.post("/api/run", json={"code": "10 GOTO 10"})
        assert response.json()["errors"] == ["EXECUTION LIMIT EXCEEDED"]


class TestSessionEndpoints:

    def test_session_lifecycle(self, client):
        session_id = client.post("/api/sessions").json()["session_id"]

        for line in ("10 LET X = 1", "20 PRINT X", "30 END"):
            response = client.post(f"/api/sessions/{session_id}/lines", json={"line": line})
            assert response.json()["error"] is None

        response = client.post(f"/api/sessions/{session_id}/lines", json={"line": "RUN"})
        assert response.json()["output"] == "1\n"

        state = client.get(f"/api/sessions/{session_id}").json()
        assert state["lines"] == ["10 LET X = 1", "20 PRINT X", "30 END"]
        assert state["variables"] == {"X": 1}

        response = client.post(f"/api/sessions/{session_id}/lines", json={"line": "QUIT"})
        assert response.json()["quit"] is True
        assert client.get(f"/api/sessions/{session_id}").status_code == 404

    def test_session_line_error(self, client):
        session_id = client.post("/api/sessions").json()["session_id"]
        response = client.post(f"/api/sessions/{session_id}/lines", json={"line": "GOTO 10"})
        assert response.json()["error"] == "SYNTAX ERROR"

    def test_session_input_uses_request_inputs(self, client):
        session_id = client.post("/api/sessions").json()["session_id"]
        response = client.post(f"/api/sessions/{session_id}/lines", json={"line": "INPUT n", "inputs": ["x", "9"]})
        assert response.json()["output"] == " ? INVALID NUMBER\n ? "
        assert client.get(f"/api/sessions/{session_id}").json()["variables"] == {"n": 9}

    def test_delete_session(self, client):
        session_id = client.post("/api/sessions").json()["session_id"]
        assert client.delete(f"/api/sessions/{session_id}").status_code == 200
        assert client.delete(f"/api/sessions/{session_id}").status_code == 404

    def test_unknown_session_then_404(self, client):
        response = client.post("/api/sessions/nope/lines", json={"line": "RUN"})
        assert response.status_code == 404


def test_examples_are_valid_programs(client):
    examples = client.get("/api/examples").json()
    for example in examples.values():
        response = client.post("/api/run", json={"code": example["code"], "inputs": ["2", "5"]})
        assert response.json()["success"] is True


class TestSessionLimits:

    def test_create_when_limit_reached_then_drops_least_recently_used(self, client, monkeypatch):
        monkeypatch.setattr(main, "settings", main.Settings(max_sessions=2))
        now = [0.0]
        monkeypatch.setattr(main, "clock", lambda: now[0])

        first = client.post("/api/sessions").json()["session_id"]
        now[0] = 1.0
        second = client.post("/api/sessions").json()["session_id"]
        now[0] = 2.0
        client.get(f"/api/sessions/{first}")
        now[0] = 3.0
        third = client.post("/api/sessions").json()["session_id"]

        assert len(main.sessions) == 2
        assert client.get(f"/api/sessions/{second}").status_code == 404
        assert client.get(f"/api/sessions/{first}").status_code == 200
        assert client.get(f"/api/sessions/{third}").status_code == 200

    def test_idle_session_expires(self, client, monkeypatch):
        monkeypatch.setattr(main, "settings", main.Settings(session_ttl=60.0))
        now = [0.0]
        monkeypatch.setattr(main, "clock", lambda: now[0])

        idle = client.post("/api/sessions").json()["session_id"]
        active = client.post("/api/sessions").json()["session_id"]
        now[0] = 50.0
        client.get(f"/api/sessions/{active}")
        now[0] = 100.0

        assert client.get(f"/api/sessions/{idle}").status_code == 404
        assert client.get(f"/api/sessions/{active}").status_code == 200
        assert idle not in main.last_used


def test_run_when_non_ascii_digit_then_syntax_error_not_500(client):
    response = client.post("/api/run", json={"code": "10 PRINT ²\n20 PRINT 1"})
    assert response.status_code == 200
    assert response.json()["errors"] == ["Linha 1: SYNTAX ERROR"]
    assert response.json()["output"] == "1\n"
