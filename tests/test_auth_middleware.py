import json

import pytest

from app.security.auth import check_bearer_token
from app.user.errors import AuthenticationError


def _log_lines(capsys):
    out = capsys.readouterr().out
    return [json.loads(line) for line in out.splitlines() if line.startswith("{")]


def test_missing_header_is_rejected_before_handlers(anon_client, store, capsys):
    r = anon_client.post("/users", json={"Username": "alice", "Email": "alice@example.com"})
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized: Token missing or malformed."}
    assert store.list() == []

    rejected = [e for e in _log_lines(capsys) if e["event"] == "auth_rejected"]
    assert rejected[-1]["level"] == "WARNING"
    assert rejected[-1]["reason"] == "missing_or_malformed"


def test_non_bearer_scheme_is_malformed(anon_client, auth_token):
    r = anon_client.get("/users", headers={"Authorization": f"Basic {auth_token}"})
    assert r.status_code == 401
    assert r.json()["error"] == "Unauthorized: Token missing or malformed."


def test_wrong_token_is_invalid(anon_client, capsys):
    r = anon_client.get("/users", headers={"Authorization": "Bearer not-the-token"})
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized: Invalid token."}

    rejected = [e for e in _log_lines(capsys) if e["event"] == "auth_rejected"]
    assert rejected[-1]["reason"] == "invalid_token"
    assert "not-the-token" not in json.dumps(rejected[-1])


def test_valid_token_reaches_handlers(client):
    assert client.get("/users").status_code == 200


def test_unauthenticated_request_never_logged_by_inner_stage(anon_client, capsys):
    anon_client.get("/users")
    events = [e["event"] for e in _log_lines(capsys)]
    assert "auth_rejected" in events
    assert "http_request" not in events


def test_token_is_trimmed_and_compared_exactly():
    check_bearer_token("Bearer  secret ", "secret")
    with pytest.raises(AuthenticationError) as exc:
        check_bearer_token("Bearer Secret", "secret")
    assert exc.value.reason == AuthenticationError.INVALID_TOKEN


def test_scheme_is_case_sensitive():
    with pytest.raises(AuthenticationError) as exc:
        check_bearer_token("bearer secret", "secret")
    assert exc.value.reason == AuthenticationError.MISSING_OR_MALFORMED


def test_empty_configured_token_rejects_everything():
    with pytest.raises(AuthenticationError) as exc:
        check_bearer_token("Bearer ", "")
    assert exc.value.reason == AuthenticationError.INVALID_TOKEN


def test_rejection_log_never_contains_the_token(anon_client, auth_token, capsys):
    r = anon_client.get("/users", headers={"Authorization": f"bearer {auth_token}"})
    assert r.status_code == 401

    rejected = [e for e in _log_lines(capsys) if e["event"] == "auth_rejected"]
    assert rejected[-1]["reason"] == "missing_or_malformed"
    assert "authorization" not in rejected[-1]
    logged = {k: v for k, v in rejected[-1].items() if k not in ("ts", "request_id")}
    assert auth_token[-4:] not in json.dumps(logged)
