from datetime import timedelta

from fastapi.testclient import TestClient

from minivote.main import app
from minivote.security import issue_wallet_token

client = TestClient(app)

WALLET = "0x83A22d02D374F0Aec2C4425130922C93046aEe6a"


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_wallet_session_token_round_trip():
    r = client.post("/auth/wallet", json={"address": f"  {WALLET} "})
    assert r.status_code == 201
    body = r.json()
    assert body["token_type"] == "bearer"

    me = client.get("/auth/me", headers=_bearer(body["access_token"]))
    assert me.status_code == 200
    assert me.json() == {"identity": WALLET}


def test_legacy_wallet_token_accepted():
    me = client.get("/auth/me", headers=_bearer(f"wallet:{WALLET}"))
    assert me.json() == {"identity": WALLET}


def test_missing_or_bad_tokens_are_rejected():
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers=_bearer("garbage")).status_code == 401
    assert client.get("/auth/me", headers=_bearer("wallet:")).status_code == 401
    assert client.get("/auth/me", headers={"Authorization": f"Token wallet:{WALLET}"}).status_code == 401


def test_expired_token_is_rejected():
    token = issue_wallet_token(WALLET, expires_delta=timedelta(seconds=-5))
    assert client.get("/auth/me", headers=_bearer(token)).status_code == 401


def test_short_address_is_rejected():
    r = client.post("/auth/wallet", json={"address": "0x"})
    assert r.status_code == 422


def test_wallet_session_rate_limited():
    codes = [client.post("/auth/wallet", json={"address": WALLET}).status_code for _ in range(11)]
    assert codes[:10] == [201] * 10
    assert codes[10] == 429
    last = client.post("/auth/wallet", json={"address": WALLET})
    assert last.json() == {"error": "too_many_requests", "detail": "Try again later."}
