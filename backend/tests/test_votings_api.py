from fastapi.testclient import TestClient

from minivote.core.settings import reload_settings
from minivote.main import app
from minivote.state import reset_voting_state

client = TestClient(app)

CREATOR = "0x83A22d02D374F0Aec2C4425130922C93046aEe6a"
VOTER_X = "0x00000000000000000000000000000000000000aa"
VOTER_Y = "0x00000000000000000000000000000000000000bb"
VOTER_Z = "0x00000000000000000000000000000000000000cc"


def _auth(address):
    return {"Authorization": f"Bearer wallet:{address}"}


def _create(capacity=2, options=("Tacos", "Ramen"), who=CREATOR):
    return client.post(
        "/votings",
        json={
            "title": "Lunch",
            "description": "Where do we eat?",
            "options": list(options),
            "capacity": capacity,
            "transaction_hash": "0xcreate",
        },
        headers=_auth(who),
    )


def _vote(voting_id, option_id, who):
    return client.post(
        f"/votings/{voting_id}/vote",
        json={"option_id": option_id, "transaction_hash": f"0xvote-{who[-2:]}"},
        headers=_auth(who),
    )


def _reveal(voting_id, who):
    return client.post(
        f"/votings/{voting_id}/reveal", json={"transaction_hash": "0xreveal"}, headers=_auth(who)
    )


def test_create_voting():
    r = _create(capacity=5, options=(" Tacos ", "Ramen", "Pizza"))
    assert r.status_code == 201
    body = r.json()
    assert body["id"] == 1
    assert body["status"] == "active"
    assert body["is_active"] is True
    assert body["creator"] == CREATOR
    assert body["participant_count"] == 0
    assert [o["text"] for o in body["options"]] == ["Tacos", "Ramen", "Pizza"]
    assert all(o["vote_count"] is None for o in body["options"])


def test_create_requires_wallet():
    r = client.post(
        "/votings",
        json={"title": "t", "description": "d", "options": ["a", "b"], "capacity": 2, "transaction_hash": "0x1"},
    )
    assert r.status_code == 401
    assert r.json()["error"] == "unauthenticated"
    assert client.get("/votings").json() == []


def test_create_rejects_invalid_input():
    r = _create(options=("only one",))
    assert r.status_code == 400
    assert r.json()["error"] == "validation_error"

    r = _create(capacity=0)
    assert r.status_code == 400

    assert client.get("/votings").json() == []


def test_full_lifecycle():
    voting_id = _create(capacity=2).json()["id"]

    r = _vote(voting_id, 2, VOTER_X)
    assert r.status_code == 200
    assert r.json()["participant_count"] == 1
    assert r.json()["status"] == "active"
    assert r.json()["my_vote"] == 2
    assert r.json()["can_vote"] is False

    dup = _vote(voting_id, 1, VOTER_X.upper().replace("0X", "0x"))
    assert dup.status_code == 409
    assert dup.json()["error"] == "already_voted"

    r = _vote(voting_id, 1, VOTER_Y)
    assert r.json()["status"] == "awaiting_reveal"
    assert r.json()["participant_count"] == 2

    late = _vote(voting_id, 1, VOTER_Z)
    assert late.status_code == 409
    assert late.json()["error"] == "not_active"

    early = client.get(f"/votings/{voting_id}/results")
    assert early.status_code == 409
    assert early.json()["error"] == "invalid_state"

    forbidden = _reveal(voting_id, VOTER_X)
    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "forbidden"
    assert client.get(f"/votings/{voting_id}").json()["status"] == "awaiting_reveal"

    revealed = _reveal(voting_id, CREATOR.lower())
    assert revealed.status_code == 200
    body = revealed.json()
    assert body["status"] == "revealed" and body["is_revealed"] is True
    assert [(o["vote_count"], o["percentage"]) for o in body["options"]] == [(1, 50), (1, 50)]

    again = _reveal(voting_id, CREATOR)
    assert again.status_code == 409
    assert again.json()["error"] == "invalid_state"

    results = client.get(f"/votings/{voting_id}/results").json()
    assert results["participant_count"] == 2
    assert results["results"] == [
        {"option_id": 1, "text": "Tacos", "vote_count": 1, "percentage": 50},
        {"option_id": 2, "text": "Ramen", "vote_count": 1, "percentage": 50},
    ]


def test_tallies_hidden_until_reveal_and_can_reveal_flag():
    voting_id = _create(capacity=1).json()["id"]
    _vote(voting_id, 1, VOTER_X)

    as_creator = client.get(f"/votings/{voting_id}", headers=_auth(CREATOR)).json()
    assert as_creator["can_reveal"] is True
    assert all(o["vote_count"] is None and o["percentage"] is None for o in as_creator["options"])

    as_voter = client.get(f"/votings/{voting_id}", headers=_auth(VOTER_X)).json()
    assert as_voter["can_reveal"] is False
    assert as_voter["my_vote"] == 1

    anonymous = client.get(f"/votings/{voting_id}").json()
    assert anonymous["can_reveal"] is False and anonymous["can_vote"] is False


def test_vote_status_endpoint():
    voting_id = _create(capacity=3).json()["id"]
    _vote(voting_id, 2, VOTER_X)

    r = client.get(f"/votings/{voting_id}/status", headers=_auth(VOTER_X))
    assert r.json() == {"already_voted": True, "option_id": 2}

    r = client.get(f"/votings/{voting_id}/status", headers=_auth(VOTER_Y))
    assert r.json() == {"already_voted": False, "option_id": None}

    assert client.get(f"/votings/{voting_id}/status").status_code == 401
    assert client.get("/votings/99/status", headers=_auth(VOTER_X)).status_code == 404


def test_unknown_voting_and_option():
    r = client.get("/votings/42")
    assert r.status_code == 404
    assert r.json()["error"] == "not_found"

    assert _vote(42, 1, VOTER_X).status_code == 404
    assert _reveal(42, CREATOR).status_code == 404

    voting_id = _create().json()["id"]
    r = _vote(voting_id, 9, VOTER_X)
    assert r.status_code == 404
    assert client.get(f"/votings/{voting_id}").json()["participant_count"] == 0


def test_vote_without_wallet_is_unauthenticated():
    voting_id = _create().json()["id"]
    r = client.post(f"/votings/{voting_id}/vote", json={"option_id": 1, "transaction_hash": "0x1"})
    assert r.status_code == 401
    assert client.get(f"/votings/{voting_id}").json()["participant_count"] == 0


def test_listing_is_most_recent_first():
    first = _create().json()["id"]
    second = _create().json()["id"]
    assert [v["id"] for v in client.get("/votings").json()] == [second, first]


def test_notifications_follow_confirmed_actions():
    voting_id = _create(capacity=1).json()["id"]
    _vote(voting_id, 2, VOTER_X)
    _vote(voting_id, 1, VOTER_Y)  # rejected, no notification
    _reveal(voting_id, CREATOR)

    notes = client.get("/notifications").json()
    assert [n["title"] for n in notes] == ["Results Revealed!", "Vote Submitted!", "Voting Created!"]
    assert notes[1]["body"] == 'You voted for "Ramen". Transaction: 0xvote-aa'
    assert notes[2]["body"] == '"Lunch" has been created successfully. Transaction: 0xcreate'


def test_demo_votings_seeded(monkeypatch):
    monkeypatch.setenv("SEED_DEMO_VOTINGS", "1")
    reload_settings()
    reset_voting_state(app)

    listed = client.get("/votings", headers=_auth(CREATOR)).json()
    assert [v["id"] for v in listed] == [1, 2, 3]
    assert [v["status"] for v in listed] == ["awaiting_reveal", "active", "revealed"]
    assert listed[0]["can_reveal"] is True
    assert listed[1]["participant_count"] == 89

    results = client.get("/votings/3/results").json()
    assert [r["percentage"] for r in results["results"]] == [40, 30, 16, 14]

    closed = _reveal(1, CREATOR.upper().replace("0X", "0x"))
    assert closed.status_code == 200

    created = _create().json()
    assert created["id"] == 4
    assert client.get("/votings").json()[0]["id"] == 4
