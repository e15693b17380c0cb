"""End-to-end tests for the HTTP surface."""

import pytest

from conftest import make_payload, split


def test_health_and_version(client):
    assert client.get("/api/health").json() == {"ok": True}
    assert client.get("/api/version").json() == {"name": "timesplit-api", "version": "1.0.0"}


def test_upsert_then_detail(client):
    response = client.post(
        "/api/sessions",
        json=make_payload(splits=[split(1000, note="lap 1"), split(500)]),
    )

    assert response.status_code == 200
    assert response.json() == {"ok": True, "upserted": "run-001", "splits_inserted": 2}

    detail = client.get("/api/sessions/run-001").json()
    assert detail["player"] == "alice"
    assert detail["total_score"] == 100
    assert detail["created_at"].endswith("Z")
    assert detail["splits"] == [
        {"t": 500, "lap": 1, "score": 10, "note": None},
        {"t": 1000, "lap": 1, "score": 10, "note": "lap 1"},
    ]


def test_resubmission_counts_only_new_splits(client):
    client.post("/api/sessions", json=make_payload(splits=[split(100)]))

    response = client.post(
        "/api/sessions",
        json=make_payload(total_score=150, splits=[split(100, lap=7), split(200)]),
    )

    assert response.json()["splits_inserted"] == 1
    detail = client.get("/api/sessions/run-001").json()
    assert detail["total_score"] == 150
    assert [s["lap"] for s in detail["splits"]] == [1, 1]


def test_empty_splits_upsert(client):
    response = client.post("/api/sessions", json=make_payload(duration_ms=0))

    assert response.status_code == 200
    assert response.json()["splits_inserted"] == 0


def test_duration_violation_is_400(client):
    response = client.post("/api/sessions", json=make_payload(duration_ms=100, splits=[split(500)]))

    assert response.status_code == 400
    body = response.json()
    assert body["ok"] is False
    assert "durationMs" in body["error"]["fieldErrors"]
    assert client.get("/api/sessions/run-001").status_code == 404


@pytest.mark.parametrize("field, value", [("startedAt", 10**17), ("durationMs", 10**20)])
def test_value_past_storage_range_is_400(client, field, value):
    raw = make_payload()
    raw[field] = value

    response = client.post("/api/sessions", json=raw)

    assert response.status_code == 400
    body = response.json()
    assert body["ok"] is False
    assert field in body["error"]["fieldErrors"]
    assert client.get("/api/sessions/run-001").status_code == 404


def test_shape_violation_is_400(client):
    response = client.post("/api/sessions", json={"id": "x", "mode": "chess"})

    assert response.status_code == 400
    field_errors = response.json()["error"]["fieldErrors"]
    assert {"id", "mode", "player"} <= set(field_errors)


def test_malformed_json_is_400(client):
    response = client.post(
        "/api/sessions", content=b"{not json", headers={"content-type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["ok"] is False


def test_unknown_session_is_plain_not_found(client):
    response = client.get("/api/sessions/missing")

    assert response.status_code == 404
    assert response.json() == {"error": "not_found"}


def test_list_pagination_and_filters(client):
    for index in range(30):
        client.post(
            "/api/sessions",
            json=make_payload(
                f"run-{index:03d}",
                player="alice" if index % 2 else "bob",
                started_at=1_700_000_000_000 + index * 1000,
            ),
        )

    page = client.get("/api/sessions", params={"page": 2, "limit": 10}).json()
    assert page["total"] == 30
    assert [row["id"] for row in page["data"]] == [f"run-{i:03d}" for i in range(19, 9, -1)]

    bob = client.get("/api/sessions", params={"player": "bob", "limit": 100}).json()
    assert bob["total"] == 15
    assert bob["limit"] == 100

    window = client.get(
        "/api/sessions",
        params={"from": "2023-11-14T22:13:20Z", "to": str(1_700_000_000_000 + 2000)},
    ).json()
    assert window["total"] == 3


def test_bad_time_bound_is_400(client):
    response = client.get("/api/sessions", params={"from": "last tuesday"})

    assert response.status_code == 400
    assert "from" in response.json()["error"]["fieldErrors"]


def test_leaderboard_players_modes_stats(client):
    for session_id, player, mode, score in [
        ("a-1", "A", "racing", 10),
        ("a-2", "A", "racing", 20),
        ("b-1", "B", "racing", 15),
        ("b-2", "B", "soccer", 3),
    ]:
        client.post(
            "/api/sessions", json=make_payload(session_id, player=player, mode=mode, total_score=score)
        )

    assert client.get("/api/leaderboard", params={"mode": "racing"}).json() == [
        {"player": "A", "mode": "racing", "best_score": 20},
        {"player": "B", "mode": "racing", "best_score": 15},
    ]
    assert client.get("/api/players", params={"search": "a"}).json() == [
        {"player": "A", "sessions": 2, "best_score": 20},
    ]
    assert [row["mode"] for row in client.get("/api/modes").json()] == ["racing", "soccer"]

    stats = client.get("/api/stats").json()
    assert stats["sessions"] == 4
    assert stats["players"] == 2
    assert [entry["total"] for entry in stats["byMode"]] == [3, 1]
