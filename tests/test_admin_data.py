from datetime import timedelta

from berry_admin.models.admin import utcnow
from berry_admin.models.guest import GuestSubmission
from berry_admin.models.user import Profile, UserStats
from berry_admin.routers import data as data_router

DATA_URL = "/api/admin/data"


def _seed_profiles(db):
    db.add_all(
        [
            Profile(user_id="u1", email="u1@example.com", display_name="User One"),
            Profile(user_id="u2", email="u2@example.com", display_name="User Two"),
        ]
    )
    db.add(UserStats(user_id="u2", total_earned=12.5, posts_submitted=3, rewards_claimed=1, current_streak=4))
    db.commit()


def test_requires_token(client, db, admin):
    _seed_profiles(db)
    r = client.post(DATA_URL, json={"action": "getUsers"})
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}


def test_rejects_unknown_token(client, admin):
    r = client.post(DATA_URL, json={"action": "getUsers"}, headers={"Authorization": "Bearer " + "a" * 64})
    assert r.status_code == 401


def test_unauthorized_update_touches_nothing(client, db, admin):
    r = client.post(
        DATA_URL,
        json={
            "action": "updateStats",
            "userId": "u1",
            "stats": {"total_earned": 1, "posts_submitted": 1, "rewards_claimed": 1, "current_streak": 1},
        },
    )
    assert r.status_code == 401
    assert db.query(UserStats).count() == 0


def test_get_users_joins_stats(client, db, auth_headers):
    _seed_profiles(db)
    r = client.post(DATA_URL, json={"action": "getUsers"}, headers=auth_headers)
    assert r.status_code == 200
    users = {u["user_id"]: u for u in r.json()["users"]}
    assert users["u1"] == {
        "user_id": "u1",
        "email": "u1@example.com",
        "display_name": "User One",
        "total_earned": 0,
        "posts_submitted": 0,
        "rewards_claimed": 0,
        "current_streak": 0,
    }
    assert users["u2"]["total_earned"] == 12.5
    assert users["u2"]["posts_submitted"] == 3
    assert users["u2"]["rewards_claimed"] == 1
    assert users["u2"]["current_streak"] == 4


def test_get_users_with_cookie(client, db, admin):
    _seed_profiles(db)
    client.post("/api/admin/auth", json={"action": "login", "email": "admin@example.com", "password": "Secret123!"})
    r = client.post(DATA_URL, json={"action": "getUsers"})
    assert r.status_code == 200
    assert len(r.json()["users"]) == 2


def test_guest_submissions_newest_first(client, db, auth_headers):
    now = utcnow()
    db.add_all(
        [
            GuestSubmission(instagram_id="@old", email="old@example.com", created_at=now - timedelta(days=2)),
            GuestSubmission(instagram_id="@new", email="new@example.com", created_at=now),
            GuestSubmission(instagram_id="@mid", email="mid@example.com", created_at=now - timedelta(days=1)),
        ]
    )
    db.commit()
    r = client.post(DATA_URL, json={"action": "getGuestSubmissions"}, headers=auth_headers)
    assert r.status_code == 200
    assert [s["instagram_id"] for s in r.json()["submissions"]] == ["@new", "@mid", "@old"]


def test_guest_submissions_empty(client, auth_headers):
    r = client.post(DATA_URL, json={"action": "getGuestSubmissions"}, headers=auth_headers)
    assert r.json() == {"submissions": []}


def test_update_stats_creates_then_updates(client, db, auth_headers):
    stats = {"total_earned": 10, "posts_submitted": 1, "rewards_claimed": 0, "current_streak": 2}
    r = client.post(DATA_URL, json={"action": "updateStats", "userId": "u1", "stats": stats}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert db.query(UserStats).filter(UserStats.user_id == "u1").count() == 1

    stats = {"total_earned": 25, "posts_submitted": 2, "rewards_claimed": 1, "current_streak": 3}
    r = client.post(DATA_URL, json={"action": "updateStats", "userId": "u1", "stats": stats}, headers=auth_headers)
    assert r.status_code == 200
    rows = db.query(UserStats).filter(UserStats.user_id == "u1").all()
    assert len(rows) == 1
    db.refresh(rows[0])
    assert float(rows[0].total_earned) == 25
    assert rows[0].posts_submitted == 2
    assert rows[0].rewards_claimed == 1
    assert rows[0].current_streak == 3


def test_update_stats_requires_user_and_stats(client, db, auth_headers):
    r = client.post(DATA_URL, json={"action": "updateStats", "userId": "u1"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "User ID and stats required"}

    r = client.post(
        DATA_URL,
        json={"action": "updateStats", "stats": {"total_earned": 1, "posts_submitted": 1, "rewards_claimed": 1, "current_streak": 1}},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert db.query(UserStats).count() == 0


def test_update_stats_rejects_negative(client, db, auth_headers):
    stats = {"total_earned": -5, "posts_submitted": 1, "rewards_claimed": 0, "current_streak": 2}
    r = client.post(DATA_URL, json={"action": "updateStats", "userId": "u1", "stats": stats}, headers=auth_headers)
    assert r.status_code == 400
    assert db.query(UserStats).count() == 0


def test_unknown_data_action(client, auth_headers):
    r = client.post(DATA_URL, json={"action": "dropUsers"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid action"}


def test_malformed_body_without_token_is_unauthorized(client, admin):
    r = client.post(DATA_URL, content=b"{bad", headers={"Content-Type": "application/json"})
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}


def test_malformed_body_with_token(client, auth_headers):
    r = client.post(DATA_URL, content=b"{bad", headers={**auth_headers, "Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON body"}


def test_unexpected_error_keeps_cors_headers(client, auth_headers, monkeypatch):
    def broken(db):
        raise RuntimeError("boom")

    monkeypatch.setattr(data_router, "list_users", broken)
    r = client.post(
        DATA_URL,
        json={"action": "getUsers"},
        headers={**auth_headers, "Origin": "https://berryrewards.example"},
    )
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}
    assert r.headers["access-control-allow-origin"] == "https://berryrewards.example"
    assert r.headers["access-control-allow-credentials"] == "true"
