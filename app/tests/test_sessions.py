import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.tests.test_users import create_user


def record(client, user_id, game_id, seconds):
    return client.post("/api/sessions", json={"userId": user_id, "gameId": game_id, "durationSeconds": seconds})


def test_games_catalog_is_seeded(client):
    res = client.get("/api/games")
    assert res.status_code == 200
    games = res.json()
    assert [g["name"] for g in games] == ["Snowball Showdown", "Bear Panic", "Meteor Mayhem", "Tarzan Rumble"]
    assert games[0]["imageUrl"] == "/images/games/snowball.png"


def test_create_session(client):
    user_id = create_user(client, "player").json()["data"]["id"]
    res = record(client, user_id, 2, 95)
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["userId"] == user_id
    assert data["gameId"] == 2
    assert data["durationSeconds"] == 95
    assert data["createdAt"]


def test_create_session_accepts_duration_alias(client):
    user_id = create_user(client, "legacy").json()["data"]["id"]
    res = client.post("/api/sessions", json={"userId": user_id, "gameId": 1, "duration": "42"})
    assert res.status_code == 201
    assert res.json()["data"]["durationSeconds"] == 42


@pytest.mark.parametrize("body", [
    {"gameId": 1, "durationSeconds": 10},
    {"userId": 1, "durationSeconds": 10},
    {"userId": 1, "gameId": 1},
    {"userId": 1, "gameId": 1, "durationSeconds": 0},
    {"userId": 1, "gameId": 1, "durationSeconds": -5},
    {"userId": 1, "gameId": 1, "durationSeconds": "soon"},
    {"userId": 1, "gameId": 1, "durationSeconds": 10**20},
    {"userId": 1, "gameId": 1, "durationSeconds": 2**31},
    {"userId": 1, "gameId": 1, "durationSeconds": True},
    {"userId": 10**20, "gameId": 1, "durationSeconds": 10},
])
def test_create_session_validation(client, body):
    create_user(client, "validator")
    res = client.post("/api/sessions", json=body)
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_create_session_unknown_user(client):
    res = record(client, 999, 1, 10)
    assert res.status_code == 404
    assert res.json()["message"] == "User not found"


def test_create_session_unknown_game(client):
    user_id = create_user(client, "gamer").json()["data"]["id"]
    res = record(client, user_id, 999, 10)
    assert res.status_code == 404
    assert res.json()["message"] == "Game not found"


def test_list_sessions_populated(client):
    user_id = create_user(client, "populated").json()["data"]["id"]
    record(client, user_id, 3, 60)

    res = client.get("/api/sessions")
    assert res.status_code == 200
    [session] = res.json()["data"]
    assert session["user"] == {"nickname": "populated", "firstName": "Test", "lastName": "Player"}
    assert session["game"] == {"name": "Meteor Mayhem"}
    assert session["durationSeconds"] == 60


def test_list_sessions_for_user(client):
    ann = create_user(client, "ann").json()["data"]["id"]
    bob = create_user(client, "bob").json()["data"]["id"]
    record(client, ann, 1, 10)
    record(client, bob, 1, 20)

    res = client.get("/api/sessions", params={"userId": bob})
    assert [s["durationSeconds"] for s in res.json()["data"]] == [20]


def test_profile_statistics(client):
    user_id = create_user(client, "johndoe").json()["data"]["id"]
    record(client, user_id, 1, 2400)
    record(client, user_id, 3, 1560)

    stats = client.get(f"/api/users/{user_id}").json()["data"]["statistics"]
    assert stats == {
        "gameStats": {
            "Snowball Showdown": {"minutes": 2400, "percentage": 61},
            "Meteor Mayhem": {"minutes": 1560, "percentage": 39},
        },
        "totalMinutes": 3960,
        "totalSessions": 2,
    }


@pytest.mark.asyncio
async def test_new_session_shows_in_profile(database_url):
    async with LifespanManager(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            res = await ac.post("/api/users", json={
                "email": "roundtrip@example.com",
                "firstName": "Round",
                "lastName": "Trip",
                "nickname": "roundtrip",
            })
            user_id = res.json()["data"]["id"]

            await ac.post("/api/sessions", json={"userId": user_id, "gameId": 2, "durationSeconds": 300})
            before = (await ac.get(f"/api/users/{user_id}")).json()["data"]["statistics"]

            res = await ac.post("/api/sessions", json={"userId": user_id, "gameId": 2, "durationSeconds": 45})
            assert res.status_code == 201

            after = (await ac.get(f"/api/users/{user_id}")).json()["data"]["statistics"]
            assert after["totalMinutes"] == before["totalMinutes"] + 45
            assert after["gameStats"]["Bear Panic"]["minutes"] == before["gameStats"]["Bear Panic"]["minutes"] + 45
            assert after["totalSessions"] == 2


def test_create_session_rejects_boolean_duration(client):
    user_id = create_user(client, "truthy").json()["data"]["id"]
    res = client.post("/api/sessions", json={"userId": user_id, "gameId": 1, "durationSeconds": True})
    assert res.status_code == 400
    assert client.get("/api/sessions").json()["data"] == []


def test_create_session_rejects_oversized_duration(client):
    user_id = create_user(client, "marathon").json()["data"]["id"]
    res = client.post("/api/sessions", json={"userId": user_id, "gameId": 1, "durationSeconds": 10**20})
    assert res.status_code == 400
    assert res.json()["message"] == "Validation failed"
