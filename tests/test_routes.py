from crossword_api.services import puzzle_service


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_requires_authentication(client) -> None:
    assert client.get("/api/attempts").status_code == 401
    response = client.get("/api/users/profile", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


def test_attempt_lifecycle(client, make_user, make_puzzle, auth_headers) -> None:
    user = make_user()
    puzzle = make_puzzle()
    headers = auth_headers(user)

    started = client.post("/api/attempts/start", json={"puzzle_id": puzzle.id}, headers=headers)
    assert started.status_code == 201
    attempt = started.json()
    assert attempt["is_completed"] is False
    assert attempt["puzzle"]["title"] == "Golden Era"

    resumed = client.post("/api/attempts/start", json={"puzzle_id": puzzle.id}, headers=headers)
    assert resumed.json()["id"] == attempt["id"]

    progress = client.put(
        f"/api/attempts/{attempt['id']}/progress",
        json={"current_state": {"cells": {"0,0": "R"}}},
        headers=headers,
    )
    assert progress.status_code == 200

    submitted = client.post(
        f"/api/attempts/{attempt['id']}/submit",
        json={"completion_time": 150, "hints_used": 2},
        headers=headers,
    )
    assert submitted.status_code == 200
    assert submitted.json() == {
        "is_completed": True,
        "points_earned": 150,
        "accuracy_percentage": 90.0,
        "time_bonus": 25,
        "new_streak": 1,
    }

    again = client.post(
        f"/api/attempts/{attempt['id']}/submit",
        json={"completion_time": 10, "hints_used": 0},
        headers=headers,
    )
    assert again.status_code == 409

    restart = client.post("/api/attempts/start", json={"puzzle_id": puzzle.id}, headers=headers)
    assert restart.status_code == 409

    late_progress = client.put(
        f"/api/attempts/{attempt['id']}/progress",
        json={"current_state": {}},
        headers=headers,
    )
    assert late_progress.status_code == 409

    detail = client.get(f"/api/attempts/{attempt['id']}", headers=headers).json()
    assert detail["current_state"] == {"cells": {"0,0": "R"}}
    assert detail["points_earned"] == 150

    stats = client.get("/api/users/stats", headers=headers).json()
    assert stats == {
        "total_points": 150,
        "puzzles_completed": 1,
        "current_streak": 1,
        "longest_streak": 1,
    }

    listing = client.get("/api/attempts", headers=headers).json()
    assert [a["id"] for a in listing] == [attempt["id"]]


def test_start_unknown_puzzle(client, make_user, auth_headers) -> None:
    response = client.post("/api/attempts/start", json={"puzzle_id": 99}, headers=auth_headers(make_user()))
    assert response.status_code == 404
    assert response.json()["detail"] == "Puzzle not found"


def test_submit_rejects_negative_time(client, make_user, make_puzzle, auth_headers) -> None:
    user = make_user()
    headers = auth_headers(user)
    attempt = client.post("/api/attempts/start", json={"puzzle_id": make_puzzle().id}, headers=headers).json()

    response = client.post(
        f"/api/attempts/{attempt['id']}/submit",
        json={"completion_time": -5, "hints_used": 0},
        headers=headers,
    )
    assert response.status_code == 422


def test_cannot_touch_other_users_attempt(client, make_user, make_puzzle, auth_headers) -> None:
    owner = make_user()
    intruder = make_user()
    attempt = client.post(
        "/api/attempts/start", json={"puzzle_id": make_puzzle().id}, headers=auth_headers(owner)
    ).json()

    headers = auth_headers(intruder)
    assert client.get(f"/api/attempts/{attempt['id']}", headers=headers).status_code == 404
    submit = client.post(
        f"/api/attempts/{attempt['id']}/submit",
        json={"completion_time": 10, "hints_used": 0},
        headers=headers,
    )
    assert submit.status_code == 404


def test_puzzle_routes(client, make_user, make_puzzle, auth_headers) -> None:
    headers = auth_headers(make_user())
    first = make_puzzle(title="East Coast", region="NYC")
    make_puzzle(title="Dirty South", region="Atlanta")

    listing = client.get("/api/puzzles", params={"region": "NYC"}, headers=headers).json()
    assert [p["title"] for p in listing["data"]] == ["East Coast"]
    assert listing["meta"] == {"page": 1, "per_page": 20, "total": 1, "total_pages": 1}

    detail = client.get(f"/api/puzzles/{first.id}", headers=headers)
    assert detail.status_code == 200
    assert detail.json()["clues_across"] == {"1": "Queens MC"}

    assert client.get("/api/puzzles/999", headers=headers).status_code == 404
    assert client.get("/api/puzzles/daily", headers=headers).status_code == 404


def test_profile_routes(client, make_user, auth_headers) -> None:
    headers = auth_headers(make_user())

    assert client.get("/api/users/profile", headers=headers).json()["display_name"] is None

    profile = client.put("/api/users/profile", json={"display_name": "Nas"}, headers=headers)
    assert profile.status_code == 200
    assert profile.json()["display_name"] == "Nas"

    prefs = client.put(
        "/api/users/preferences",
        json={"music_enabled": False, "music_volume": 10, "theme": "light"},
        headers=headers,
    )
    assert prefs.status_code == 200
    assert prefs.json()["theme"] == "light"

    bad = client.put("/api/users/preferences", json={"music_volume": 300}, headers=headers)
    assert bad.status_code == 400


def test_delete_account(client, make_user, auth_headers) -> None:
    headers = auth_headers(make_user())

    assert client.delete("/api/users/account", headers=headers).status_code == 200
    assert client.get("/api/users/profile", headers=headers).status_code == 401


def test_puzzle_pack_routes(client, db_session, make_user, make_puzzle, auth_headers) -> None:
    headers = auth_headers(make_user())
    pack = puzzle_service.create_pack(
        db_session, {"name": "90s Classics", "category_type": "decade", "category_value": "90s", "price_usd": 4.99}
    )
    puzzle_service.create_pack(db_session, {"name": "Retired", "is_active": False})
    inside = make_puzzle(title="Illmatic", puzzle_pack_id=pack.id)
    make_puzzle(title="Loose")

    assert client.get("/api/puzzle-packs").status_code == 401

    listing = client.get("/api/puzzle-packs", headers=headers)
    assert listing.status_code == 200
    assert [p["name"] for p in listing.json()] == ["90s Classics"]
    assert listing.json()[0]["price_usd"] == 4.99

    detail = client.get(f"/api/puzzle-packs/{pack.id}", headers=headers).json()
    assert detail["puzzle_count"] == 1
    assert [p["title"] for p in detail["puzzles"]] == ["Illmatic"]

    in_pack = client.get("/api/puzzles", params={"pack_id": pack.id}, headers=headers).json()
    assert [p["id"] for p in in_pack["data"]] == [inside.id]
    assert in_pack["data"][0]["puzzle_pack_id"] == pack.id

    assert client.get("/api/puzzle-packs/999", headers=headers).status_code == 404
