import pytest
from fastapi import status

ROOM_KEYS = {
    "id",
    "code",
    "status",
    "maxPlayers",
    "timeLimit",
    "createdAt",
    "startedAt",
    "endedAt",
}
PLAYER_KEYS = {
    "id",
    "roomId",
    "name",
    "isHost",
    "status",
    "guesses",
    "currentGuess",
    "solved",
    "attempts",
    "timeElapsed",
    "joinedAt",
}


@pytest.mark.asyncio
async def test_create_room(client):
    response = await client.post("/api/rooms", json={"playerName": "Host"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert set(data["room"]) == ROOM_KEYS
    assert set(data["player"]) == PLAYER_KEYS
    assert data["room"]["status"] == "waiting"
    assert data["room"]["maxPlayers"] == 8
    assert data["room"]["timeLimit"] == 300
    assert data["room"]["startedAt"] is None
    assert data["player"]["isHost"] is True
    assert data["player"]["roomId"] == data["room"]["id"]


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"playerName": ""}, {"playerName": "  "}])
async def test_create_room_without_name(client, body):
    response = await client.post("/api/rooms", json=body)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_PLAYER_NAME"


@pytest.mark.asyncio
async def test_join_room(client, created_room):
    code = created_room["room"]["code"]

    response = await client.post(
        f"/api/rooms/{code.lower()}/join", json={"playerName": "Guest"}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["room"]["code"] == code
    assert "word" not in data["room"]
    assert data["player"]["isHost"] is False
    assert data["player"]["status"] == "waiting"


@pytest.mark.asyncio
async def test_join_missing_room(client):
    response = await client.post("/api/rooms/NOPE00/join", json={"playerName": "Guest"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    data = response.json()
    assert data["code"] == "ROOM_NOT_FOUND"
    assert data["detail"] == "Room not found"
    assert data["error_details"]["code"] == "NOPE00"


@pytest.mark.asyncio
async def test_join_name_taken(client, created_room):
    code = created_room["room"]["code"]

    response = await client.post(f"/api/rooms/{code}/join", json={"playerName": "Host"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "NAME_TAKEN"


@pytest.mark.asyncio
async def test_join_full_room(client, created_room):
    code = created_room["room"]["code"]
    for index in range(7):
        await client.post(f"/api/rooms/{code}/join", json={"playerName": f"P{index}"})

    response = await client.post(f"/api/rooms/{code}/join", json={"playerName": "P9"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "ROOM_IS_FULL"


@pytest.mark.asyncio
async def test_join_started_room(client, started_room):
    response = await client.post(
        f"/api/rooms/{started_room['code']}/join", json={"playerName": "Late"}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "ROOM_NOT_WAITING"


@pytest.mark.asyncio
async def test_game_state_hides_word(client, started_room, clock):
    clock.advance(61)

    response = await client.get(f"/api/rooms/{started_room['code']}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert "word" not in data["room"]
    assert data["room"]["status"] == "playing"
    assert data["timeRemaining"] == 239
    assert [player["status"] for player in data["players"]] == ["playing", "playing"]


@pytest.mark.asyncio
async def test_game_state_times_out(client, started_room, clock, answer):
    clock.advance(301)

    response = await client.get(f"/api/rooms/{started_room['code']}")

    data = response.json()
    assert data["timeRemaining"] == 0
    assert data["room"]["status"] == "finished"
    assert data["room"]["word"] == answer
    assert data["room"]["endedAt"] is not None


@pytest.mark.asyncio
async def test_game_state_missing_room(client):
    response = await client.get("/api/rooms/NOPE00")

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_start_game_by_guest_is_forbidden(client, created_room):
    code = created_room["room"]["code"]
    join = await client.post(f"/api/rooms/{code}/join", json={"playerName": "Guest"})

    response = await client.post(
        f"/api/rooms/{code}/start", json={"playerId": join.json()["player"]["id"]}
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["code"] == "NOT_HOST"


@pytest.mark.asyncio
async def test_start_game(client, created_room):
    code = created_room["room"]["code"]

    response = await client.post(
        f"/api/rooms/{code}/start", json={"playerId": created_room["player"]["id"]}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Game started"

    again = await client.post(
        f"/api/rooms/{code}/start", json={"playerId": created_room["player"]["id"]}
    )
    assert again.status_code == status.HTTP_400_BAD_REQUEST
    assert again.json()["code"] == "ROOM_NOT_WAITING"


@pytest.mark.asyncio
async def test_submit_guess(client, started_room):
    response = await client.post(
        f"/api/rooms/{started_room['code']}/guess",
        json={"playerId": started_room["host"]["id"], "guess": "trace"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "word": "TRACE",
        "result": ["absent", "correct", "correct", "present", "correct"],
        "isValid": True,
        "isWin": False,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("guess", "code"),
    [
        ("CRAN", "INVALID_GUESS_LENGTH"),
        ("ZZZZZ", "INVALID_WORD"),
    ],
)
async def test_submit_invalid_guess(client, started_room, guess, code):
    response = await client.post(
        f"/api/rooms/{started_room['code']}/guess",
        json={"playerId": started_room["host"]["id"], "guess": guess},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == code


@pytest.mark.asyncio
async def test_submit_guess_by_stranger_is_forbidden(client, started_room):
    response = await client.post(
        f"/api/rooms/{started_room['code']}/guess",
        json={"playerId": 9999, "guess": "SLATE"},
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["code"] == "PLAYER_NOT_IN_ROOM"


@pytest.mark.asyncio
async def test_full_game_reveals_word_and_ranks_players(client, started_room, clock, answer):
    code = started_room["code"]
    host_id = started_room["host"]["id"]
    guest_id = started_room["guest"]["id"]

    clock.advance(30)
    win = await client.post(
        f"/api/rooms/{code}/guess", json={"playerId": guest_id, "guess": answer}
    )
    assert win.json()["isWin"] is True

    for guess in ["TRACE", "SLATE", "AUDIO", "HELLO", "WORLD"]:
        await client.post(
            f"/api/rooms/{code}/guess", json={"playerId": host_id, "guess": guess}
        )
    state = (await client.get(f"/api/rooms/{code}")).json()
    assert state["room"]["status"] == "playing"
    assert "word" not in state["room"]

    await client.post(
        f"/api/rooms/{code}/guess", json={"playerId": host_id, "guess": "PIANO"}
    )
    state = (await client.get(f"/api/rooms/{code}")).json()
    assert state["room"]["status"] == "finished"
    assert state["room"]["word"] == answer

    leaderboard = (await client.get(f"/api/rooms/{code}/leaderboard")).json()
    assert [entry["player"]["id"] for entry in leaderboard] == [guest_id, host_id]
    assert [entry["rank"] for entry in leaderboard] == [1, 2]
    assert leaderboard[0]["score"] == 100 + 50 + 270
    assert leaderboard[1]["score"] == 30
    assert leaderboard[0]["player"]["timeElapsed"] == 30


@pytest.mark.asyncio
async def test_current_guess(client, started_room):
    code = started_room["code"]
    host_id = started_room["host"]["id"]

    response = await client.post(
        f"/api/rooms/{code}/current-guess",
        json={"playerId": host_id, "currentGuess": "CR"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Current guess updated"
    state = (await client.get(f"/api/rooms/{code}")).json()
    assert state["players"][0]["currentGuess"] == "CR"


@pytest.mark.asyncio
async def test_current_guess_forbidden(client, started_room):
    response = await client.post(
        f"/api/rooms/{started_room['code']}/current-guess",
        json={"playerId": 9999, "currentGuess": "CR"},
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_leave_room_passes_host(client, started_room):
    code = started_room["code"]

    response = await client.delete(
        f"/api/rooms/{code}/players/{started_room['host']['id']}"
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Left room successfully"
    players = (await client.get(f"/api/rooms/{code}")).json()["players"]
    assert [(player["name"], player["isHost"]) for player in players] == [
        ("Guest", True)
    ]


@pytest.mark.asyncio
async def test_last_player_leaving_deletes_room(client, created_room):
    code = created_room["room"]["code"]

    await client.delete(f"/api/rooms/{code}/players/{created_room['player']['id']}")

    response = await client.get(f"/api/rooms/{code}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_leave_room_forbidden(client, created_room):
    code = created_room["room"]["code"]

    response = await client.delete(f"/api/rooms/{code}/players/9999")

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_leaderboard_missing_room(client):
    response = await client.get("/api/rooms/NOPE00/leaderboard")

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_player_board(client, started_room):
    code = started_room["code"]
    host_id = started_room["host"]["id"]
    await client.post(
        f"/api/rooms/{code}/guess", json={"playerId": host_id, "guess": "TRACE"}
    )

    response = await client.get(f"/api/rooms/{code}/players/{host_id}/board")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["guesses"] == [
        {
            "word": "TRACE",
            "result": ["absent", "correct", "correct", "present", "correct"],
        }
    ]
    assert data["keyboard"] == {
        "T": "absent",
        "R": "correct",
        "A": "correct",
        "C": "present",
        "E": "correct",
    }
