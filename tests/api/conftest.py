import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from wordrace.dependencies.services import get_game_service
from wordrace.main import app


@pytest_asyncio.fixture
async def client(game_service):
    app.dependency_overrides[get_game_service] = lambda: game_service

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client_instance:
        yield client_instance

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def created_room(client):
    response = await client.post("/api/rooms", json={"playerName": "Host"})
    return response.json()


@pytest_asyncio.fixture
async def started_room(client, created_room):
    code = created_room["room"]["code"]
    join = await client.post(f"/api/rooms/{code}/join", json={"playerName": "Guest"})
    await client.post(
        f"/api/rooms/{code}/start",
        json={"playerId": created_room["player"]["id"]},
    )
    return {
        "code": code,
        "host": created_room["player"],
        "guest": join.json()["player"],
    }
