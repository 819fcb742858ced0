from collections.abc import Callable
from datetime import datetime
from itertools import count
from typing import Any

from wordrace.models.player import Player
from wordrace.models.room import Room
from wordrace.repositories.base_repository import GameRepository
from wordrace.util.time import utc_now


class MemoryGameRepository(GameRepository):
    """Volatile store backed by dicts, one per entity type.

    Stored entities are replaced rather than mutated on update, so an entity
    handed out earlier stays a consistent snapshot.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock
        self.rooms: dict[int, Room] = {}
        self.players: dict[int, Player] = {}
        self._room_ids = count(1)
        self._player_ids = count(1)

    async def create_room(self, room: Room) -> Room:
        created = Room(
            **{
                **room.model_dump(),
                "id": next(self._room_ids),
                "created_at": self.clock(),
                "started_at": None,
                "ended_at": None,
            }
        )
        self.rooms[created.id] = created
        return created

    async def get_room(self, code: str) -> Room | None:
        return next((room for room in self.rooms.values() if room.code == code), None)

    async def update_room(self, room_id: int, **fields: Any) -> Room | None:
        room = self.rooms.get(room_id)
        if room is None:
            return None

        updated = Room(**{**room.model_dump(), **fields, "id": room_id})
        self.rooms[room_id] = updated
        return updated

    async def delete_room(self, room_id: int) -> None:
        self.rooms.pop(room_id, None)
        await self.remove_players_by_room(room_id)

    async def create_player(self, player: Player) -> Player:
        created = Player(
            **{
                **player.model_dump(),
                "id": next(self._player_ids),
                "guesses": list(player.guesses),
                "joined_at": self.clock(),
            }
        )
        self.players[created.id] = created
        return created

    async def get_player(self, player_id: int) -> Player | None:
        return self.players.get(player_id)

    async def get_players_by_room(self, room_id: int) -> list[Player]:
        return [player for player in self.players.values() if player.room_id == room_id]

    async def update_player(self, player_id: int, **fields: Any) -> Player | None:
        player = self.players.get(player_id)
        if player is None:
            return None

        updated = Player(
            **{
                **player.model_dump(),
                **fields,
                "id": player_id,
                "joined_at": player.joined_at,
            }
        )
        self.players[player_id] = updated
        return updated

    async def remove_player(self, player_id: int) -> None:
        self.players.pop(player_id, None)

    async def remove_players_by_room(self, room_id: int) -> None:
        for player_id in [
            player.id for player in self.players.values() if player.room_id == room_id
        ]:
            del self.players[player_id]
