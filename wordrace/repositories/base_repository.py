from abc import ABC, abstractmethod
from typing import Any

from wordrace.core.error import DomainErrorCode, WordRaceDomainError
from wordrace.models.player import Player
from wordrace.models.room import Room


class GameRepository(ABC):
    """Storage for rooms and the players they own.

    Implementations assign integer ids, stamp ``created_at``/``joined_at`` on
    creation and cascade room deletion to the room's players. Lookups return
    ``None`` when nothing matches; updates shallow-merge the given fields and
    return ``None`` for an unknown id.
    """

    @abstractmethod
    async def create_room(self, room: Room) -> Room: ...

    @abstractmethod
    async def get_room(self, code: str) -> Room | None: ...

    @abstractmethod
    async def update_room(self, room_id: int, **fields: Any) -> Room | None: ...

    @abstractmethod
    async def delete_room(self, room_id: int) -> None: ...

    @abstractmethod
    async def create_player(self, player: Player) -> Player: ...

    @abstractmethod
    async def get_player(self, player_id: int) -> Player | None: ...

    @abstractmethod
    async def get_players_by_room(self, room_id: int) -> list[Player]: ...

    @abstractmethod
    async def update_player(self, player_id: int, **fields: Any) -> Player | None: ...

    @abstractmethod
    async def remove_player(self, player_id: int) -> None: ...

    @abstractmethod
    async def remove_players_by_room(self, room_id: int) -> None: ...

    async def get_room_or_raise(self, code: str) -> Room:
        room = await self.get_room(code)
        if not room:
            raise WordRaceDomainError(
                code=DomainErrorCode.ROOM_NOT_FOUND,
                message="Room not found",
                details={"code": code},
            )
        return room
