from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar, cast

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import SQLModel

from wordrace.models.player import Player
from wordrace.models.room import Room
from wordrace.repositories.base_repository import GameRepository
from wordrace.util.time import utc_now

T = TypeVar("T", bound=SQLModel)


class SqlGameRepository(GameRepository):
    """Store backed by SQLModel tables.

    Every operation opens its own session and commits before returning, so a
    multi-field update or a cascading delete is applied in one transaction.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Callable[[], datetime] = utc_now,
    ):
        self.session_factory = session_factory
        self.clock = clock

    async def _create(self, entity: T) -> T:
        async with self.session_factory() as session:
            session.add(entity)
            await session.commit()
            await session.refresh(entity)
            return entity

    async def _update(self, model_class: type[T], entity_id: int, fields: dict) -> T | None:
        async with self.session_factory() as session:
            entity = await session.get(model_class, entity_id)
            if entity is None:
                return None

            for key, value in fields.items():
                setattr(entity, key, value)
            session.add(entity)
            await session.commit()
            await session.refresh(entity)
            return entity

    async def create_room(self, room: Room) -> Room:
        room = Room(
            **{
                **room.model_dump(),
                "id": None,
                "created_at": self.clock(),
                "started_at": None,
                "ended_at": None,
            }
        )
        return await self._create(room)

    async def get_room(self, code: str) -> Room | None:
        async with self.session_factory() as session:
            result = await session.execute(select(Room).where(Room.code == code))
            return cast(Room | None, result.scalar_one_or_none())

    async def update_room(self, room_id: int, **fields: Any) -> Room | None:
        fields.pop("id", None)
        return await self._update(Room, room_id, fields)

    async def delete_room(self, room_id: int) -> None:
        async with self.session_factory() as session:
            await session.execute(delete(Player).where(Player.room_id == room_id))
            await session.execute(delete(Room).where(Room.id == room_id))
            await session.commit()

    async def create_player(self, player: Player) -> Player:
        player = Player(
            **{
                **player.model_dump(),
                "id": None,
                "guesses": list(player.guesses),
                "joined_at": self.clock(),
            }
        )
        return await self._create(player)

    async def get_player(self, player_id: int) -> Player | None:
        async with self.session_factory() as session:
            return await session.get(Player, player_id)

    async def get_players_by_room(self, room_id: int) -> list[Player]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Player).where(Player.room_id == room_id).order_by(Player.id)
            )
            return list(result.scalars().all())

    async def update_player(self, player_id: int, **fields: Any) -> Player | None:
        fields.pop("id", None)
        fields.pop("joined_at", None)
        return await self._update(Player, player_id, fields)

    async def remove_player(self, player_id: int) -> None:
        async with self.session_factory() as session:
            await session.execute(delete(Player).where(Player.id == player_id))
            await session.commit()

    async def remove_players_by_room(self, room_id: int) -> None:
        async with self.session_factory() as session:
            await session.execute(delete(Player).where(Player.room_id == room_id))
            await session.commit()
