from datetime import datetime
from typing import Any

from pydantic import SerializerFunctionWrapHandler, model_serializer

from wordrace.models.player import Player, PlayerStatus
from wordrace.models.room import Room, RoomStatus
from wordrace.schemas.common import CamelModel


class RoomResponse(CamelModel):
    id: int
    code: str
    word: str | None = None
    status: RoomStatus
    max_players: int
    time_limit: int
    created_at: datetime
    started_at: datetime | None = None
    ended_at: datetime | None = None

    @model_serializer(mode="wrap")
    def _omit_hidden_word(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.word is None:
            data.pop("word", None)
        return data

    @classmethod
    def from_room(cls, room: Room) -> "RoomResponse":
        response = cls.model_validate(room)
        if room.status != RoomStatus.FINISHED:
            response.word = None
        return response


class PlayerResponse(CamelModel):
    id: int
    room_id: int
    name: str
    is_host: bool
    status: PlayerStatus
    guesses: list[str]
    current_guess: str
    solved: bool
    attempts: int
    time_elapsed: int
    joined_at: datetime

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls.model_validate(player)


class PlayerNameRequest(CamelModel):
    player_name: str | None = None


class StartGameRequest(CamelModel):
    player_id: int | None = None


class RoomJoinResponse(CamelModel):
    room: RoomResponse
    player: PlayerResponse


class GameStateResponse(CamelModel):
    room: RoomResponse
    players: list[PlayerResponse]
    time_remaining: int


class LeaderboardEntry(CamelModel):
    player: PlayerResponse
    rank: int
    score: int
