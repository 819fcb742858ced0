from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from wordrace.util.time import utc_now

DEFAULT_MAX_PLAYERS = 8
DEFAULT_TIME_LIMIT = 300


class RoomStatus(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class Room(SQLModel, table=True):  # type: ignore[call-arg]
    id: int | None = Field(default=None, primary_key=True)
    code: str = Field(max_length=6, index=True, unique=True)
    word: str = Field(max_length=5)
    status: RoomStatus = Field(default=RoomStatus.WAITING)
    max_players: int = Field(default=DEFAULT_MAX_PLAYERS)
    time_limit: int = Field(default=DEFAULT_TIME_LIMIT)

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    started_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
    ended_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
