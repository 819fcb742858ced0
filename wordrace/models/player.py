from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from wordrace.util.time import utc_now

MAX_ATTEMPTS = 6


class PlayerStatus(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"
    # Reserved; nothing in the game flow sets it.
    DISCONNECTED = "disconnected"


class Player(SQLModel, table=True):  # type: ignore[call-arg]
    id: int | None = Field(default=None, primary_key=True)
    room_id: int = Field(foreign_key="room.id", index=True)
    name: str
    is_host: bool = Field(default=False)
    status: PlayerStatus = Field(default=PlayerStatus.WAITING)

    guesses: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )
    current_guess: str = Field(default="")
    solved: bool = Field(default=False)
    attempts: int = Field(default=0)
    time_elapsed: int = Field(default=0)

    joined_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    @property
    def is_done(self) -> bool:
        return (
            self.solved
            or self.attempts >= MAX_ATTEMPTS
            or self.status == PlayerStatus.FINISHED
        )
