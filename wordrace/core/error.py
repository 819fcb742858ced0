from enum import Enum
from typing import Any


class DomainErrorCode(str, Enum):
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_PLAYER_NAME = "INVALID_PLAYER_NAME"
    INVALID_GUESS_LENGTH = "INVALID_GUESS_LENGTH"
    INVALID_WORD = "INVALID_WORD"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_IS_FULL = "ROOM_IS_FULL"
    ROOM_NOT_WAITING = "ROOM_NOT_WAITING"
    ROOM_NOT_PLAYING = "ROOM_NOT_PLAYING"
    ROOM_CODE_GENERATION_FAILED = "ROOM_CODE_GENERATION_FAILED"
    NO_PLAYERS = "NO_PLAYERS"
    NAME_TAKEN = "NAME_TAKEN"
    NOT_HOST = "NOT_HOST"
    PLAYER_NOT_IN_ROOM = "PLAYER_NOT_IN_ROOM"
    PLAYER_ALREADY_FINISHED = "PLAYER_ALREADY_FINISHED"
    DUPLICATE_GUESS = "DUPLICATE_GUESS"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class WordRaceDomainError(Exception):
    def __init__(
        self,
        code: DomainErrorCode,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message or code.name
        self.details = details or {}
        super().__init__(self.message)
