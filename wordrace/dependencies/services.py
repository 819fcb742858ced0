from fastapi import Depends, Request

from wordrace.core.config import settings
from wordrace.core.room_locks import RoomLockManager
from wordrace.dependencies.repositories import get_game_repository
from wordrace.repositories.base_repository import GameRepository
from wordrace.services.game_service import GameService
from wordrace.services.word_source import WordSource


def get_word_source(request: Request) -> WordSource:
    return request.app.state.word_source


def get_room_lock_manager(request: Request) -> RoomLockManager:
    return request.app.state.room_locks


def get_game_service(
    repository: GameRepository = Depends(get_game_repository),
    word_source: WordSource = Depends(get_word_source),
    room_locks: RoomLockManager = Depends(get_room_lock_manager),
) -> GameService:
    return GameService(
        repository=repository,
        word_source=word_source,
        room_locks=room_locks,
        max_players=settings.MAX_PLAYERS,
        time_limit=settings.TIME_LIMIT,
    )
