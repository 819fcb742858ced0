from fastapi import Request

from wordrace.repositories.base_repository import GameRepository


def get_game_repository(request: Request) -> GameRepository:
    return request.app.state.game_repository
