import random
from datetime import UTC, datetime, timedelta

import pytest
from dotenv import load_dotenv

from wordrace.core.room_locks import RoomLockManager
from wordrace.repositories.memory_repository import MemoryGameRepository
from wordrace.services.game_service import GameService
from wordrace.services.word_source import WordSource

ANSWER = "CRANE"
EXTRA_GUESSES = [
    "TRACE",
    "SLATE",
    "AUDIO",
    "HELLO",
    "WORLD",
    "PIANO",
    "BRICK",
    "MOUNT",
    "FJORD",
    "GHOST",
    "SPEED",
    "ERASE",
]


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    load_dotenv(".env.test", override=True)
    yield


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def answer():
    return ANSWER


@pytest.fixture
def word_source():
    return WordSource([ANSWER], EXTRA_GUESSES, rng=random.Random(7))


@pytest.fixture
def memory_repository(clock):
    return MemoryGameRepository(clock=clock)


@pytest.fixture
def game_service(memory_repository, word_source, clock):
    return GameService(
        repository=memory_repository,
        word_source=word_source,
        room_locks=RoomLockManager(),
        clock=clock,
        rng=random.Random(42),
    )
