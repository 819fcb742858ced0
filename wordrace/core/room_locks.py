import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class RoomLockManager:
    """Hands out one asyncio lock per room code.

    Every read-modify-write sequence on a room runs under its lock so that,
    for example, a guess and a game start racing on the same room are applied
    one after the other. ``hold`` counts the coroutines holding or waiting for
    a lock, and ``discard`` leaves a lock in place while that count is nonzero.
    """

    def __init__(self) -> None:
        self.locks: dict[str, asyncio.Lock] = {}
        self.users: dict[str, int] = {}

    def lock(self, code: str) -> asyncio.Lock:
        if code not in self.locks:
            self.locks[code] = asyncio.Lock()
        return self.locks[code]

    @asynccontextmanager
    async def hold(self, code: str) -> AsyncIterator[None]:
        lock = self.lock(code)
        self.users[code] = self.users.get(code, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self.users[code] -= 1
            if not self.users[code]:
                del self.users[code]

    def discard(self, code: str) -> None:
        lock = self.locks.get(code)
        if lock is None or lock.locked() or self.users.get(code):
            return
        del self.locks[code]

    def __contains__(self, code: str) -> bool:
        return code in self.locks

    def __len__(self) -> int:
        return len(self.locks)
