"""Request-scoped memoization of store reads."""

import asyncio
from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from typing import Any, TypeVar

T = TypeVar("T")


@dataclass
class RequestMemo:
    """Deduplicates identical reads issued while serving one request.

    Create one per request and pass it to every service call made for that
    request. Identical keys share a single in-flight read.
    """

    _tasks: dict[Hashable, asyncio.Task[Any]] = field(default_factory=dict)

    async def load(self, key: Hashable, loader: Callable[[], T]) -> T:
        """Return the memoized result for key, running loader in a thread once."""
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(asyncio.to_thread(loader))
            self._tasks[key] = task
        return await task

    def __len__(self) -> int:
        return len(self._tasks)


async def fetch(
    memo: RequestMemo | None, key: Hashable, loader: Callable[[], T]
) -> T:
    """Run a blocking repository read off the event loop, memoized when possible."""
    if memo is None:
        return await asyncio.to_thread(loader)
    return await memo.load(key, loader)
