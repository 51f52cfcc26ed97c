"""
Collection - a fetched list of records owned by one screen service.

Every write goes through `mutate`, which awaits the write, drops the
cached rows and reloads them from the backend. The cached list is never
ahead of the backend except through an explicit `patch`.
"""
import logging
from typing import Awaitable, Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class Collection(Generic[T]):
    """Cached collection with mutate -> invalidate -> reload semantics."""

    def __init__(self, name: str, loader: Callable[[], Awaitable[List[T]]]):
        self.name = name
        self._loader = loader
        self._items: Optional[List[T]] = None

    @property
    def loaded(self) -> bool:
        return self._items is not None

    @property
    def items(self) -> List[T]:
        return list(self._items or [])

    def replace(self, items: List[T]) -> None:
        """Swap the cached rows for a locally computed list."""
        self._items = list(items)

    def invalidate(self) -> None:
        self._items = None

    async def reload(self) -> List[T]:
        self._items = list(await self._loader())
        logger.debug(f"Reloaded {self.name}: {len(self._items)} rows")
        return self.items

    async def get(self) -> List[T]:
        """Return cached rows, loading them on first use."""
        if self._items is None:
            return await self.reload()
        return self.items

    async def mutate(self, write: Awaitable[R]) -> R:
        """Await a write, then invalidate and reload the collection."""
        result = await write
        self.invalidate()
        await self.reload()
        return result

    def patch(self, predicate: Callable[[T], bool], update: Callable[[T], T]) -> int:
        """Apply a local, optimistic change to matching rows. Returns rows changed."""
        changed = 0
        items = []
        for item in self._items or []:
            if predicate(item):
                item = update(item)
                changed += 1
            items.append(item)
        self._items = items
        return changed
