"""In-process memory store."""

from collections.abc import Iterator

from mnemo.core.logging import get_logger
from mnemo.memory.base import Memory, MemoryId, MemoryStore

logger = get_logger("memory.store")


class InMemoryStore(MemoryStore):
    """Dict-backed memory store, iterated in insertion order.

    Holds records only for the lifetime of the process.
    """

    def __init__(self, memories: list[Memory] | None = None):
        self._memories: dict[MemoryId, Memory] = {}
        for memory in memories or []:
            self.add(memory)

    def add(self, memory: Memory) -> None:
        if memory.id in self._memories:
            logger.warning(f"Overwriting existing memory {memory.id}")
        self._memories[memory.id] = memory

    def get(self, memory_id: MemoryId) -> Memory | None:
        return self._memories.get(memory_id)

    def iter(self) -> Iterator[Memory]:
        # Snapshot so strategies may remove while iterating
        return iter(list(self._memories.values()))

    def remove(self, memory_id: MemoryId) -> bool:
        return self._memories.pop(memory_id, None) is not None

    def __contains__(self, memory_id: object) -> bool:
        return memory_id in self._memories

    def __len__(self) -> int:
        return len(self._memories)
