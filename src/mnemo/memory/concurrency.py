"""Thread-safe wrapper around MemorySystem."""

import threading
from collections.abc import Sequence

from mnemo.memory.base import (
    DecayReport,
    DecayStrategy,
    Embedding,
    Emotion,
    Memory,
    MemoryContent,
    MemoryId,
    Summarizer,
)
from mnemo.memory.system import MemorySystem


class LockedMemorySystem:
    """Serializes every call into a shared MemorySystem.

    get_memory mutates (touch) and search updates the skip counters in
    MemorySystem.stats, so reads and writes share one lock.
    Summarizer and decay calls run while the lock is held.
    """

    def __init__(self, system: MemorySystem):
        self._system = system
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def add_memory(
        self,
        content: MemoryContent,
        embedding: Sequence[float] | Embedding,
        emotion: Emotion | None = None,
    ) -> MemoryId:
        with self._lock:
            return self._system.add_memory(content, embedding, emotion)

    def get_memory(self, memory_id: MemoryId) -> Memory:
        with self._lock:
            return self._system.get_memory(memory_id)

    def search(
        self,
        query_embedding: Sequence[float] | Embedding,
        top_k: int,
        context_id: MemoryId | None = None,
    ) -> list[tuple[Memory, float]]:
        with self._lock:
            return self._system.search(query_embedding, top_k, context_id)

    def apply_decay(self, strategy: DecayStrategy) -> DecayReport | None:
        with self._lock:
            return self._system.apply_decay(strategy)

    def add_relationship(self, from_id: MemoryId, to_id: MemoryId) -> None:
        with self._lock:
            self._system.add_relationship(from_id, to_id)

    def consolidate(self, central_id: MemoryId, summarizer: Summarizer) -> MemoryId:
        with self._lock:
            return self._system.consolidate(central_id, summarizer)

    def __len__(self) -> int:
        with self._lock:
            return len(self._system)
