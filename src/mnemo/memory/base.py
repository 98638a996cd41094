"""
Memory records and collaborator interfaces.

The orchestrator talks to its store, vector index and decay policy only
through the abstract classes defined here.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, TypeAlias

import numpy as np

from mnemo.memory.errors import TimeError

MemoryId: TypeAlias = int
MemoryContent: TypeAlias = str
Embedding: TypeAlias = np.ndarray

# Smallest step used to keep access times strictly increasing
_TICK = timedelta(microseconds=1)


@dataclass(frozen=True)
class Emotion:
    """Affect annotation attached to a memory."""

    label: str
    valence: float = 0.0  # -1 (negative) .. 1 (positive)
    arousal: float = 0.0  # 0 (calm) .. 1 (excited)


@dataclass(eq=False)
class Memory:
    """Single memory record."""

    id: MemoryId
    content: MemoryContent
    embedding: Embedding
    emotion: Emotion | None = None
    created_at: datetime = field(default_factory=datetime.now)
    last_accessed_at: datetime | None = None
    strength: float = 1.0  # 0-1, reduced by decay, raised by touch()
    access_count: int = 0

    REINFORCEMENT = 0.1

    def __post_init__(self) -> None:
        if self.last_accessed_at is None:
            self.last_accessed_at = self.created_at

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Memory id is immutable")
        super().__setattr__(name, value)

    def touch(self, now: datetime | None = None) -> None:
        """Record an access: advance recency and reinforce strength.

        The recency marker always moves forward, even if the clock reports
        the same or an earlier instant than the previous access.

        Raises:
            TimeError: If the clock value cannot be compared or advanced
        """
        try:
            current = now or datetime.now()
            if current <= self.last_accessed_at:
                current = self.last_accessed_at + _TICK
        except (OverflowError, TypeError) as e:
            raise TimeError(f"Cannot update access time of memory {self.id}: {e}") from e

        self.last_accessed_at = current
        self.access_count += 1
        self.strength = min(1.0, self.strength + self.REINFORCEMENT)


@dataclass
class DecayReport:
    """Outcome of a decay pass."""

    decayed: int = 0
    evicted: int = 0

    def merge(self, other: "DecayReport | None") -> "DecayReport":
        if other is None:
            return self
        return DecayReport(
            decayed=self.decayed + other.decayed,
            evicted=self.evicted + other.evicted,
        )


class MemoryStore(ABC):
    """Canonical storage of memory records keyed by id."""

    @abstractmethod
    def add(self, memory: Memory) -> None:
        """Insert a memory. Callers only add freshly allocated ids."""
        ...

    @abstractmethod
    def get(self, memory_id: MemoryId) -> Memory | None:
        """Get memory by id."""
        ...

    @abstractmethod
    def iter(self) -> Iterator[Memory]:
        """Iterate over all stored memories."""
        ...

    def get_mut(self, memory_id: MemoryId) -> Memory | None:
        """Get memory by id for in-place modification."""
        return self.get(memory_id)

    # Eviction (optional - only needed by evicting decay strategies)
    def remove(self, memory_id: MemoryId) -> bool:
        """Remove memory. Not all stores support removal."""
        raise NotImplementedError(f"{type(self).__name__} does not support removal")

    def __iter__(self) -> Iterator[Memory]:
        return self.iter()

    def __contains__(self, memory_id: object) -> bool:
        return self.get(memory_id) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return sum(1 for _ in self.iter())


class VectorIndex(ABC):
    """Approximate nearest-neighbor structure over embeddings."""

    @abstractmethod
    def add(self, memory_id: MemoryId, embedding: Embedding) -> None:
        """Index an embedding under a memory id."""
        ...

    @abstractmethod
    def query(self, embedding: Embedding) -> list[MemoryId]:
        """Return candidate ids similar to the embedding.

        The result is an unordered candidate set; its size and recall are
        implementation-defined.
        """
        ...

    def remove(self, memory_id: MemoryId) -> None:
        """Drop an id from the index. No-op unless overridden."""
        return None


class DecayStrategy(ABC):
    """Policy that ages, weakens or evicts stored memories."""

    @abstractmethod
    def apply(self, store: MemoryStore) -> DecayReport | None:
        """Apply the policy to the store in place."""
        ...


Summarizer: TypeAlias = Callable[
    [Sequence[MemoryContent]], tuple[MemoryContent, Embedding, Emotion | None]
]
