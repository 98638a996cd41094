"""
Memory module - associative memory engine.

Parts:
- base: Memory record and collaborator interfaces (store, index, decay)
- store / index: In-process reference store and vector index
- graph: Directed relationship graph
- decay: Pluggable decay strategies
- system: MemorySystem orchestrator (add, get, search, decay, relate, consolidate)
- summarizer: LLM-backed and offline consolidation summarizers

Storage: in-process; persistence is left to custom MemoryStore implementations.
"""

from mnemo.memory.base import (
    DecayReport,
    DecayStrategy,
    Emotion,
    Memory,
    MemoryStore,
    VectorIndex,
)
from mnemo.memory.errors import (
    DimensionMismatchError,
    EmbeddingError,
    InvalidOperationError,
    MemoryNotFoundError,
    MemorySystemError,
    SummarizerError,
    TimeError,
)
from mnemo.memory.graph import MemoryGraph
from mnemo.memory.index import BruteForceVectorIndex
from mnemo.memory.store import InMemoryStore
from mnemo.memory.system import MemorySystem, MemorySystemConfig, SystemStats

__all__ = [
    "BruteForceVectorIndex",
    "DecayReport",
    "DecayStrategy",
    "DimensionMismatchError",
    "EmbeddingError",
    "Emotion",
    "InMemoryStore",
    "InvalidOperationError",
    "Memory",
    "MemoryGraph",
    "MemoryNotFoundError",
    "MemoryStore",
    "MemorySystem",
    "MemorySystemConfig",
    "MemorySystemError",
    "SummarizerError",
    "SystemStats",
    "TimeError",
    "VectorIndex",
]
