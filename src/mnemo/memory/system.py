"""
Memory system orchestrator.

Fuses three retrieval primitives into one engine:
- store: exact lookup of canonical records
- index: approximate nearest-neighbor candidates
- graph: explicit relationships (temporal succession, consolidation lineage)

Ingestion writes to all three. Search asks the index for candidates,
hydrates them from the store and ranks them by a weighted sum of cosine
similarity and graph adjacency to an optional context memory.

Not thread-safe: wrap in LockedMemorySystem when sharing across threads.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from mnemo.core.logging import get_logger
from mnemo.memory.base import (
    DecayReport,
    DecayStrategy,
    Embedding,
    Emotion,
    Memory,
    MemoryContent,
    MemoryId,
    MemoryStore,
    Summarizer,
    VectorIndex,
)
from mnemo.memory.errors import (
    EmbeddingError,
    InvalidOperationError,
    MemoryNotFoundError,
    TimeError,
)
from mnemo.memory.graph import MemoryGraph
from mnemo.memory.vectors import as_embedding, cosine_similarity

logger = get_logger("memory.system")


@dataclass(frozen=True)
class MemorySystemConfig:
    """Scoring and consolidation weights.

    No normalization is applied; callers keep the weights on a consistent scale.
    """

    w_similarity: float = 1.0
    w_graph: float = 0.5
    graph_boost: float = 0.2
    consolidation_threshold: float = 0.85


@dataclass
class SystemStats:
    """Counters for operations and silently skipped candidates."""

    searches: int = 0
    search_skipped: int = 0
    consolidations: int = 0
    consolidation_skipped: int = 0
    index_pruned: int = 0


def _score_key(item: tuple[Memory, float]) -> float:
    # NaN compares equal to everything; rank it last
    score = item[1]
    return -math.inf if math.isnan(score) else score


class MemorySystem:
    """Orchestrates store, vector index and relationship graph."""

    def __init__(
        self,
        store: MemoryStore,
        index: VectorIndex,
        config: MemorySystemConfig | None = None,
        graph: MemoryGraph | None = None,
    ):
        self._store = store
        self._index = index
        self._graph = graph if graph is not None else MemoryGraph()
        self.config = config if config is not None else MemorySystemConfig()
        self.stats = SystemStats()

        # Resume after any ids already present in a pre-populated store
        existing = [m.id for m in store.iter()]
        self._next_id: MemoryId = max(existing) + 1 if existing else 0
        self._last_id: MemoryId | None = max(existing) if existing else None
        # Ids assumed present in the index, pruned when the store drops them
        self._indexed: set[MemoryId] = set(existing)

    @property
    def graph(self) -> MemoryGraph:
        return self._graph

    @property
    def store(self) -> MemoryStore:
        return self._store

    def __len__(self) -> int:
        return len(self._store)

    # Ingestion

    def add_memory(
        self,
        content: MemoryContent,
        embedding: Sequence[float] | Embedding,
        emotion: Emotion | None = None,
    ) -> MemoryId:
        """Store, index and temporally link a new memory.

        Returns:
            Newly allocated memory id

        Raises:
            EmbeddingError: If the embedding is empty or not 1-D
        """
        vector = as_embedding(embedding)

        # Allocate before any write so a failing collaborator never causes reuse
        memory_id = self._next_id
        self._next_id += 1
        memory = Memory(id=memory_id, content=content, embedding=vector, emotion=emotion)

        self._store.add(memory)
        self._index.add(memory_id, vector)
        self._indexed.add(memory_id)
        if self._last_id is not None:
            self._graph.add_edge(memory_id, self._last_id)

        self._last_id = memory_id
        logger.debug(f"Added memory {memory_id} (dim={vector.shape[0]})")
        return memory_id

    # Retrieval

    def get_memory(self, memory_id: MemoryId) -> Memory:
        """Fetch a memory and reinforce it.

        Raises:
            MemoryNotFoundError: If the id is not stored
            TimeError: If the access time cannot be updated
        """
        memory = self._store.get_mut(memory_id)
        if memory is None:
            raise MemoryNotFoundError(memory_id)

        try:
            memory.touch()
        except TimeError:
            raise
        except (OverflowError, ValueError) as e:
            raise TimeError(str(e)) from e

        memory = self._store.get(memory_id)
        if memory is None:
            raise MemoryNotFoundError(memory_id)
        return memory

    def search(
        self,
        query_embedding: Sequence[float] | Embedding,
        top_k: int,
        context_id: MemoryId | None = None,
    ) -> list[tuple[Memory, float]]:
        """Rank index candidates by weighted similarity and graph proximity.

        Args:
            query_embedding: Query vector
            top_k: Maximum number of results
            context_id: Memory whose graph neighbors receive the graph boost

        Returns:
            (memory, score) pairs, highest score first
        """
        query = as_embedding(query_embedding)
        self.stats.searches += 1
        if top_k <= 0:
            return []

        candidate_ids = self._index.query(query)

        context_neighbors: frozenset[MemoryId] = frozenset()
        if context_id is not None:
            context_neighbors = self._graph.get_neighbors(context_id) or frozenset()

        scored: list[tuple[Memory, float]] = []
        for candidate_id in candidate_ids:
            memory = self._store.get(candidate_id)
            if memory is None:
                logger.debug(f"Index candidate {candidate_id} missing from store, skipped")
                self.stats.search_skipped += 1
                continue

            try:
                similarity = cosine_similarity(memory.embedding, query)
            except EmbeddingError as e:
                logger.debug(f"Similarity failed for memory {candidate_id}, skipped: {e}")
                self.stats.search_skipped += 1
                continue

            graph_score = self.config.graph_boost if candidate_id in context_neighbors else 0.0
            final_score = (
                self.config.w_similarity * similarity + self.config.w_graph * graph_score
            )
            scored.append((memory, final_score))

        # Stable: equal scores keep index candidate order
        scored.sort(key=_score_key, reverse=True)
        return scored[:top_k]

    # Maintenance

    def apply_decay(self, strategy: DecayStrategy) -> DecayReport | None:
        """Run one decay pass. Strategy errors propagate unchanged.

        Ids the strategy evicted from the store are also removed from the
        index so they stop taking candidate slots.
        """
        try:
            report = strategy.apply(self._store)
        finally:
            self._prune_index()
        if report is not None:
            logger.info(
                f"Decay {type(strategy).__name__}: "
                f"{report.decayed} decayed, {report.evicted} evicted"
            )
        return report

    def _prune_index(self) -> None:
        gone = [mid for mid in self._indexed if mid not in self._store]
        for memory_id in gone:
            self._index.remove(memory_id)
            self._indexed.discard(memory_id)
        if gone:
            self.stats.index_pruned += len(gone)
            logger.debug(f"Pruned {len(gone)} evicted ids from the index")

    def add_relationship(self, from_id: MemoryId, to_id: MemoryId) -> None:
        """Add a directed edge. Endpoints are not validated."""
        self._graph.add_edge(from_id, to_id)

    def consolidate(self, central_id: MemoryId, summarizer: Summarizer) -> MemoryId:
        """Summarize the cluster of memories similar to a central memory.

        The cluster is every stored memory whose similarity to the central
        embedding exceeds `consolidation_threshold` (the central memory
        included). The summary is added as a new memory linked to each
        member by an `abstract -> member` edge. Members are not modified.

        Returns:
            Id of the consolidated memory

        Raises:
            MemoryNotFoundError: If the central memory is not stored
            InvalidOperationError: If the cluster has fewer than two members
        """
        central = self._store.get(central_id)
        if central is None:
            raise MemoryNotFoundError(central_id)

        threshold = self.config.consolidation_threshold
        cluster: list[Memory] = []
        for memory in self._store.iter():
            try:
                similarity = cosine_similarity(memory.embedding, central.embedding)
            except EmbeddingError as e:
                logger.debug(f"Similarity failed for memory {memory.id}, excluded: {e}")
                self.stats.consolidation_skipped += 1
                continue
            if similarity > threshold:
                cluster.append(memory)

        if len(cluster) <= 1:
            raise InvalidOperationError("Not enough memories to consolidate")

        contents = [m.content for m in cluster]
        content, embedding, emotion = summarizer(contents)

        abstract_id = self.add_memory(content, embedding, emotion)
        for member in cluster:
            self._graph.add_edge(abstract_id, member.id)

        self.stats.consolidations += 1
        logger.info(
            f"Consolidated {len(cluster)} memories around {central_id} into {abstract_id}"
        )
        return abstract_id
