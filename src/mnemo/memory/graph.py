"""Directed relationship graph over memory ids."""

from collections import Counter, defaultdict

from mnemo.memory.base import MemoryId


class MemoryGraph:
    """Adjacency structure used for context boosting and consolidation lineage.

    Edges are directed and may repeat; `get_neighbors` reports distinct
    targets while `edge_count` reports multiplicity. Endpoints are not
    checked against any store.
    """

    def __init__(self):
        self._edges: dict[MemoryId, Counter[MemoryId]] = defaultdict(Counter)
        self._reverse: dict[MemoryId, set[MemoryId]] = defaultdict(set)
        self._total = 0

    def add_edge(self, from_id: MemoryId, to_id: MemoryId) -> None:
        self._edges[from_id][to_id] += 1
        self._reverse[to_id].add(from_id)
        self._total += 1

    def get_neighbors(self, memory_id: MemoryId) -> frozenset[MemoryId] | None:
        """Outgoing neighbors, or None if the id has no outgoing edges."""
        targets = self._edges.get(memory_id)
        if not targets:
            return None
        return frozenset(targets)

    def predecessors(self, memory_id: MemoryId) -> frozenset[MemoryId]:
        return frozenset(self._reverse.get(memory_id, ()))

    def edge_count(self, from_id: MemoryId, to_id: MemoryId) -> int:
        targets = self._edges.get(from_id)
        return targets[to_id] if targets else 0

    def __len__(self) -> int:
        return self._total
