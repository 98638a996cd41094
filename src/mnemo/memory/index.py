"""Brute-force vector index."""

import numpy as np

from mnemo.core.logging import get_logger
from mnemo.memory.base import Embedding, MemoryId, VectorIndex
from mnemo.memory.vectors import as_embedding

logger = get_logger("memory.index")


class BruteForceVectorIndex(VectorIndex):
    """Exact cosine search over every indexed vector.

    Returns the ids of the `limit` most similar vectors. Vectors whose
    dimension differs from the query are never returned.
    """

    def __init__(self, limit: int = 32, min_similarity: float | None = None):
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        self.limit = limit
        self.min_similarity = min_similarity
        self._vectors: dict[MemoryId, np.ndarray] = {}

    def add(self, memory_id: MemoryId, embedding: Embedding) -> None:
        vector = as_embedding(embedding)
        norm = np.linalg.norm(vector)
        self._vectors[memory_id] = vector / norm if norm > 0 else vector

    def query(self, embedding: Embedding) -> list[MemoryId]:
        if not self._vectors:
            return []

        query = as_embedding(embedding)
        norm = np.linalg.norm(query)
        if norm > 0:
            query = query / norm

        ids = [mid for mid, vec in self._vectors.items() if vec.shape == query.shape]
        if len(ids) < len(self._vectors):
            logger.debug(
                f"Ignoring {len(self._vectors) - len(ids)} vectors with dimension != {query.shape[0]}"
            )
        if not ids:
            return []

        matrix = np.vstack([self._vectors[mid] for mid in ids])
        scores = matrix @ query

        order = np.argsort(-scores, kind="stable")[: self.limit]
        if self.min_similarity is not None:
            order = [i for i in order if scores[i] >= self.min_similarity]
        return [ids[i] for i in order]

    def remove(self, memory_id: MemoryId) -> None:
        self._vectors.pop(memory_id, None)

    def __len__(self) -> int:
        return len(self._vectors)
