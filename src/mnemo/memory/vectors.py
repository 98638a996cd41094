"""Embedding helpers."""

from collections.abc import Sequence

import numpy as np

from mnemo.memory.errors import DimensionMismatchError, EmbeddingError


def as_embedding(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """Convert values to a 1-D float32 vector."""
    vector = np.asarray(values, dtype=np.float32)
    if vector.ndim != 1:
        raise EmbeddingError(f"Embedding must be 1-D, got shape {vector.shape}")
    if vector.size == 0:
        raise EmbeddingError("Embedding is empty")
    return vector


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity of two embeddings.

    Raises:
        DimensionMismatchError: If the shapes differ
    """
    if a.shape != b.shape:
        raise DimensionMismatchError(a.shape, b.shape)

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))
