"""Memory system error types."""


class MemorySystemError(Exception):
    """Base class for memory system failures."""


class MemoryNotFoundError(MemorySystemError, KeyError):
    """Referenced memory id is not in the store."""

    def __init__(self, memory_id: int):
        self.memory_id = memory_id
        super().__init__(f"Memory not found: {memory_id}")

    def __str__(self) -> str:
        return self.args[0]


class TimeError(MemorySystemError):
    """Clock or time arithmetic failure while updating a memory."""


class InvalidOperationError(MemorySystemError):
    """Operation violates a domain rule."""


class EmbeddingError(MemorySystemError, ValueError):
    """Embedding is empty or malformed."""


class DimensionMismatchError(EmbeddingError):
    """Two embeddings have different shapes."""

    def __init__(self, left: tuple[int, ...], right: tuple[int, ...]):
        self.left = left
        self.right = right
        super().__init__(f"Embedding dimension mismatch: {left} vs {right}")


class SummarizerError(MemorySystemError):
    """Summarizer could not produce a consolidated memory."""
