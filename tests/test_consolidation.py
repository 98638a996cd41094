"""Tests for cluster consolidation."""

import pytest

from mnemo.memory.base import Emotion
from mnemo.memory.errors import InvalidOperationError, MemoryNotFoundError, SummarizerError
from mnemo.memory.index import BruteForceVectorIndex
from mnemo.memory.store import InMemoryStore
from mnemo.memory.summarizer import concat_summarizer
from mnemo.memory.system import MemorySystem, MemorySystemConfig
from mnemo.memory.vectors import as_embedding


class RecordingSummarizer:
    """Summarizer stub that remembers what it was given."""

    def __init__(self, embedding=(1.0, 0.0), emotion=None):
        self.embedding = embedding
        self.emotion = emotion
        self.calls: list[list[str]] = []

    def __call__(self, contents):
        self.calls.append(list(contents))
        return "summary: " + "; ".join(contents), as_embedding(self.embedding), self.emotion


@pytest.fixture
def system() -> MemorySystem:
    return MemorySystem(
        InMemoryStore(),
        BruteForceVectorIndex(),
        MemorySystemConfig(w_similarity=1.0, w_graph=0.0, consolidation_threshold=0.9),
    )


@pytest.fixture
def abc(system: MemorySystem) -> tuple[int, int, int]:
    a = system.add_memory("A", [1.0, 0.0])
    b = system.add_memory("B", [0.99, 0.01])
    c = system.add_memory("C", [0.0, 1.0])
    return a, b, c


def test_consolidate_clusters_similar_memories(system: MemorySystem, abc):
    """Consolidation clusters memories above the threshold."""
    a, b, c = abc
    summarizer = RecordingSummarizer(emotion=Emotion("calm"))

    d = system.consolidate(a, summarizer)

    assert summarizer.calls == [["A", "B"]]
    assert d > c
    assert system.graph.edge_count(d, a) == 1
    assert system.graph.edge_count(d, b) == 1

    abstract = system.get_memory(d)
    assert abstract.content == "summary: A; B"
    assert abstract.emotion == Emotion("calm")


def test_consolidate_success_shape(system: MemorySystem, abc):
    """Consolidation adds one memory and one edge per member."""
    a, b, c = abc
    before = {
        m.id: (m.content, m.embedding.copy(), m.strength, m.last_accessed_at)
        for m in system.store
    }
    edges_before = len(system.graph)

    d = system.consolidate(a, RecordingSummarizer())

    # One new memory, members untouched
    assert len(system) == 4
    for memory_id, (content, embedding, strength, accessed) in before.items():
        memory = system.store.get(memory_id)
        assert memory.content == content
        assert (memory.embedding == embedding).all()
        assert memory.strength == strength
        assert memory.last_accessed_at == accessed

    # Temporal link to the previous memory plus one edge per member
    assert len(system.graph) == edges_before + 1 + 2
    assert system.graph.get_neighbors(d) == {a, b, c}
    assert system.graph.edge_count(d, c) == 1  # temporal, not lineage
    assert system.graph.get_neighbors(a) is None  # no reverse edges


def test_consolidated_memory_is_searchable(system: MemorySystem, abc):
    """Consolidated memory is indexed."""
    a, _, _ = abc
    d = system.consolidate(a, RecordingSummarizer(embedding=(0.7, 0.7)))

    results = system.search([0.7, 0.7], top_k=1)

    assert results[0][0].id == d


def test_consolidate_needs_two_members(system: MemorySystem, abc):
    """Singleton cluster is rejected before summarizing."""
    _, _, c = abc
    summarizer = RecordingSummarizer()

    with pytest.raises(InvalidOperationError, match="Not enough memories to consolidate"):
        system.consolidate(c, summarizer)

    assert summarizer.calls == []
    assert len(system) == 3


def test_consolidate_single_memory_store(system: MemorySystem):
    """A lone memory cannot be consolidated."""
    only = system.add_memory("alone", [1.0, 0.0])
    with pytest.raises(InvalidOperationError):
        system.consolidate(only, RecordingSummarizer())


def test_threshold_is_strict(system: MemorySystem):
    """Similarity equal to the threshold does not join the cluster."""
    a = system.add_memory("A", [1.0, 0.0])
    system.add_memory("twin", [1.0, 0.0])
    strict = MemorySystem(
        system.store,
        BruteForceVectorIndex(),
        MemorySystemConfig(consolidation_threshold=1.0),
    )

    with pytest.raises(InvalidOperationError):
        strict.consolidate(a, RecordingSummarizer())


def test_consolidate_missing_central(system: MemorySystem):
    """Unknown central memory raises."""
    with pytest.raises(MemoryNotFoundError):
        system.consolidate(5, RecordingSummarizer())


def test_consolidate_skips_mismatched_dimensions(system: MemorySystem, abc):
    """Mismatched embeddings are excluded and counted."""
    a, b, _ = abc
    system.add_memory("3d", [1.0, 0.0, 0.0])

    d = system.consolidate(a, RecordingSummarizer())

    assert system.graph.get_neighbors(d) >= {a, b}
    assert system.stats.consolidation_skipped == 1
    assert system.stats.consolidations == 1


def test_summarizer_errors_propagate(system: MemorySystem, abc):
    """Summarizer failures propagate and add nothing."""
    a, _, _ = abc

    def failing(contents):
        raise SummarizerError("model unavailable")

    with pytest.raises(SummarizerError):
        system.consolidate(a, failing)
    assert len(system) == 3


def test_consolidate_with_concat_summarizer(system: MemorySystem, abc):
    """Offline summarizer joins cluster contents."""
    a, _, _ = abc
    d = system.consolidate(a, concat_summarizer(lambda text: [1.0, 0.0]))
    assert system.store.get(d).content == "A | B"
