"""Tests for the relationship graph."""

from mnemo.memory.graph import MemoryGraph


def test_unknown_node_has_no_neighbors():
    """Unknown id has no neighbors."""
    assert MemoryGraph().get_neighbors(1) is None


def test_edges_are_directed():
    """Edges only point one way."""
    graph = MemoryGraph()
    graph.add_edge(1, 2)

    assert graph.get_neighbors(1) == {2}
    assert graph.get_neighbors(2) is None
    assert graph.predecessors(2) == {1}
    assert graph.predecessors(1) == frozenset()


def test_duplicate_edges_are_kept():
    """Repeated edges are counted."""
    graph = MemoryGraph()
    graph.add_edge(1, 2)
    graph.add_edge(1, 2)
    graph.add_edge(1, 3)

    assert graph.get_neighbors(1) == {2, 3}
    assert graph.edge_count(1, 2) == 2
    assert graph.edge_count(1, 3) == 1
    assert graph.edge_count(2, 1) == 0
    assert len(graph) == 3


def test_self_loops_and_dangling_ids_allowed():
    """Endpoints are not validated."""
    graph = MemoryGraph()
    graph.add_edge(5, 5)
    graph.add_edge(5, 999)

    assert graph.get_neighbors(5) == {5, 999}


def test_neighbors_are_immutable_snapshot():
    """Neighbor sets do not change under later edges."""
    graph = MemoryGraph()
    graph.add_edge(1, 2)
    neighbors = graph.get_neighbors(1)
    graph.add_edge(1, 3)

    assert neighbors == {2}
    assert isinstance(neighbors, frozenset)
