"""
Unit tests for permdeps.core.dependency.graph
"""
import pytest

from permdeps.core.dependency import graph
from permdeps.core.errors import CyclicDependencyError


def build(edges, nodes=()):
    g = graph.DirectedGraph()
    for node in nodes:
        g.add_node(node)
    for source, target in edges:
        g.add_edge(source, target)
    return g


def assert_respects_edges(order, g):
    position = {node: index for index, node in enumerate(order)}
    for source, target in g.edges():
        assert position[source] < position[target], f"{source} must precede {target}"


def test_graph_basics():
    g = build([("B", "A"), ("C", "B"), ("B", "A")], nodes=["D"])
    assert g.nodes == ["D", "B", "A", "C"]
    assert g.successors("B") == ["A"]
    assert g.successors("missing") == []
    # Duplicate edges collapse
    assert g.edges() == [("B", "A"), ("C", "B")]
    assert "D" in g
    assert "Z" not in g
    assert len(g) == 4


def test_topological_sort_chain():
    g = build([("B", "A"), ("C", "B")])
    assert graph.topological_sort(g) == ["C", "B", "A"]


@pytest.mark.parametrize("edges,nodes", [
    # Diamond
    ([("D", "B"), ("D", "C"), ("B", "A"), ("C", "A")], []),
    # Disconnected components with isolated nodes
    ([("x", "y"), ("p", "q"), ("q", "r")], ["lonely"]),
    # Wide fan-out
    ([("root", f"leaf{i}") for i in range(10)], []),
])
def test_topological_sort_respects_edges(edges, nodes):
    g = build(edges, nodes)
    order = graph.topological_sort(g)
    assert sorted(order) == sorted(g.nodes)
    assert_respects_edges(order, g)


def test_topological_sort_ties_follow_insertion_order():
    g = build([], nodes=["c", "a", "b"])
    assert graph.topological_sort(g) == ["c", "a", "b"]
    # Same graph, same answer
    assert graph.topological_sort(g) == graph.topological_sort(g)


def test_topological_sort_empty_graph():
    assert graph.topological_sort(graph.DirectedGraph()) == []


@pytest.mark.parametrize("edges,cycle_nodes", [
    # Simple cycle
    ([("X", "Y"), ("Y", "X")], {"X", "Y"}),
    # Self-cycle
    ([("A", "A")], {"A"}),
    # Cycle behind an acyclic prefix, with a node downstream of it
    ([("start", "P"), ("P", "Q"), ("Q", "R"), ("R", "P"), ("R", "end")], {"P", "Q", "R"}),
])
def test_topological_sort_detects_cycles(edges, cycle_nodes):
    g = build(edges)
    with pytest.raises(CyclicDependencyError, match="Circular dependency") as exc_info:
        graph.topological_sort(g)
    cycle = exc_info.value.cycle
    assert cycle[0] == cycle[-1]
    assert set(cycle) == cycle_nodes


def test_find_cycle():
    assert graph.find_cycle(build([("A", "B"), ("B", "C")])) is None
    assert graph.find_cycle(build([("A", "B"), ("B", "C"), ("C", "A")])) == ["A", "B", "C", "A"]
    # Restricting the start nodes skips unreachable cycles
    g = build([("A", "B"), ("X", "Y"), ("Y", "X")])
    assert graph.find_cycle(g, ["A"]) is None
    assert graph.find_cycle(g, ["X"]) == ["X", "Y", "X"]


def test_find_cycle_long_ring():
    size = 5000
    g = build([(f"n{i}", f"n{(i + 1) % size}") for i in range(size)])
    cycle = graph.find_cycle(g)
    assert cycle == [f"n{i}" for i in range(size)] + ["n0"]
    with pytest.raises(CyclicDependencyError) as exc_info:
        graph.topological_sort(g)
    assert len(exc_info.value.cycle) == size + 1
