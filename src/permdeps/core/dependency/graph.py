"""
Directed graph and topological ordering

A minimal directed graph keyed by hashable nodes, plus Kahn's algorithm for
topological ordering and a DFS cycle finder used to report the offending path
when no ordering exists.

Node and edge insertion order is preserved, so the ordering produced for an
unchanged graph is always the same.
"""

from collections import deque
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Set, Tuple

from permdeps.core.errors import CyclicDependencyError
from permdeps.logger import get_logger

logger = get_logger(__name__)


class DirectedGraph:
    """
    Directed graph with insertion-ordered nodes and edges.

    Duplicate edges collapse into one; self-loops are kept (and make the
    graph cyclic).
    """

    def __init__(self) -> None:
        self._successors: Dict[Hashable, Dict[Hashable, None]] = {}

    def add_node(self, node: Hashable) -> None:
        self._successors.setdefault(node, {})

    def add_edge(self, source: Hashable, target: Hashable) -> None:
        """Add an edge meaning `source` must come before `target`."""
        self.add_node(source)
        self.add_node(target)
        self._successors[source][target] = None

    @property
    def nodes(self) -> List[Hashable]:
        return list(self._successors)

    def successors(self, node: Hashable) -> List[Hashable]:
        return list(self._successors.get(node, {}))

    def edges(self) -> List[Tuple[Hashable, Hashable]]:
        return [
            (source, target)
            for source, targets in self._successors.items()
            for target in targets
        ]

    def __contains__(self, node: object) -> bool:
        return node in self._successors

    def __len__(self) -> int:
        return len(self._successors)

    def __repr__(self) -> str:
        return f"DirectedGraph(nodes={len(self)}, edges={len(self.edges())})"


def find_cycle(
    graph: DirectedGraph, start_nodes: Optional[Iterable[Hashable]] = None
) -> Optional[List[Hashable]]:
    """
    Find one cycle using DFS.

    Args:
        graph: Graph to search
        start_nodes: Nodes to start the search from (defaults to all nodes)

    Returns:
        Nodes along the cycle with the first node repeated at the end,
        or None if no cycle is reachable from start_nodes
    """
    visited: Set[Hashable] = set()
    on_path: Set[Hashable] = set()

    for start in graph.nodes if start_nodes is None else start_nodes:
        if start in visited:
            continue
        visited.add(start)
        on_path.add(start)
        path: List[Hashable] = [start]
        # iterative: a cycle may be longer than the recursion limit
        stack: List[Tuple[Hashable, Iterator[Hashable]]] = [
            (start, iter(graph.successors(start)))
        ]

        while stack:
            node, successors = stack[-1]
            for successor in successors:
                if successor in on_path:
                    cycle_start = path.index(successor)
                    return path[cycle_start:] + [successor]
                if successor not in visited:
                    visited.add(successor)
                    on_path.add(successor)
                    path.append(successor)
                    stack.append((successor, iter(graph.successors(successor))))
                    break
            else:
                stack.pop()
                path.pop()
                on_path.discard(node)
    return None


def topological_sort(graph: DirectedGraph) -> List[Hashable]:
    """
    Order graph nodes so that every edge's source precedes its target.

    Uses Kahn's algorithm. Nodes that become ready at the same time are
    emitted in the order they were first added to the graph.

    Args:
        graph: Graph to order

    Returns:
        Every node of the graph in dependency order

    Raises:
        CyclicDependencyError: If the graph contains a cycle
    """
    in_degree: Dict[Hashable, int] = {node: 0 for node in graph.nodes}
    for _, target in graph.edges():
        in_degree[target] += 1

    queue = deque(node for node, degree in in_degree.items() if degree == 0)
    order: List[Hashable] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        for successor in graph.successors(node):
            in_degree[successor] -= 1
            if in_degree[successor] == 0:
                queue.append(successor)

    if len(order) != len(graph):
        blocked = [node for node, degree in in_degree.items() if degree > 0]
        cycle = find_cycle(graph, blocked) or blocked
        logger.debug(f"Topological sort blocked on {len(blocked)} node(s), cycle: {cycle}")
        raise CyclicDependencyError(cycle)

    return order


__all__ = ["DirectedGraph", "find_cycle", "topological_sort"]
