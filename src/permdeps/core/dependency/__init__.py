# Dependency module exports
from .graph import (
    DirectedGraph,
    find_cycle,
    topological_sort,
)
from .resolver import (
    DependencyMap,
    DependencyResolver,
)
from .loader import (
    freeze_dependency_map,
    load_dependency_map,
    parse_dependency_map,
)

__all__ = [
    # Graph
    "DirectedGraph",
    "find_cycle",
    "topological_sort",
    # Resolution
    "DependencyMap",
    "DependencyResolver",
    # Loading
    "freeze_dependency_map",
    "load_dependency_map",
    "parse_dependency_map",
]
