"""
permdeps - Permission Dependency Resolution

Answers questions about a static permission dependency map:

- core.dependency.resolver: DependencyResolver (lookup, consistency,
  grant/deny feasibility, grant ordering)
- core.dependency.graph: directed graph and topological sort
- core.dependency.loader: JSON dependency map loading and validation
- core.errors: structured exception hierarchy
- cli: command line tools [permdeps]
"""

__version__ = "0.1.0"

# Core exports are loaded on first access via __getattr__
__all__ = [
    # Resolution
    "DependencyResolver",
    "DirectedGraph",
    "topological_sort",
    # Loading
    "load_dependency_map",
    "parse_dependency_map",
    # Errors
    "PermdepsError",
    "ConfigurationError",
    "InvalidBasePermissionsError",
    "CyclicDependencyError",
    # Logging
    "get_logger",
    # Version
    "__version__",
]


def __getattr__(name):
    """Lazy import so `permdeps --help` does not load pydantic"""

    if name in (
        "DependencyResolver",
        "DirectedGraph",
        "topological_sort",
        "load_dependency_map",
        "parse_dependency_map",
    ):
        from permdeps.core.dependency import (
            DependencyResolver,  # noqa: F401
            DirectedGraph,  # noqa: F401
            topological_sort,  # noqa: F401
            load_dependency_map,  # noqa: F401
            parse_dependency_map,  # noqa: F401
        )

        return locals()[name]

    if name in (
        "PermdepsError",
        "ConfigurationError",
        "InvalidBasePermissionsError",
        "CyclicDependencyError",
    ):
        from permdeps.core.errors import (
            PermdepsError,  # noqa: F401
            ConfigurationError,  # noqa: F401
            InvalidBasePermissionsError,  # noqa: F401
            CyclicDependencyError,  # noqa: F401
        )

        return locals()[name]

    if name == "get_logger":
        from permdeps.logger import get_logger

        return get_logger

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
