"""
Permission dependency resolution

DependencyResolver answers questions about a static dependency map: which
permissions a permission directly requires, whether a held set is
consistent, whether a permission may be granted or denied, and in which order
a batch of permissions must be applied.

All lookups are one level deep. With A -> B -> C, holding only C is not
enough to grant A, because B is not held.
"""

import logging
from collections import deque
from collections.abc import Iterable
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Set, Tuple, Union

from permdeps.core.dependency.graph import DirectedGraph, topological_sort
from permdeps.core.errors import InvalidBasePermissionsError
from permdeps.logger import get_logger

logger = get_logger(__name__)

DependencyMap = Mapping[str, Sequence[str]]
PermissionInput = Union[str, Iterable, None]


def _as_permission_list(permissions: PermissionInput) -> Optional[List[str]]:
    """Normalize a single id or an iterable of ids into a list (None stays None)."""
    if permissions is None:
        return None
    if isinstance(permissions, str):
        return [permissions]
    return list(permissions)


def _freeze_entry(required):
    """Copy list-like entries into tuples; malformed ones are kept for lookup to report."""
    if isinstance(required, (str, bytes)) or not isinstance(required, Iterable):
        return required
    return tuple(required)


class DependencyResolver:
    """
    Resolve permission dependencies against an immutable dependency map.

    The resolver keeps a read-only view of the map it is given and never
    mutates it or any permission set passed in, so one instance can be
    shared between threads.

    Args:
        dependencies: Mapping of permission id to the ids it directly requires
        logger: Logger receiving diagnostics (defaults to the module logger,
            which is silent until logging is configured)

    Example:
        >>> resolver = DependencyResolver({"edit": ["view"], "view": []})
        >>> resolver.can_grant(["view"], "edit")
        True
    """

    def __init__(
        self,
        dependencies: Optional[DependencyMap] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._dependencies: Mapping[str, Sequence[str]] = MappingProxyType(
            {
                permission: _freeze_entry(required)
                for permission, required in (dependencies or {}).items()
            }
        )
        self._logger = logger if logger is not None else get_logger(__name__)

    @property
    def dependencies(self) -> Mapping[str, Sequence[str]]:
        return self._dependencies

    def _direct_dependencies(self, permission: str) -> Tuple[str, ...]:
        entry = self._dependencies.get(permission)
        if entry is None:
            return ()
        if isinstance(entry, (str, bytes)) or not isinstance(entry, Iterable):
            raise TypeError(
                f"Malformed dependency entry for '{permission}': "
                f"expected a list of permission ids, got {type(entry).__name__}"
            )
        required = tuple(entry)
        for dependency in required:
            if not isinstance(dependency, str):
                raise TypeError(
                    f"Malformed dependency entry for '{permission}': "
                    f"{dependency!r} is not a permission id"
                )
        return required

    def get_dependency_list(self, permissions: PermissionInput) -> Optional[List[str]]:
        """
        Get the permissions directly required by one or more permissions.

        Args:
            permissions: A permission id or an iterable of permission ids

        Returns:
            Deduplicated list of direct dependencies (first-seen order), [] if
            nothing is required, or None if no lookup was performed (empty
            input) or the dependency data could not be read
        """
        self._logger.debug(f"get_dependency_list({permissions!r})")
        if not permissions:
            return None

        try:
            requested = _as_permission_list(permissions)
            if not requested:
                return None
            dependency_list: List[str] = []
            for permission in requested:
                dependency_list.extend(self._direct_dependencies(permission))
            return list(dict.fromkeys(dependency_list))
        except Exception as e:
            self._logger.error(f"get_dependency_list({permissions!r}) failed: {e}")
            return None

    def _missing_dependencies(self, held: List[str]) -> Optional[List[str]]:
        """Direct dependencies of `held` that are not in `held` (None on lookup failure)."""
        if not held:
            return []
        dependency_list = self.get_dependency_list(held)
        if dependency_list is None:
            return None
        held_set = set(held)
        return [permission for permission in dependency_list if permission not in held_set]

    def _require_valid_base(self, existing: PermissionInput) -> List[str]:
        held = _as_permission_list(existing)
        if held is None:
            raise InvalidBasePermissionsError(None)
        missing = self._missing_dependencies(held)
        if missing is None or missing:
            self._logger.warning(
                f"Rejecting inconsistent held permissions {held}, missing: {missing}"
            )
            raise InvalidBasePermissionsError(held, missing)
        return held

    def is_valid_existing_permission(self, existing: PermissionInput) -> bool:
        """
        Check that every direct dependency of the held permissions is held.

        Returns:
            True if the held set is consistent, False otherwise (including
            for an empty or missing held set)
        """
        self._logger.debug(f"is_valid_existing_permission({existing!r})")
        held = _as_permission_list(existing)
        if not held:
            return False
        return self._missing_dependencies(held) == []

    def can_grant(self, existing: PermissionInput, to_grant: PermissionInput) -> bool:
        """
        Check whether `to_grant` may be added to the held permissions.

        An empty held set is accepted as a (trivially consistent) base.
        Granting an already-held permission is allowed.

        Raises:
            InvalidBasePermissionsError: If `existing` is missing or inconsistent
        """
        self._logger.debug(f"can_grant({existing!r}, {to_grant!r})")
        held = self._require_valid_base(existing)

        if not to_grant:
            return False
        dependency_list = self.get_dependency_list(to_grant)
        if dependency_list is None:
            return False
        held_set = set(held)
        return all(permission in held_set for permission in dependency_list)

    def can_deny(self, existing: PermissionInput, to_deny: PermissionInput) -> bool:
        """
        Check whether `to_deny` may be removed without leaving the held
        permissions inconsistent.

        Every occurrence of `to_deny` is removed; an empty remainder is
        consistent.

        Raises:
            InvalidBasePermissionsError: If `existing` is missing or inconsistent
        """
        self._logger.debug(f"can_deny({existing!r}, {to_deny!r})")
        held = self._require_valid_base(existing)

        removed = _as_permission_list(to_deny)
        if not removed:
            return False
        removed_set = set(removed)
        remaining = [permission for permission in held if permission not in removed_set]
        return self._missing_dependencies(remaining) == []

    def sort(self, permissions: PermissionInput) -> List[str]:
        """
        Order permissions so that each dependency precedes its dependents.

        Dependencies discovered along the way are looked up in turn, so the
        result covers the whole dependency chain of every requested
        permission.

        Returns:
            Requested and discovered permissions in grant order

        Raises:
            CyclicDependencyError: If the dependencies form a cycle
        """
        self._logger.debug(f"sort({permissions!r})")
        requested = _as_permission_list(permissions)
        if not requested:
            return []

        graph = DirectedGraph()
        expanded: Set[str] = set()
        pending = deque(requested)
        while pending:
            permission = pending.popleft()
            if permission in expanded:
                continue
            expanded.add(permission)

            dependency_list = self.get_dependency_list(permission)
            if not dependency_list:
                graph.add_node(permission)
                continue
            for dependency in dependency_list:
                graph.add_edge(dependency, permission)
                pending.append(dependency)

        return topological_sort(graph)


__all__ = ["DependencyResolver", "DependencyMap"]
