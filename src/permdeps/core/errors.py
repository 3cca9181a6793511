"""
Custom exceptions for permission dependency resolution.

Exception Hierarchy:
    PermdepsError (base)
        └── BusinessError (caller/config errors, no stack trace needed)
            ├── ValidationError (inconsistent input)
            │   ├── InvalidBasePermissionsError (held set is already broken)
            │   └── CyclicDependencyError (no valid grant order exists)
            └── ConfigurationError (dependency map cannot be loaded)

Usage Guidelines:
    - Raise BusinessError subclasses for expected failures (bad input, bad config)
    - Use structured error format: what/why/how_to_fix/context
    - Neither InvalidBasePermissionsError nor CyclicDependencyError is
      retryable: the caller's state or the dependency map must change first

Structured Error Format:
    All error classes support optional structured information:
    - what: What went wrong (brief description)
    - why: Why it happened (root cause)
    - how_to_fix: How to resolve it (actionable steps)
    - context: Additional context (dict with relevant details)
"""

from typing import Iterable, List, Optional


class PermdepsError(RuntimeError):
    """
    Base exception for all permdeps-specific errors.

    Supports structured error information:
    - what: What went wrong
    - why: Why it happened
    - how_to_fix: How to resolve it
    - context: Additional context dict
    """

    def __init__(
        self,
        message: str,
        *,
        what: str | None = None,
        why: str | None = None,
        how_to_fix: str | None = None,
        context: dict | None = None,
    ):
        """
        Initialize error with optional structured information.

        Args:
            message: Error message (used if structured info not provided)
            what: Brief description of what went wrong
            why: Root cause explanation
            how_to_fix: Actionable resolution steps
            context: Additional context dictionary
        """
        self.what = what
        self.why = why
        self.how_to_fix = how_to_fix
        self.context = context or {}
        super().__init__(self._render() if what else message)

    def _render(self) -> str:
        """Join the structured fields into the multi-section message."""
        sections = [f"❌ {self.what}"]
        if self.why:
            sections.append(f"💡 Reason: {self.why}")
        if self.how_to_fix:
            sections.append(f"✅ Solution: {self.how_to_fix}")
        if self.context:
            lines = [f"  - {key}: {value}" for key, value in self.context.items()]
            sections.append("📝 Context:\n" + "\n".join(lines))
        return "\n\n".join(sections)


class BusinessError(PermdepsError):
    """
    Base exception for expected/user-facing failures.

    These errors represent expected failure modes caused by the caller's
    input or configuration, and are reported without stack traces.
    """

    pass


class ValidationError(BusinessError):
    """Input validation failure."""

    pass


class ConfigurationError(BusinessError):
    """
    Configuration-specific business error.

    Raised when the dependency map file is missing, unreadable,
    or does not match the expected schema.

    Example:
        >>> raise ConfigurationError(
        >>>     "Dependency map not found",
        >>>     what="Dependency map not found",
        >>>     how_to_fix="Set PERMDEPS_DEPENDENCY_MAP or pass --map",
        >>>     context={"path": str(path)},
        >>> )
    """

    pass


class InvalidBasePermissionsError(ValidationError):
    """
    The held permission set failed the consistency check before a
    grant or deny was evaluated.

    Attributes:
        existing: The held permissions as passed by the caller
        missing: Direct dependencies required by held permissions but not held
    """

    def __init__(
        self,
        existing: Optional[Iterable[str]],
        missing: Optional[Iterable[str]] = None,
    ):
        self.existing: Optional[List[str]] = list(existing) if existing is not None else None
        self.missing: List[str] = list(missing or [])
        if self.existing is None:
            why = "No held permission set was supplied"
        elif self.missing:
            why = f"Held permissions are missing direct dependencies: {', '.join(self.missing)}"
        else:
            why = "Dependencies of the held permissions could not be resolved"
        super().__init__(
            "Invalid Base Permissions",
            what="Invalid Base Permissions",
            why=why,
            how_to_fix="Repair the held permission set before granting or denying",
            context={"existing": self.existing, "missing": self.missing},
        )


class CyclicDependencyError(ValidationError):
    """
    The dependency graph contains a cycle, so no grant order exists.

    Attributes:
        cycle: Permission ids along the cycle, first id repeated at the end
    """

    def __init__(self, cycle: Iterable[str]):
        self.cycle: List[str] = list(cycle)
        path = " -> ".join(str(node) for node in self.cycle)
        super().__init__(
            f"Circular dependency detected: {path}",
            what="Circular dependency detected",
            why=f"Permissions depend on each other: {path}",
            how_to_fix="Remove one of the dependencies along the cycle from the dependency map",
            context={"cycle": self.cycle},
        )


__all__ = [
    "PermdepsError",
    "BusinessError",
    "ValidationError",
    "ConfigurationError",
    "InvalidBasePermissionsError",
    "CyclicDependencyError",
]
