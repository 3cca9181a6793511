"""
Tests for structured error messages

Verifies the error hierarchy, the what/why/how_to_fix/context format,
and the ids carried by the resolver errors.
"""

from permdeps.core.errors import (
    BusinessError,
    ConfigurationError,
    CyclicDependencyError,
    InvalidBasePermissionsError,
    PermdepsError,
    ValidationError,
)


class TestStructuredErrors:
    """Test structured error format"""

    def test_basic_error_without_structure(self):
        """Basic error message works without structured info"""
        error = PermdepsError("Simple error message")
        assert str(error) == "Simple error message"
        assert error.context == {}

    def test_error_with_full_structure(self):
        """Error with all structured fields"""
        error = ConfigurationError(
            "fallback message",
            what="Dependency map not found",
            why="No file exists at deps.json",
            how_to_fix="Pass --map PATH",
            context={"path": "deps.json"},
        )

        error_str = str(error)
        assert "❌ Dependency map not found" in error_str
        assert "💡 Reason: No file exists at deps.json" in error_str
        assert "✅ Solution: Pass --map PATH" in error_str
        assert "📝 Context:" in error_str
        assert "path: deps.json" in error_str
        assert isinstance(error, BusinessError)

    def test_error_with_partial_structure(self):
        """Error with only what and how_to_fix"""
        error = ConfigurationError("fallback", what="No map", how_to_fix="Set PERMDEPS_DEPENDENCY_MAP")

        error_str = str(error)
        assert "❌ No map" in error_str
        assert "💡 Reason:" not in error_str
        assert "📝 Context:" not in error_str


class TestResolverErrors:
    """Errors raised by DependencyResolver"""

    def test_invalid_base_permissions_error(self):
        error = InvalidBasePermissionsError(("A", "B"), ["C"])

        assert isinstance(error, ValidationError)
        assert isinstance(error, PermdepsError)
        assert isinstance(error, RuntimeError)
        assert error.existing == ["A", "B"]
        assert error.missing == ["C"]
        assert error.context == {"existing": ["A", "B"], "missing": ["C"]}
        assert "Invalid Base Permissions" in str(error)
        assert "missing direct dependencies: C" in str(error)

    def test_invalid_base_permissions_without_held_set(self):
        error = InvalidBasePermissionsError(None)

        assert error.existing is None
        assert error.missing == []
        assert "No held permission set was supplied" in str(error)

    def test_invalid_base_permissions_unresolvable(self):
        error = InvalidBasePermissionsError(["A"], [])
        assert "could not be resolved" in str(error)

    def test_cyclic_dependency_error(self):
        error = CyclicDependencyError(["X", "Y", "X"])

        assert isinstance(error, ValidationError)
        assert error.cycle == ["X", "Y", "X"]
        assert error.context == {"cycle": ["X", "Y", "X"]}
        assert "Circular dependency detected" in str(error)
        assert "X -> Y -> X" in str(error)


def test_structured_message_layout():
    error = PermdepsError(
        "fallback",
        what="Broken",
        why="Because",
        how_to_fix="Fix it",
        context={"a": 1, "b": [2]},
    )
    assert str(error) == (
        "❌ Broken\n\n"
        "💡 Reason: Because\n\n"
        "✅ Solution: Fix it\n\n"
        "📝 Context:\n  - a: 1\n  - b: [2]"
    )
