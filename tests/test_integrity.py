"""Tests for integrity exceptions and their immutability."""

from __future__ import annotations

import pytest

from localetables import ImmutabilityViolationError
from localetables.integrity import DataIntegrityError, IntegrityContext


class TestIntegrityContext:
    def test_defaults(self) -> None:
        context = IntegrityContext(component="table", operation="setattr")
        assert context.key is None
        assert context.resource is None

    def test_frozen(self) -> None:
        context = IntegrityContext(component="table", operation="setattr")
        with pytest.raises(AttributeError):
            context.key = "x"  # type: ignore[misc]


class TestDataIntegrityError:
    """Errors cannot be altered while they propagate."""

    def test_context_exposed(self) -> None:
        context = IntegrityContext(
            component="table", operation="setattr", key="_entries", resource="FormatData/ja"
        )
        error = ImmutabilityViolationError("Cannot modify", context)
        assert error.context is context
        assert isinstance(error, DataIntegrityError)
        assert "FormatData/ja" in repr(error)

    def test_attribute_assignment_rejected(self) -> None:
        error = DataIntegrityError("boom")
        with pytest.raises(ImmutabilityViolationError):
            error.extra = 1  # type: ignore[attr-defined]

    def test_attribute_deletion_rejected(self) -> None:
        error = DataIntegrityError("boom")
        with pytest.raises(ImmutabilityViolationError):
            del error._context

    def test_can_be_raised_and_chained(self) -> None:
        with pytest.raises(ImmutabilityViolationError) as exc_info:
            try:
                raise KeyError("inner")
            except KeyError as e:
                raise ImmutabilityViolationError("outer") from e
        assert isinstance(exc_info.value.__cause__, KeyError)
        assert exc_info.value.__traceback__ is not None
