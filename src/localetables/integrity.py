"""Data integrity exceptions.

These exceptions indicate PROGRAMMING ERRORS against the read-only
contract of loaded tables, not lookup failures. A missing key or locale is
reported through ResourceTable.get() and LocaleNotFoundError instead.

Hierarchy:
    DataIntegrityError (base - contract violations)
    └─ ImmutabilityViolationError (mutation attempt on a frozen object)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

__all__ = [
    "DataIntegrityError",
    "ImmutabilityViolationError",
    "IntegrityContext",
]


@dataclass(frozen=True, slots=True)
class IntegrityContext:
    """Context for integrity error diagnosis.

    Attributes:
        component: System component where error occurred (table, catalog, registry)
        operation: Operation being performed (setattr, delattr)
        key: Attribute or table key involved (optional)
        resource: "domain/identifier" of the table involved (optional)
    """

    component: str
    operation: str
    key: str | None = None
    resource: str | None = None


class DataIntegrityError(Exception):
    """Base exception for all data integrity failures.

    Immutable after construction so the evidence of the violation cannot be
    altered while the exception propagates.

    Attributes:
        context: Structured diagnostic context
    """

    __slots__ = ("_context", "_frozen")

    # Type annotations for __slots__ attributes (mypy requirement)
    _context: IntegrityContext | None
    _frozen: bool

    def __init__(
        self,
        message: str,
        context: IntegrityContext | None = None,
    ) -> None:
        """Initialize DataIntegrityError.

        Args:
            message: Human-readable error description
            context: Structured diagnostic context (optional)
        """
        super().__init__(message)
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_frozen", True)

    # Python's exception handling sets these attributes when propagating exceptions.
    _PYTHON_EXCEPTION_ATTRS: frozenset[str] = frozenset(
        ("__traceback__", "__context__", "__cause__", "__suppress_context__", "__notes__")
    )

    def __setattr__(self, name: str, value: object) -> None:
        """Reject attribute mutations after initialization.

        Raises:
            ImmutabilityViolationError: If attempting to modify after construction
        """
        if name in self._PYTHON_EXCEPTION_ATTRS:
            object.__setattr__(self, name, value)
            return
        if getattr(self, "_frozen", False):
            msg = f"Cannot modify integrity error attribute: {name}"
            raise ImmutabilityViolationError(msg)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        """Reject all attribute deletions.

        Raises:
            ImmutabilityViolationError: Always
        """
        msg = f"Cannot delete integrity error attribute: {name}"
        raise ImmutabilityViolationError(msg)

    @property
    def context(self) -> IntegrityContext | None:
        """Structured diagnostic context."""
        return self._context

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.args[0]!r}, context={self._context!r})"


@final
class ImmutabilityViolationError(DataIntegrityError):
    """Attempt to mutate an immutable object.

    Raised when code assigns or deletes an attribute of a loaded
    ResourceTable or MessageCatalog, or of a DataIntegrityError.
    """
