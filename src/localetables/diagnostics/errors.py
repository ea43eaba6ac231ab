"""Exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object.
Absent keys are not exceptions: ResourceTable.get() returns None.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class LocaleTableError(Exception):
    """Base exception for all localetables errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocaleTableError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class LocaleNotFoundError(LocaleTableError, LookupError):
    """No resource is registered for the requested identifier.

    Raised by TableRegistry.load() and load_catalog(). The data is static,
    so retrying with the same identifier always fails the same way; a
    caller-side fallback chain decides what to substitute.

    Attributes:
        identifier: The identifier as requested (before canonicalization)
        domain: Resource domain that was searched
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        identifier: str = "",
        domain: str = "",
    ) -> None:
        """Initialize LocaleNotFoundError.

        Args:
            message: Error message string OR Diagnostic object
            identifier: Requested locale or language identifier
            domain: Resource domain searched
        """
        super().__init__(message)
        self.identifier = identifier
        self.domain = domain


class ResourceFormatError(LocaleTableError, ValueError):
    """A resource payload is malformed.

    Examples:
    - Invalid JSON or PO syntax
    - Unsupported format version
    - Entry referencing an undefined shared value
    - Sequence value containing non-string items

    Attributes:
        source_path: Human-readable path of the offending resource (optional)
    """

    def __init__(self, message: str | Diagnostic, *, source_path: str | None = None) -> None:
        """Initialize ResourceFormatError.

        Args:
            message: Error message string OR Diagnostic object
            source_path: Human-readable path of the offending resource
        """
        super().__init__(message)
        self.source_path = source_path
