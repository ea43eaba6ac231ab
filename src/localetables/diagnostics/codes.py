"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by exceptions
and validation findings.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (unknown identifiers, domains)
        2000-2999: Resource format errors (malformed JSON/PO payloads)
        3000-3999: Validation findings (structural lint, catalog drift)
    """

    # Lookup errors (1000-1999)
    LOCALE_NOT_FOUND = 1001
    INVALID_IDENTIFIER = 1002

    # Resource format errors (2000-2999)
    RESOURCE_TOO_LARGE = 2001
    RESOURCE_MALFORMED = 2002
    UNSUPPORTED_FORMAT_VERSION = 2003
    UNKNOWN_SHARED_REFERENCE = 2004
    INVALID_VALUE = 2005
    INVALID_KEY = 2006
    DOMAIN_MISMATCH = 2007
    PLURAL_MESSAGE = 2008

    # Validation findings (3000-3999)
    UNEXPECTED_LENGTH = 3001
    MISSING_MESSAGE = 3002
    EXTRA_MESSAGE = 3003
    PLACEHOLDER_MISMATCH = 3004
    SHARED_VALUE_UNUSED = 3005


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        resource: Resource description (path or "domain/identifier")
        key: Table key or message id involved, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    resource: str | None = None
    key: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            error[UNKNOWN_SHARED_REFERENCE]: Entry references undefined shared value 'Eras'
              --> FormatData/ja.json
              = key: roc.Eras
              = help: Declare the value in the "shared" section

        Control characters in interpolated values are escaped with repr()
        so a hostile resource cannot inject terminal sequences into logs.

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.resource is not None:
            lines.append(f"  --> {_escape(self.resource)}")
        if self.key is not None:
            lines.append(f"  = key: {_escape(self.key)}")
        if self.hint is not None:
            lines.append(f"  = help: {_escape(self.hint)}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    """Escape control characters, keeping printable Unicode readable."""
    if text.isprintable():
        return text
    return repr(text)[1:-1]
