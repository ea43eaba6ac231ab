"""Diagnostic system for localetables errors.

Provides structured error diagnostics with codes, hints and resource context.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import LocaleNotFoundError, LocaleTableError, ResourceFormatError
from .validation import ValidationError, ValidationResult, ValidationWarning

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "LocaleNotFoundError",
    "LocaleTableError",
    "ResourceFormatError",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
]
