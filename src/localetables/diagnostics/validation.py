"""Validation result types for table and catalog lint.

Errors make a resource unusable for its callers (a catalog message whose
placeholders differ from the default catalog will format wrongly).
Warnings are informational (an extra message nobody looks up).

Python 3.13+.
"""

from dataclasses import dataclass

from .codes import DiagnosticCode

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
]


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Structured validation error.

    Attributes:
        code: Diagnostic code
        message: Human-readable error message
        key: Table key or message id the error refers to
    """

    code: DiagnosticCode
    message: str
    key: str | None = None

    def format(self) -> str:
        """Format error as a single human-readable line."""
        location = f" at {self.key!r}" if self.key is not None else ""
        return f"[{self.code.name}]{location}: {self.message}"


@dataclass(frozen=True, slots=True)
class ValidationWarning:
    """Structured validation warning.

    Attributes:
        code: Diagnostic code
        message: Human-readable warning message
        context: Additional context (e.g., the offending key)
    """

    code: DiagnosticCode
    message: str
    context: str | None = None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Immutable validation outcome for one table or catalog.

    Attributes:
        resource: "domain/identifier" of the validated resource
        errors: Findings that make the resource unusable
        warnings: Informational findings

    Example:
        >>> result = ValidationResult.valid("FormatData/ja")
        >>> result.is_valid
        True
    """

    resource: str
    errors: tuple[ValidationError, ...]
    warnings: tuple[ValidationWarning, ...]

    @property
    def is_valid(self) -> bool:
        """Check if validation passed. Warnings do not affect validity."""
        return len(self.errors) == 0

    @property
    def error_count(self) -> int:
        """Number of errors."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Number of warnings."""
        return len(self.warnings)

    @staticmethod
    def valid(resource: str) -> "ValidationResult":
        """Create a result with no findings."""
        return ValidationResult(resource=resource, errors=(), warnings=())

    def format(self, *, include_warnings: bool = True) -> str:
        """Format validation result as human-readable string.

        Args:
            include_warnings: If True (default), include warnings in output.

        Returns:
            Multi-line report, or a one-line pass message.
        """
        lines: list[str] = []

        if self.errors:
            lines.append(f"{self.resource}: errors ({len(self.errors)}):")
            lines.extend(f"  {error.format()}" for error in self.errors)

        if include_warnings and self.warnings:
            lines.append(f"{self.resource}: warnings ({len(self.warnings)}):")
            for warning in self.warnings:
                context = f" ({warning.context})" if warning.context else ""
                lines.append(f"  [{warning.code.name}]: {warning.message}{context}")

        if not lines:
            return f"{self.resource}: validation passed"

        return "\n".join(lines)
