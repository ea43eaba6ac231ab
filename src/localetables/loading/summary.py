"""Load result types.

Components:
    ResourceLoadResult - Immutable result of a single resource load attempt
    LoadSummary - Immutable aggregate of the results of TableRegistry.preload()

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from localetables.enums import LoadStatus, ResourceDomain
from localetables.tables.types import LocaleCode

__all__ = ["LoadSummary", "ResourceLoadResult"]


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of loading a single resource.

    Attributes:
        identifier: Locale identifier as requested
        domain: Resource domain
        status: Load status (success, not_found, error)
        error: Exception if status is not SUCCESS, None otherwise
        source_path: Human-readable path to resource (if available)
        key_count: Number of keys in the constructed table (0 unless SUCCESS)
    """

    identifier: LocaleCode
    domain: ResourceDomain
    status: LoadStatus
    error: Exception | None = None
    source_path: str | None = None
    key_count: int = 0

    @property
    def is_success(self) -> bool:
        """Check if resource loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if resource was not found."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if resource load failed with an error."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of resource load results.

    All statistics are computed properties derived from the ``results`` tuple.

    Attributes:
        results: All individual load results (immutable tuple)

    Example:
        >>> summary = get_registry().preload(ResourceDomain.FORMAT_DATA)
        >>> if summary.has_errors:
        ...     for result in summary.get_errors():
        ...         print(f"Failed: {result.source_path}: {result.error}")
    """

    results: tuple[ResourceLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of resources not found."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of load errors."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def total_keys(self) -> int:
        """Keys across all successfully loaded tables."""
        return sum(r.key_count for r in self.results)

    def get_errors(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results where resource was not found."""
        return tuple(r for r in self.results if r.is_not_found)

    def get_successful(self) -> tuple[ResourceLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    def get_by_identifier(self, identifier: LocaleCode) -> tuple[ResourceLoadResult, ...]:
        """Get all results for a specific identifier."""
        return tuple(r for r in self.results if r.identifier == identifier)

    @property
    def has_errors(self) -> bool:
        """Check if any resources failed to load with errors."""
        return self.errors > 0

    @property
    def all_successful(self) -> bool:
        """Check if all attempted resources loaded successfully.

        Returns:
            True if errors == 0 and not_found == 0
        """
        return self.errors == 0 and self.not_found == 0
