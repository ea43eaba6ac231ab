"""Resource loaders.

Provides the protocol for resource loaders, the loader over the packaged
data and a filesystem loader with path-traversal security.

Components:
    ResourceLoader - Protocol for reading raw resource payloads (structural typing)
    PackageResourceLoader - Reads ``localetables/data`` through importlib.resources
    PathResourceLoader - Reads ``<root>/<domain>/<identifier><suffix>`` from disk

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from localetables.constants import MAX_RESOURCE_SIZE
from localetables.diagnostics import Diagnostic, DiagnosticCode, ResourceFormatError

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

    from localetables.enums import ResourceDomain
    from localetables.tables.types import LocaleCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "ResourceLoader",
    # Concrete loaders
    "PackageResourceLoader",
    "PathResourceLoader",
    # Identifier safety
    "validate_identifier",
]

_DATA_PACKAGE = "localetables"
_DATA_DIRECTORY = "data"


class ResourceLoader(Protocol):
    """Protocol for reading resource payloads by domain and identifier.

    This is a Protocol (structural typing) rather than ABC so tests and
    applications can supply in-memory loaders without subclassing.

    Example:
        >>> class MemoryLoader:
        ...     def __init__(self, files: dict[tuple[str, str], bytes]) -> None:
        ...         self._files = files
        ...     def read(self, domain, identifier):
        ...         try:
        ...             return self._files[(domain, identifier)]
        ...         except KeyError:
        ...             raise FileNotFoundError(identifier) from None
        ...     def identifiers(self, domain):
        ...         return tuple(sorted(i for d, i in self._files if d == domain))
        ...     def describe_path(self, domain, identifier):
        ...         return f"memory:{domain}/{identifier}"
        ...
        >>> registry = TableRegistry(MemoryLoader({...}))
    """

    def read(self, domain: ResourceDomain, identifier: LocaleCode) -> bytes:
        """Read the raw payload of one resource.

        Args:
            domain: Resource domain
            identifier: Canonical locale identifier

        Returns:
            Resource bytes

        Raises:
            FileNotFoundError: If no resource exists for the identifier
            ValueError: If the identifier is unsafe as a file name
            OSError: If the resource cannot be read
        """

    def identifiers(self, domain: ResourceDomain) -> tuple[LocaleCode, ...]:
        """Return the identifiers available in a domain, sorted."""

    def describe_path(self, domain: ResourceDomain, identifier: LocaleCode) -> str:
        """Return human-readable path for diagnostics.

        Default implementation returns a generic "{domain}/{identifier}" string.
        Override in concrete loaders that know the physical path.
        """
        return f"{domain}/{identifier}"


def validate_identifier(identifier: LocaleCode) -> None:
    """Validate an identifier for use as a file name.

    Args:
        identifier: Identifier to validate

    Raises:
        ValueError: If identifier is empty or contains unsafe path components
    """
    if not identifier:
        msg = "Locale identifier cannot be empty"
        raise ValueError(msg)
    if ".." in identifier:
        msg = f"Path traversal sequences not allowed in identifier: '{identifier}'"
        raise ValueError(msg)
    if "/" in identifier or "\\" in identifier:
        msg = f"Path separators not allowed in identifier: '{identifier}'"
        raise ValueError(msg)
    if identifier.strip() != identifier:
        msg = f"Identifier contains leading/trailing whitespace: {identifier!r}"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PackageResourceLoader:
    """Loader over the resources shipped inside the localetables package.

    Works for regular installs, editable installs and zip imports, since
    every access goes through importlib.resources.
    """

    def _data_root(self) -> Traversable:
        return resources.files(_DATA_PACKAGE).joinpath(_DATA_DIRECTORY)

    def _resource(self, domain: ResourceDomain, identifier: LocaleCode) -> Traversable:
        validate_identifier(identifier)
        return self._data_root().joinpath(str(domain), f"{identifier}{domain.suffix}")

    def read(self, domain: ResourceDomain, identifier: LocaleCode) -> bytes:
        """Read a packaged resource.

        Raises:
            FileNotFoundError: If the package ships no such resource
            ValueError: If the identifier is unsafe as a file name
        """
        resource = self._resource(domain, identifier)
        if not resource.is_file():
            msg = f"No packaged resource: {self.describe_path(domain, identifier)}"
            raise FileNotFoundError(msg)
        return resource.read_bytes()

    def identifiers(self, domain: ResourceDomain) -> tuple[LocaleCode, ...]:
        """Identifiers of every packaged resource in a domain, sorted."""
        directory = self._data_root().joinpath(str(domain))
        if not directory.is_dir():
            return ()
        suffix = domain.suffix
        return tuple(
            sorted(
                entry.name.removesuffix(suffix)
                for entry in directory.iterdir()
                if entry.is_file() and entry.name.endswith(suffix)
            )
        )

    def describe_path(self, domain: ResourceDomain, identifier: LocaleCode) -> str:
        """Return the package-relative resource path."""
        return f"{_DATA_PACKAGE}/{_DATA_DIRECTORY}/{domain}/{identifier}{domain.suffix}"


@dataclass(frozen=True, slots=True)
class PathResourceLoader:
    """File system loader for a resource tree laid out like the package data.

    Security:
        Identifiers containing path separators or ".." are rejected.
        All resolved paths are validated against the fixed root directory.
        Files larger than ``max_size`` are rejected before being read.

    Example:
        >>> loader = PathResourceLoader("build/locale-data")
        >>> payload = loader.read(ResourceDomain.FORMAT_DATA, "ja")
        # Reads: build/locale-data/FormatData/ja.json

    Attributes:
        root: Directory holding one subdirectory per domain
        max_size: Maximum accepted file size in bytes
    """

    root: str | Path
    max_size: int = MAX_RESOURCE_SIZE
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory.

        Raises:
            ValueError: If max_size is not positive
        """
        if self.max_size <= 0:
            msg = f"max_size must be positive, got {self.max_size}"
            raise ValueError(msg)
        object.__setattr__(self, "_resolved_root", Path(self.root).resolve())

    @staticmethod
    def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
        """Check if full_path is safely within base_dir (both resolved first)."""
        try:
            full_path.resolve().relative_to(base_dir.resolve())
            return True
        except ValueError:
            return False

    def _path(self, domain: ResourceDomain, identifier: LocaleCode) -> Path:
        validate_identifier(identifier)
        full_path = (self._resolved_root / str(domain) / f"{identifier}{domain.suffix}").resolve()
        if not self._is_safe_path(self._resolved_root, full_path):
            msg = (
                f"Path traversal detected: resolved path escapes root directory. "
                f"domain='{domain}', identifier='{identifier}'"
            )
            raise ValueError(msg)
        return full_path

    def describe_path(self, domain: ResourceDomain, identifier: LocaleCode) -> str:
        """Return the on-disk path of a resource."""
        return str(Path(self.root) / str(domain) / f"{identifier}{domain.suffix}")

    def read(self, domain: ResourceDomain, identifier: LocaleCode) -> bytes:
        """Read a resource file from disk.

        Raises:
            ValueError: If the identifier contains path traversal sequences
            FileNotFoundError: If the file doesn't exist
            ResourceFormatError: If the file exceeds max_size
            OSError: If the file cannot be read
        """
        path = self._path(domain, identifier)
        size = path.stat().st_size
        if size > self.max_size:
            diagnostic = Diagnostic(
                code=DiagnosticCode.RESOURCE_TOO_LARGE,
                message=f"Resource is {size} bytes; limit is {self.max_size}",
                resource=self.describe_path(domain, identifier),
            )
            raise ResourceFormatError(diagnostic, source_path=str(path))
        return path.read_bytes()

    def identifiers(self, domain: ResourceDomain) -> tuple[LocaleCode, ...]:
        """Identifiers of every resource file in a domain directory, sorted."""
        directory = self._resolved_root / str(domain)
        if not directory.is_dir():
            return ()
        paths = directory.glob(f"*{domain.suffix}")
        return tuple(sorted(path.stem for path in paths if path.is_file()))
