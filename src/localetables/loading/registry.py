"""Process-wide registry of constructed tables.

The registry maps (domain, canonical identifier) to the one table built for
it. Construction is lazy: nothing is read until a table is first requested,
after which every caller receives the identical object until clear().

Thread Safety:
    Lookups of already constructed tables take no lock. A miss takes the
    registry lock, re-checks the cache and constructs the table while
    holding it, so a table is constructed at most once per key and every
    caller observes the same object. Tables are published only after
    TableBuilder.build() returns, so no thread sees a partial table.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from localetables.constants import ROOT_IDENTIFIER
from localetables.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    LocaleNotFoundError,
    ResourceFormatError,
)
from localetables.enums import LoadStatus, ResourceDomain
from localetables.loading.loader import PackageResourceLoader
from localetables.loading.summary import LoadSummary, ResourceLoadResult
from localetables.locale_utils import canonicalize_locale
from localetables.serialization import loads, read_catalog
from localetables.tables import MessageCatalog

if TYPE_CHECKING:
    from collections.abc import Iterable

    from localetables.loading.loader import ResourceLoader
    from localetables.tables import LocaleCode, ResourceTable

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Registry
    "TableRegistry",
    # Process-wide convenience API
    "get_registry",
    "load_table",
    "load_catalog",
]

logger = logging.getLogger(__name__)

type _CacheKey = tuple[ResourceDomain, LocaleCode]


class TableRegistry:
    """Lazily constructed, cached tables keyed by domain and identifier.

    Args:
        loader: Source of resource payloads (default: the packaged data)

    Example:
        >>> registry = TableRegistry()
        >>> ja = registry.load("ja")
        >>> registry.load("ja") is ja
        True
        >>> registry.load_catalog().get("agent.err.error")
        'Error'
    """

    __slots__ = ("_loader", "_lock", "_tables")

    def __init__(self, loader: ResourceLoader | None = None) -> None:
        self._loader: ResourceLoader = loader if loader is not None else PackageResourceLoader()
        self._lock: threading.Lock = threading.Lock()
        self._tables: dict[_CacheKey, ResourceTable] = {}

    @property
    def loader(self) -> ResourceLoader:
        """Resource loader this registry reads from."""
        return self._loader

    def __len__(self) -> int:
        """Number of constructed tables."""
        return len(self._tables)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"TableRegistry(loader={self._loader!r}, loaded={len(self._tables)})"

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def load(
        self,
        identifier: str,
        domain: ResourceDomain | str = ResourceDomain.FORMAT_DATA,
    ) -> ResourceTable:
        """Return the table for a locale, constructing it on first use.

        Args:
            identifier: Locale identifier, BCP-47 or POSIX (e.g., "zh-Hant", "pt_PT")
            domain: Resource domain (default: FormatData)

        Returns:
            The table; the same object on every later call until clear()

        Raises:
            LocaleNotFoundError: If no resource exists for the identifier or
                the identifier is malformed
            ResourceFormatError: If the resource exists but is malformed
            ValueError: If ``domain`` is not a known domain
        """
        resource_domain = ResourceDomain(domain)
        canonical = self._canonicalize(identifier, resource_domain)
        cache_key = (resource_domain, canonical)

        table = self._tables.get(cache_key)
        if table is not None:
            logger.debug("Cache hit: %s/%s", resource_domain, canonical)
            return table

        with self._lock:
            # Double-check after acquiring lock
            table = self._tables.get(cache_key)
            if table is None:
                table = self._construct(resource_domain, canonical, identifier)
                self._tables[cache_key] = table
        return table

    def load_catalog(
        self,
        identifier: str | None = None,
        domain: ResourceDomain | str = ResourceDomain.AGENT,
    ) -> MessageCatalog:
        """Return a message catalog, constructing it on first use.

        Args:
            identifier: Locale identifier; None or "" selects the default
                ("root") catalog
            domain: Catalog domain (default: agent)

        Returns:
            The catalog; the same object on every later call until clear()

        Raises:
            LocaleNotFoundError: If no catalog exists for the identifier
            ResourceFormatError: If the catalog exists but is malformed
            ValueError: If ``domain`` does not hold message catalogs
        """
        resource_domain = ResourceDomain(domain)
        if not resource_domain.is_message_catalog:
            msg = f"Domain {resource_domain} does not hold message catalogs"
            raise ValueError(msg)
        table = self.load(identifier or ROOT_IDENTIFIER, resource_domain)
        if not isinstance(table, MessageCatalog):  # pragma: no cover
            msg = f"{table.resource} is not a message catalog"
            raise TypeError(msg)
        return table

    def available(
        self, domain: ResourceDomain | str = ResourceDomain.FORMAT_DATA
    ) -> tuple[str, ...]:
        """Identifiers with a resource in ``domain``, sorted."""
        return self._loader.identifiers(ResourceDomain(domain))

    def is_loaded(
        self,
        identifier: str,
        domain: ResourceDomain | str = ResourceDomain.FORMAT_DATA,
    ) -> bool:
        """Check whether a table has already been constructed (no I/O)."""
        resource_domain = ResourceDomain(domain)
        try:
            canonical = canonicalize_locale(identifier)
        except ValueError:
            return False
        return (resource_domain, canonical) in self._tables

    def preload(
        self,
        domain: ResourceDomain | str = ResourceDomain.FORMAT_DATA,
        identifiers: Iterable[str] | None = None,
    ) -> LoadSummary:
        """Construct several tables, recording each outcome instead of raising.

        Args:
            domain: Resource domain
            identifiers: Identifiers to load (default: every available one)

        Returns:
            LoadSummary with one result per identifier
        """
        resource_domain = ResourceDomain(domain)
        requested = self.available(resource_domain) if identifiers is None else tuple(identifiers)
        results: list[ResourceLoadResult] = []
        for identifier in requested:
            results.append(self._try_load(identifier, resource_domain))
        summary = LoadSummary(results=tuple(results))
        logger.info("Preloaded %s: %r", resource_domain, summary)
        return summary

    def clear(self) -> None:
        """Drop every constructed table. The only eviction path."""
        with self._lock:
            self._tables.clear()
        logger.debug("Registry cleared")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _canonicalize(self, identifier: str, domain: ResourceDomain) -> LocaleCode:
        try:
            return canonicalize_locale(identifier)
        except ValueError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.INVALID_IDENTIFIER,
                message=f"Invalid locale identifier {identifier!r}: {e}",
                resource=str(domain),
            )
            raise LocaleNotFoundError(
                diagnostic, identifier=str(identifier), domain=str(domain)
            ) from e

    def _construct(
        self, domain: ResourceDomain, canonical: LocaleCode, requested: str
    ) -> ResourceTable:
        """Read and parse one resource. Caller holds the lock."""
        source_path = self._loader.describe_path(domain, canonical)
        try:
            payload = self._loader.read(domain, canonical)
        except FileNotFoundError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.LOCALE_NOT_FOUND,
                message=f"No {domain} resource for locale {requested!r}",
                resource=source_path,
                hint=f"Available: {', '.join(self._loader.identifiers(domain)) or 'none'}",
            )
            raise LocaleNotFoundError(diagnostic, identifier=requested, domain=str(domain)) from e
        except ResourceFormatError as e:
            logger.error("Failed to read resource %s: %s", source_path, e)
            raise
        except ValueError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.INVALID_IDENTIFIER,
                message=f"Invalid locale identifier {requested!r}: {e}",
                resource=str(domain),
            )
            raise LocaleNotFoundError(diagnostic, identifier=requested, domain=str(domain)) from e

        logger.debug("Read %d bytes from %s", len(payload), source_path)
        try:
            if domain.is_message_catalog:
                return read_catalog(payload, canonical, domain=domain, source_path=source_path)
            return loads(payload, identifier=canonical, domain=domain, source_path=source_path)
        except ResourceFormatError as e:
            logger.error("Failed to parse resource %s: %s", source_path, e)
            raise

    def _try_load(self, identifier: str, domain: ResourceDomain) -> ResourceLoadResult:
        try:
            table = self.load(identifier, domain)
        except LocaleNotFoundError as e:
            return ResourceLoadResult(
                identifier=identifier, domain=domain, status=LoadStatus.NOT_FOUND, error=e
            )
        except ResourceFormatError as e:
            return ResourceLoadResult(
                identifier=identifier,
                domain=domain,
                status=LoadStatus.ERROR,
                error=e,
                source_path=e.source_path,
            )
        except OSError as e:
            logger.error("Failed to read resource %s/%s: %s", domain, identifier, e)
            return ResourceLoadResult(
                identifier=identifier,
                domain=domain,
                status=LoadStatus.ERROR,
                error=e,
                source_path=str(e.filename) if e.filename else None,
            )
        return ResourceLoadResult(
            identifier=identifier,
            domain=domain,
            status=LoadStatus.SUCCESS,
            source_path=self._loader.describe_path(domain, table.identifier),
            key_count=len(table),
        )


# Module-level registry over the packaged data
_registry = TableRegistry()


def get_registry() -> TableRegistry:
    """Return the process-wide registry over the packaged resources."""
    return _registry


def load_table(
    identifier: str,
    domain: ResourceDomain | str = ResourceDomain.FORMAT_DATA,
) -> ResourceTable:
    """Load a table from the process-wide registry.

    Example:
        >>> load_table("ru").get("field.year")
        'год'
    """
    return _registry.load(identifier, domain)


def load_catalog(
    identifier: str | None = None,
    domain: ResourceDomain | str = ResourceDomain.AGENT,
) -> MessageCatalog:
    """Load a message catalog from the process-wide registry.

    Example:
        >>> load_catalog().get("jmxremote.ConnectorBootstrap.ready")
        'JMX Connector ready at: {0}'
    """
    return _registry.load_catalog(identifier, domain)
