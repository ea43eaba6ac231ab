"""localetables - Immutable locale resource tables.

Carries CLDR-derived locale display data (month and day names, eras,
date/time patterns, number symbols, calendar, language, territory and
currency names) plus static message catalogs for a management agent, and
serves them through one immutable table type and one lookup API.

Public API:
    load_table - Table for a locale, constructed once per process
    load_catalog - Message catalog for a locale ("root" by default)
    get_registry - The process-wide TableRegistry
    TableRegistry - Lazily constructed table cache over a ResourceLoader
    ResourceTable - Read-only mapping from dotted key to str or tuple[str, ...]
    MessageCatalog - ResourceTable of message templates
    ResourceDomain - FormatData, LocaleNames, CurrencyNames, TimeZoneNames, agent

Exceptions:
    LocaleTableError - Base exception class
    LocaleNotFoundError - No resource for the requested identifier
    ResourceFormatError - Malformed resource payload
    ImmutabilityViolationError - Mutation attempt on a loaded table

Submodules:
    localetables.serialization - JSON table and PO catalog codecs
    localetables.validation - Table and catalog lint
    localetables.locale_utils - Identifier canonicalization, Babel helpers
    localetables.loading - Loaders, registry and load summaries
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import LocaleNotFoundError, LocaleTableError, ResourceFormatError
from .enums import ResourceDomain
from .integrity import ImmutabilityViolationError
from .loading import TableRegistry, get_registry, load_catalog, load_table
from .tables import MessageCatalog, ResourceTable, TableValue

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("localetables")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ImmutabilityViolationError",
    "LocaleNotFoundError",
    "LocaleTableError",
    "MessageCatalog",
    "ResourceDomain",
    "ResourceFormatError",
    "ResourceTable",
    "TableRegistry",
    "TableValue",
    "__version__",
    "get_registry",
    "load_catalog",
    "load_table",
]
