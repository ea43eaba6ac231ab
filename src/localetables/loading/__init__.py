"""Resource loading and the table registry.

Python 3.13+.
"""

from .loader import PackageResourceLoader, PathResourceLoader, ResourceLoader, validate_identifier
from .registry import TableRegistry, get_registry, load_catalog, load_table
from .summary import LoadSummary, ResourceLoadResult

__all__ = [
    "LoadSummary",
    "PackageResourceLoader",
    "PathResourceLoader",
    "ResourceLoadResult",
    "ResourceLoader",
    "TableRegistry",
    "get_registry",
    "load_catalog",
    "load_table",
    "validate_identifier",
]
