"""Enumerations for localetables type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so a domain can be used directly
as a directory name or a log argument.

Python 3.13+.
"""

from enum import StrEnum

from localetables.constants import CATALOG_SUFFIX, TABLE_SUFFIX


class ResourceDomain(StrEnum):
    """Kind of resource bundle.

    The value doubles as the directory name under the data root:
    ``data/FormatData/ja.json``, ``data/agent/zh_CN.po``.
    """

    FORMAT_DATA = "FormatData"
    """Extended date-time and number formatting data (month names, eras, patterns)."""

    LOCALE_NAMES = "LocaleNames"
    """Display names of languages and territories."""

    CURRENCY_NAMES = "CurrencyNames"
    """Currency symbols and display names."""

    TIME_ZONE_NAMES = "TimeZoneNames"
    """Time zone display names and exemplar cities, keyed by zone id."""

    AGENT = "agent"
    """Management agent error and log message templates."""

    @property
    def is_message_catalog(self) -> bool:
        """True for domains stored as gettext catalogs of template strings."""
        return self is ResourceDomain.AGENT

    @property
    def suffix(self) -> str:
        """File suffix of resources in this domain."""
        return CATALOG_SUFFIX if self.is_message_catalog else TABLE_SUFFIX


class LoadStatus(StrEnum):
    """Outcome of a single resource load attempt.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Resource read and table constructed."""

    NOT_FOUND = "not_found"
    """No resource registered for the identifier."""

    ERROR = "error"
    """Resource exists but could not be read or parsed."""


__all__ = [
    "LoadStatus",
    "ResourceDomain",
]
