"""Incremental construction of resource tables.

TableBuilder is the only producer of ResourceTable instances: the JSON and
PO codecs feed it entries in resource order, then call build() once. Lists
are frozen to tuples exactly once, and every reference to a shared pool
value receives that single frozen object.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, NoReturn

from localetables.diagnostics import Diagnostic, DiagnosticCode, ResourceFormatError
from localetables.tables.catalog import MessageCatalog
from localetables.tables.table import ResourceTable

if TYPE_CHECKING:
    from localetables.enums import ResourceDomain
    from localetables.tables.types import LocaleCode, TableKey, TableValue

__all__ = ["TableBuilder"]

logger = logging.getLogger(__name__)


class TableBuilder:
    """Collects entries and shared values, then produces a frozen table.

    Not thread-safe; a builder is owned by the code constructing one table.
    The registry builds under its lock and publishes only the finished table.

    Example:
        >>> builder = TableBuilder("ja", ResourceDomain.FORMAT_DATA)
        >>> builder.share("MonthNames", ["1月", "2月", ...])
        >>> builder.add_ref("MonthNames", "MonthNames")
        >>> builder.add_ref("roc.MonthAbbreviations", "MonthNames")
        >>> builder.add("field.year", "年")
        >>> table = builder.build()
    """

    __slots__ = ("_domain", "_entries", "_identifier", "_refs", "_shared")

    def __init__(self, identifier: LocaleCode, domain: ResourceDomain) -> None:
        self._identifier = identifier
        self._domain = domain
        self._entries: dict[TableKey, TableValue] = {}
        self._shared: dict[str, TableValue] = {}
        self._refs: dict[TableKey, str] = {}

    @property
    def resource(self) -> str:
        """Resource description used in logs and diagnostics."""
        return f"{self._domain}/{self._identifier}"

    def __len__(self) -> int:
        return len(self._entries)

    def share(self, name: str, value: str | Sequence[str]) -> TableValue:
        """Declare a named shared value.

        Args:
            name: Pool name referenced by add_ref()
            value: String or sequence of strings

        Returns:
            The frozen pooled object

        Raises:
            ResourceFormatError: If the name is empty or already declared,
                or the value is not a string or sequence of strings
        """
        if not isinstance(name, str) or not name:
            self._fail(
                DiagnosticCode.INVALID_KEY,
                f"Shared value names must be non-empty strings, got {name!r}",
            )
        if name in self._shared:
            self._fail(
                DiagnosticCode.INVALID_KEY,
                f"Shared value {name!r} declared twice",
                key=name,
            )
        frozen = self._freeze(name, value)
        self._shared[name] = frozen
        return frozen

    def add(self, key: TableKey, value: str | Sequence[str]) -> None:
        """Add an entry with an inline (unshared) value.

        A key defined earlier is replaced; the last definition wins.

        Raises:
            ResourceFormatError: If the key is empty or the value is invalid
        """
        self._check_key(key)
        frozen = self._freeze(key, value)
        self._warn_duplicate(key)
        self._entries[key] = frozen
        self._refs.pop(key, None)

    def add_ref(self, key: TableKey, name: str) -> None:
        """Add an entry backed by a previously declared shared value.

        Raises:
            ResourceFormatError: If the key is empty or ``name`` is undeclared
        """
        self._check_key(key)
        if name not in self._shared:
            self._fail(
                DiagnosticCode.UNKNOWN_SHARED_REFERENCE,
                f"Entry references undefined shared value {name!r}",
                key=key,
                hint='Declare the value in the "shared" section',
            )
        self._warn_duplicate(key)
        self._entries[key] = self._shared[name]
        self._refs[key] = name

    def build(self) -> ResourceTable:
        """Produce the frozen table.

        Returns:
            MessageCatalog for catalog domains, ResourceTable otherwise
        """
        table_type = MessageCatalog if self._domain.is_message_catalog else ResourceTable
        table = table_type(
            self._identifier,
            self._domain,
            self._entries,
            shared=self._shared,
            refs=self._refs,
        )
        logger.info(
            "Constructed %s with %d keys (%d shared values)",
            table.resource,
            len(table),
            len(self._shared),
        )
        return table

    def _check_key(self, key: object) -> None:
        if not isinstance(key, str) or not key:
            self._fail(
                DiagnosticCode.INVALID_KEY,
                f"Table keys must be non-empty strings, got {key!r}",
            )

    def _warn_duplicate(self, key: TableKey) -> None:
        if key in self._entries:
            logger.warning("Duplicate key %r in %s; last definition wins", key, self.resource)

    def _freeze(self, key: str, value: object) -> TableValue:
        """Convert a value to its immutable stored form."""
        if isinstance(value, str):
            return value
        # str is a Sequence too; handled above
        if isinstance(value, Sequence):
            items = tuple(value)
            for position, item in enumerate(items):
                if not isinstance(item, str):
                    self._fail(
                        DiagnosticCode.INVALID_VALUE,
                        f"Item {position} is {type(item).__name__}, expected str",
                        key=key,
                    )
            return items
        self._fail(
            DiagnosticCode.INVALID_VALUE,
            f"Values must be a string or a list of strings, got {type(value).__name__}",
            key=key,
        )

    def _fail(
        self,
        code: DiagnosticCode,
        message: str,
        *,
        key: str | None = None,
        hint: str | None = None,
    ) -> NoReturn:
        diagnostic = Diagnostic(
            code=code, message=message, resource=self.resource, key=key, hint=hint
        )
        raise ResourceFormatError(diagnostic)
