"""Immutable keyed resource table.

ResourceTable is the single table type behind every domain: FormatData,
LocaleNames, CurrencyNames, TimeZoneNames, and (through the MessageCatalog
subclass) the agent message catalogs.

Architecture:
    - Flat dotted key namespace: "roc.narrow.AmPmMarkers" is one opaque key,
      never a path into nested maps
    - Values are str or tuple[str, ...], so no caller can mutate them
    - Shared pool: values declared once in the resource and referenced by
      several keys are the same object in every referencing entry
    - Attribute assignment raises ImmutabilityViolationError

Thread Safety:
    Tables are never mutated after construction. Concurrent readers need no
    locking.

Python 3.13+.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from localetables.diagnostics import Diagnostic, DiagnosticCode, ResourceFormatError
from localetables.integrity import ImmutabilityViolationError, IntegrityContext

if TYPE_CHECKING:
    from localetables.enums import ResourceDomain
    from localetables.tables.types import LocaleCode, TableKey, TableValue

__all__ = ["ResourceTable"]

logger = logging.getLogger(__name__)


class ResourceTable(Mapping[str, "TableValue"]):
    """Read-only mapping from flat dotted keys to locale display data.

    Normally constructed by TableBuilder and obtained through
    TableRegistry.load(); direct construction is for tests and tooling.

    Lookups:
        - ``get(key)`` returns None for an absent key (None is never stored)
        - ``table[key]`` raises KeyError for an absent key (Mapping protocol)

    Example:
        >>> table = load_table("ja")
        >>> table.get("field.year")
        '年'
        >>> table.get("this.key.does.not.exist") is None
        True
        >>> table["roc.MonthAbbreviations"] is table["buddhist.MonthAbbreviations"]
        True

    Attributes:
        identifier: Canonical locale identifier
        domain: Resource domain the table belongs to
    """

    __slots__ = (
        "_content_hash",
        "_domain",
        "_entries",
        "_frozen",
        "_identifier",
        "_refs",
        "_shared",
    )

    # Type annotations for __slots__ attributes (mypy requirement)
    _content_hash: str | None
    _domain: ResourceDomain
    _entries: dict[TableKey, TableValue]
    _frozen: bool
    _identifier: LocaleCode
    _refs: dict[TableKey, str]
    _shared: dict[str, TableValue]

    def __init__(
        self,
        identifier: LocaleCode,
        domain: ResourceDomain,
        entries: Mapping[TableKey, TableValue],
        *,
        shared: Mapping[str, TableValue] | None = None,
        refs: Mapping[TableKey, str] | None = None,
    ) -> None:
        """Initialize a frozen table.

        Args:
            identifier: Canonical locale identifier
            domain: Resource domain
            entries: Key/value pairs in resource order
            shared: Named shared pool the entries were built from
            refs: Key -> shared pool name, for every entry that references the pool

        Raises:
            ResourceFormatError: If a value is not str/tuple[str, ...], or a
                ref does not point at the identical pooled object
        """
        resource = f"{domain}/{identifier}"
        entry_dict = dict(entries)
        shared_dict = dict(shared) if shared is not None else {}
        ref_dict = dict(refs) if refs is not None else {}

        for key, value in entry_dict.items():
            _check_entry(key, value, resource)
        for name, value in shared_dict.items():
            _check_entry(name, value, resource)
        for key, name in ref_dict.items():
            if name not in shared_dict or entry_dict.get(key) is not shared_dict[name]:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.UNKNOWN_SHARED_REFERENCE,
                    message=f"Entry is not backed by shared value {name!r}",
                    resource=resource,
                    key=key,
                )
                raise ResourceFormatError(diagnostic)

        object.__setattr__(self, "_identifier", identifier)
        object.__setattr__(self, "_domain", domain)
        object.__setattr__(self, "_entries", entry_dict)
        object.__setattr__(self, "_shared", shared_dict)
        object.__setattr__(self, "_refs", ref_dict)
        object.__setattr__(self, "_content_hash", None)
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name: str, value: object) -> None:
        """Reject attribute mutations after initialization.

        Raises:
            ImmutabilityViolationError: If attempting to modify after construction
        """
        if getattr(self, "_frozen", False):
            msg = f"Cannot modify resource table attribute: {name}"
            context = IntegrityContext(
                component="table", operation="setattr", key=name, resource=self.resource
            )
            raise ImmutabilityViolationError(msg, context)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        """Reject all attribute deletions.

        Raises:
            ImmutabilityViolationError: Always
        """
        msg = f"Cannot delete resource table attribute: {name}"
        context = IntegrityContext(
            component="table", operation="delattr", key=name, resource=self.resource
        )
        raise ImmutabilityViolationError(msg, context)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def identifier(self) -> LocaleCode:
        """Canonical locale identifier (e.g., 'ja', 'zh_Hant', 'root')."""
        return self._identifier

    @property
    def domain(self) -> ResourceDomain:
        """Resource domain this table belongs to."""
        return self._domain

    @property
    def resource(self) -> str:
        """Resource description used in logs and diagnostics: 'domain/identifier'."""
        return f"{self._domain}/{self._identifier}"

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: TableKey) -> TableValue:
        return self._entries[key]

    def __iter__(self) -> Iterator[TableKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._entries

    def get(  # type: ignore[override]
        self, key: TableKey, default: TableValue | None = None
    ) -> TableValue | None:
        """Look up a key.

        Absence is a normal result: a caller-side fallback chain decides
        what to substitute. No key schema is enforced.

        Args:
            key: Fully composed dotted key (e.g., 'islamic.narrow.AmPmMarkers')
            default: Value returned when the key is absent (default: None)

        Returns:
            The stored string or string tuple, or ``default`` if absent.
            An empty or non-string key is logged and treated as absent.
        """
        if not isinstance(key, str) or not key:
            logger.warning("Invalid table key for %s: %r", self.resource, key)
            return default
        return self._entries.get(key, default)

    # ------------------------------------------------------------------
    # Sharing introspection
    # ------------------------------------------------------------------

    @property
    def shared_values(self) -> Mapping[str, TableValue]:
        """Read-only view of the named shared pool."""
        return MappingProxyType(self._shared)

    def shared_name(self, key: TableKey) -> str | None:
        """Return the shared pool name backing ``key``, or None if inline/absent."""
        return self._refs.get(key)

    def aliases(self, key: TableKey) -> tuple[TableKey, ...]:
        """Return every key backed by the same stored value as ``key``.

        Only explicit sharing counts: two keys whose values happen to be
        equal but were declared separately are not aliases.

        Args:
            key: Key to inspect

        Returns:
            Keys in resource order, including ``key`` itself. Empty tuple if
            ``key`` is absent; ``(key,)`` if its value is not shared.
        """
        if key not in self._entries:
            return ()
        name = self._refs.get(key)
        if name is None:
            return (key,)
        return tuple(k for k in self._entries if self._refs.get(k) == name)

    # ------------------------------------------------------------------
    # Integrity
    # ------------------------------------------------------------------

    @property
    def content_hash(self) -> str:
        """SHA-256 hex digest of the entries in resource order.

        Independent of how values are shared, so a table and its
        serialization round-trip hash identically.
        """
        cached = self._content_hash
        if cached is None:
            canonical = json.dumps(
                list(self._entries.items()), ensure_ascii=False, separators=(",", ":")
            )
            cached = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
            object.__setattr__(self, "_content_hash", cached)
        return cached

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"{type(self).__name__}(domain={str(self._domain)!r}, "
            f"identifier={self._identifier!r}, "
            f"keys={len(self._entries)}, "
            f"shared={len(self._shared)})"
        )


def _check_entry(key: object, value: object, resource: str) -> None:
    """Validate one key/value pair of a table.

    Raises:
        ResourceFormatError: If the key is not a non-empty string or the value
            is not a string or a tuple of strings
    """
    if not isinstance(key, str) or not key:
        diagnostic = Diagnostic(
            code=DiagnosticCode.INVALID_KEY,
            message=f"Table keys must be non-empty strings, got {key!r}",
            resource=resource,
        )
        raise ResourceFormatError(diagnostic)
    if isinstance(value, str):
        return
    if isinstance(value, tuple) and all(isinstance(item, str) for item in value):
        return
    diagnostic = Diagnostic(
        code=DiagnosticCode.INVALID_VALUE,
        message=f"Values must be str or tuple[str, ...], got {type(value).__name__}",
        resource=resource,
        key=key,
        hint="Freeze sequences with TableBuilder before constructing the table",
    )
    raise ResourceFormatError(diagnostic)
