"""Resource codecs: JSON tables and gettext PO catalogs.

JSON table layout (UTF-8)::

    {
      "format": 1,
      "domain": "FormatData",
      "locale": "ja",
      "shared": {
        "MonthNames": ["1月", ..., "12月", ""]
      },
      "entries": [
        ["MonthNames", {"$ref": "MonthNames"}],
        ["roc.MonthAbbreviations", {"$ref": "MonthNames"}],
        ["field.year", "年"]
      ]
    }

Entries keep resource order. An entry whose value is ``{"$ref": name}``
receives the pooled object declared under ``name`` in "shared"; an inline
value is never merged with the pool, even if equal.

Message catalogs are gettext PO files read and written with
``babel.messages.pofile``: msgid is the message identifier, msgstr the
template. The header, untranslated and fuzzy entries are skipped; plural
entries are rejected.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from io import BytesIO
from typing import TYPE_CHECKING, Any, NoReturn

from babel.core import UnknownLocaleError
from babel.messages.catalog import Catalog
from babel.messages.pofile import PoFileError, read_po, write_po

from localetables.constants import (
    DATA_FORMAT_VERSION,
    MAX_RESOURCE_SIZE,
    ROOT_IDENTIFIER,
    SHARED_REF_KEY,
)
from localetables.diagnostics import Diagnostic, DiagnosticCode, ResourceFormatError
from localetables.enums import ResourceDomain
from localetables.tables import MessageCatalog, TableBuilder

if TYPE_CHECKING:
    from localetables.tables import LocaleCode, ResourceTable

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # JSON tables
    "table_to_dict",
    "table_from_dict",
    "dumps",
    "loads",
    # PO catalogs
    "read_catalog",
    "write_catalog",
]

logger = logging.getLogger(__name__)

_CATALOG_HEADER_COMMENT = "# Management agent messages."


def _fail(
    code: DiagnosticCode,
    message: str,
    resource: str | None,
    *,
    key: str | None = None,
    hint: str | None = None,
) -> NoReturn:
    diagnostic = Diagnostic(code=code, message=message, resource=resource, key=key, hint=hint)
    raise ResourceFormatError(diagnostic, source_path=resource)


def _compact(value: object) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


# ============================================================================
# JSON TABLES
# ============================================================================


def table_to_dict(table: ResourceTable) -> dict[str, Any]:
    """Convert a table to its JSON-compatible document.

    The full shared pool is emitted, and every entry backed by it is written
    as a reference, so table_from_dict() reproduces the same sharing.

    Args:
        table: Table to convert

    Returns:
        Document with "format", "domain", "locale", "shared", "entries"
    """
    shared = {
        name: list(value) if isinstance(value, tuple) else value
        for name, value in table.shared_values.items()
    }
    entries: list[list[Any]] = []
    for key, value in table.items():
        name = table.shared_name(key)
        if name is not None:
            entries.append([key, {SHARED_REF_KEY: name}])
        elif isinstance(value, tuple):
            entries.append([key, list(value)])
        else:
            entries.append([key, value])
    return {
        "format": DATA_FORMAT_VERSION,
        "domain": str(table.domain),
        "locale": table.identifier,
        "shared": shared,
        "entries": entries,
    }


def table_from_dict(
    data: object,
    *,
    identifier: LocaleCode | None = None,
    domain: ResourceDomain | None = None,
    source_path: str | None = None,
) -> ResourceTable:
    """Build a table from a decoded JSON document.

    Args:
        data: Decoded document
        identifier: Expected locale (checked against "locale" when given)
        domain: Expected domain (checked against "domain" when given)
        source_path: Path used in diagnostics

    Returns:
        Frozen table; a MessageCatalog for catalog domains

    Raises:
        ResourceFormatError: If the document does not follow the table layout
    """
    if not isinstance(data, dict):
        _fail(DiagnosticCode.RESOURCE_MALFORMED, "Top-level value must be an object", source_path)

    version = data.get("format")
    if version != DATA_FORMAT_VERSION or isinstance(version, bool):
        _fail(
            DiagnosticCode.UNSUPPORTED_FORMAT_VERSION,
            f"Unsupported format version {version!r}; expected {DATA_FORMAT_VERSION}",
            source_path,
        )

    raw_domain = data.get("domain")
    try:
        declared_domain = ResourceDomain(raw_domain)
    except ValueError:
        _fail(DiagnosticCode.RESOURCE_MALFORMED, f"Unknown domain {raw_domain!r}", source_path)
    if domain is not None and declared_domain is not domain:
        _fail(
            DiagnosticCode.DOMAIN_MISMATCH,
            f"Resource declares domain {declared_domain!s}, expected {domain!s}",
            source_path,
        )

    locale = data.get("locale")
    if not isinstance(locale, str) or not locale:
        _fail(DiagnosticCode.RESOURCE_MALFORMED, '"locale" must be a non-empty string', source_path)
    if identifier is not None and locale != identifier:
        _fail(
            DiagnosticCode.RESOURCE_MALFORMED,
            f"Resource declares locale {locale!r}, expected {identifier!r}",
            source_path,
        )

    shared = data.get("shared", {})
    if not isinstance(shared, dict):
        _fail(DiagnosticCode.RESOURCE_MALFORMED, '"shared" must be an object', source_path)
    entries = data.get("entries")
    if not isinstance(entries, list):
        _fail(DiagnosticCode.RESOURCE_MALFORMED, '"entries" must be an array', source_path)

    builder = TableBuilder(locale, declared_domain)
    for name, value in shared.items():
        builder.share(name, _sequence_or_scalar(value, name, source_path))

    for position, entry in enumerate(entries):
        if not isinstance(entry, list) or len(entry) != 2:
            _fail(
                DiagnosticCode.RESOURCE_MALFORMED,
                f"Entry {position} must be a [key, value] pair",
                source_path,
            )
        key, value = entry
        if not isinstance(key, str):
            _fail(
                DiagnosticCode.INVALID_KEY,
                f"Entry {position} has non-string key {key!r}",
                source_path,
            )
        if isinstance(value, dict):
            ref = value.get(SHARED_REF_KEY)
            if len(value) != 1 or not isinstance(ref, str):
                _fail(
                    DiagnosticCode.RESOURCE_MALFORMED,
                    f'Object values must be {{"{SHARED_REF_KEY}": name}}',
                    source_path,
                    key=key,
                )
            builder.add_ref(key, ref)
        else:
            builder.add(key, _sequence_or_scalar(value, key, source_path))

    return builder.build()


def _sequence_or_scalar(value: object, key: str, source_path: str | None) -> str | list[str]:
    # Only JSON strings and arrays are values; TableBuilder checks array items
    if isinstance(value, (str, list)):
        return value
    _fail(
        DiagnosticCode.INVALID_VALUE,
        f"Values must be a string or an array of strings, got {type(value).__name__}",
        source_path,
        key=key,
    )


def dumps(table: ResourceTable) -> str:
    """Serialize a table to the on-disk JSON layout.

    One shared value or entry per line, values written compactly, so
    generated resources diff cleanly.
    """
    data = table_to_dict(table)
    lines = [
        "{",
        f'  "format": {data["format"]},',
        f'  "domain": {_compact(data["domain"])},',
        f'  "locale": {_compact(data["locale"])},',
    ]
    if data["shared"]:
        lines.append('  "shared": {')
        shared_lines = [
            f"    {_compact(name)}: {_compact(value)}" for name, value in data["shared"].items()
        ]
        lines.append(",\n".join(shared_lines))
        lines.append("  },")
    else:
        lines.append('  "shared": {},')
    if data["entries"]:
        lines.append('  "entries": [')
        lines.append(",\n".join(f"    {_compact(entry)}" for entry in data["entries"]))
        lines.append("  ]")
    else:
        lines.append('  "entries": []')
    lines.append("}")
    return "\n".join(lines) + "\n"


def loads(
    source: str | bytes,
    *,
    identifier: LocaleCode | None = None,
    domain: ResourceDomain | None = None,
    source_path: str | None = None,
    max_size: int = MAX_RESOURCE_SIZE,
) -> ResourceTable:
    """Parse a JSON table resource.

    Args:
        source: UTF-8 bytes or decoded text
        identifier: Expected locale (optional)
        domain: Expected domain (optional)
        source_path: Path used in diagnostics
        max_size: Maximum accepted payload size in bytes

    Returns:
        Frozen table

    Raises:
        ResourceFormatError: If the payload is too large, not UTF-8, not
            JSON, or does not follow the table layout
    """
    size = len(source) if isinstance(source, bytes) else len(source.encode("utf-8"))
    if size > max_size:
        _fail(
            DiagnosticCode.RESOURCE_TOO_LARGE,
            f"Resource is {size} bytes; limit is {max_size}",
            source_path,
        )
    try:
        data = json.loads(source)
    except UnicodeDecodeError as e:
        _fail(DiagnosticCode.RESOURCE_MALFORMED, f"Resource is not valid UTF-8: {e}", source_path)
    except json.JSONDecodeError as e:
        _fail(
            DiagnosticCode.RESOURCE_MALFORMED,
            f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}",
            source_path,
        )
    return table_from_dict(data, identifier=identifier, domain=domain, source_path=source_path)


# ============================================================================
# PO CATALOGS
# ============================================================================


def read_catalog(
    source: bytes,
    identifier: LocaleCode,
    *,
    domain: ResourceDomain = ResourceDomain.AGENT,
    source_path: str | None = None,
    max_size: int = MAX_RESOURCE_SIZE,
) -> MessageCatalog:
    """Parse a gettext PO resource into a message catalog.

    Args:
        source: PO file contents
        identifier: Canonical identifier of the catalog ("root" for the default)
        domain: Catalog domain
        source_path: Path used in diagnostics
        max_size: Maximum accepted payload size in bytes

    Returns:
        Frozen MessageCatalog, messages in file order

    Raises:
        ResourceFormatError: If the payload is too large, not a valid PO
            file, or contains plural entries
    """
    if len(source) > max_size:
        _fail(
            DiagnosticCode.RESOURCE_TOO_LARGE,
            f"Resource is {len(source)} bytes; limit is {max_size}",
            source_path,
        )
    try:
        po = read_po(BytesIO(source), locale=None, abort_invalid=True)
    except (PoFileError, UnicodeDecodeError, UnknownLocaleError, ValueError) as e:
        _fail(DiagnosticCode.RESOURCE_MALFORMED, f"Invalid PO catalog: {e}", source_path)

    builder = TableBuilder(identifier, domain)
    for message in po:
        if not message.id:
            continue
        if isinstance(message.id, (list, tuple)):
            _fail(
                DiagnosticCode.PLURAL_MESSAGE,
                "Plural messages are not supported",
                source_path,
                key=str(message.id[0]),
                hint="Store each form under its own message id",
            )
        if message.fuzzy or not message.string:
            logger.debug("Skipping untranslated or fuzzy message %r in %s", message.id, source_path)
            continue
        builder.add(message.id, message.string)

    catalog = builder.build()
    if not isinstance(catalog, MessageCatalog):
        _fail(
            DiagnosticCode.DOMAIN_MISMATCH,
            f"Domain {domain!s} does not hold message catalogs",
            source_path,
        )
    return catalog


def write_catalog(catalog: ResourceTable) -> bytes:
    """Serialize a message catalog to a UTF-8 gettext PO file.

    Raises:
        ResourceFormatError: If the table holds sequence values or empty
            templates, which a PO reader treats as untranslated
    """
    locale = None if catalog.identifier == ROOT_IDENTIFIER else catalog.identifier
    po = Catalog(
        locale=locale, header_comment=_CATALOG_HEADER_COMMENT, charset="utf-8", fuzzy=False
    )
    for message_id, template in catalog.items():
        if not isinstance(template, str):
            _fail(
                DiagnosticCode.INVALID_VALUE,
                "Only string templates can be written to a PO catalog",
                catalog.resource,
                key=message_id,
            )
        if not template:
            _fail(
                DiagnosticCode.INVALID_VALUE,
                "Empty templates cannot be written to a PO catalog",
                catalog.resource,
                key=message_id,
            )
        po.add(message_id, template)
    buffer = BytesIO()
    # width=0 disables line wrapping; one template per msgstr line
    write_po(buffer, po, width=0, omit_header=False, sort_output=False)
    return buffer.getvalue()
