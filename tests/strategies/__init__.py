"""Hypothesis strategies for localetables property-based testing.

Strategies are organized by domain:

- tables: dotted keys, display strings, tables and catalogs

Usage:
    from tests.strategies import resource_tables, table_keys
    from tests.strategies.tables import message_catalogs

Event-Emitting Strategies (HypoFuzz-Optimized):
    - resource_tables (table_shape=...)
"""

from .tables import (
    display_strings,
    key_segments,
    locale_identifiers,
    message_catalogs,
    message_templates,
    resource_tables,
    shared_names,
    string_sequences,
    table_domains,
    table_keys,
    table_values,
)

__all__ = [
    "display_strings",
    "key_segments",
    "locale_identifiers",
    "message_catalogs",
    "message_templates",
    "resource_tables",
    "shared_names",
    "string_sequences",
    "table_domains",
    "table_keys",
    "table_values",
]
