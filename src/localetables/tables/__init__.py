"""Immutable table types and their builder.

Python 3.13+.
"""

from .builder import TableBuilder
from .catalog import MessageCatalog, extract_placeholders
from .table import ResourceTable
from .types import LocaleCode, MessageId, MessageTemplate, TableKey, TableValue

__all__ = [
    "LocaleCode",
    "MessageCatalog",
    "MessageId",
    "MessageTemplate",
    "ResourceTable",
    "TableBuilder",
    "TableKey",
    "TableValue",
    "extract_placeholders",
]
