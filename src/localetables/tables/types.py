"""Type aliases for the tables domain.

Provides semantic type aliases used throughout the package and by user
code when annotating lookup call sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "LocaleCode",
    "MessageId",
    "MessageTemplate",
    "TableKey",
    "TableValue",
]

type TableKey = str
"""Flat dotted key (e.g., 'MonthNames', 'roc.narrow.AmPmMarkers', 'field.year')."""

type TableValue = str | tuple[str, ...]
"""Stored value: a scalar display string or an ordered, immutable string sequence."""

type LocaleCode = str
"""Canonical POSIX-style locale identifier (e.g., 'ja', 'zh_Hant', 'pt_PT', 'root')."""

type MessageId = str
"""Dotted message identifier (e.g., 'jmxremote.ConnectorBootstrap.ready')."""

type MessageTemplate = str
"""Message template with MessageFormat positional placeholders ('{0}', '{1}')."""
