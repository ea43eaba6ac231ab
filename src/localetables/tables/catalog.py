"""Static message catalog.

A MessageCatalog is a ResourceTable whose values are message templates:
plain strings with MessageFormat positional placeholders such as ``{0}``.
Templates are returned verbatim; substituting arguments is the caller's job.

Python 3.13+.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from localetables.diagnostics import Diagnostic, DiagnosticCode, ResourceFormatError
from localetables.tables.table import ResourceTable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from localetables.enums import ResourceDomain
    from localetables.tables.types import LocaleCode, MessageId, MessageTemplate, TableValue

__all__ = ["MessageCatalog", "extract_placeholders"]

# Argument index at the start of a format element: "{0}", "{1,number}", "{ 2 }".
_ARGUMENT_PATTERN = re.compile(r"\{\s*(\d+)\s*[,}]")


def extract_placeholders(template: MessageTemplate) -> frozenset[int]:
    """Return the positional argument indices a template references.

    Single-quoted sections are literal text and contribute nothing;
    two consecutive quotes stand for one literal quote.

    Example:
        >>> sorted(extract_placeholders("Copied {1} of {0,number} files"))
        [0, 1]
        >>> extract_placeholders("Use '{0}' literally")
        frozenset()
    """
    unquoted: list[str] = []
    in_quote = False
    i = 0
    length = len(template)
    while i < length:
        ch = template[i]
        if ch == "'":
            if i + 1 < length and template[i + 1] == "'":
                i += 2
                continue
            in_quote = not in_quote
        elif not in_quote:
            unquoted.append(ch)
        i += 1
    return frozenset(int(index) for index in _ARGUMENT_PATTERN.findall("".join(unquoted)))


class MessageCatalog(ResourceTable):
    """Immutable map from message identifier to message template.

    Same lookup contract as ResourceTable; every value is a str.

    Example:
        >>> catalog = load_catalog("zh_CN")
        >>> catalog.get("jmxremote.ConnectorBootstrap.ready")
        'JMX 连接器已在 {0} 处准备就绪'
        >>> catalog.placeholders("jmxremote.ConnectorBootstrap.ready")
        frozenset({0})
    """

    __slots__ = ()

    def __init__(
        self,
        identifier: LocaleCode,
        domain: ResourceDomain,
        entries: Mapping[MessageId, TableValue],
        *,
        shared: Mapping[str, TableValue] | None = None,
        refs: Mapping[MessageId, str] | None = None,
    ) -> None:
        """Initialize a frozen catalog.

        Raises:
            ResourceFormatError: If any template is not a string or is empty
        """
        for message_id, template in entries.items():
            if not isinstance(template, str):
                diagnostic = Diagnostic(
                    code=DiagnosticCode.INVALID_VALUE,
                    message="Message templates must be strings",
                    resource=f"{domain}/{identifier}",
                    key=message_id,
                )
                raise ResourceFormatError(diagnostic)
            if not template:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.INVALID_VALUE,
                    message="Message template is empty",
                    resource=f"{domain}/{identifier}",
                    key=message_id,
                    hint="Omit untranslated messages instead of storing an empty template",
                )
                raise ResourceFormatError(diagnostic)
        super().__init__(identifier, domain, entries, shared=shared, refs=refs)

    def placeholders(self, message_id: MessageId) -> frozenset[int] | None:
        """Positional argument indices used by a message, or None if absent."""
        template = self.get(message_id)
        if not isinstance(template, str):
            return None
        return extract_placeholders(template)

    def get_all_placeholders(self) -> dict[MessageId, frozenset[int]]:
        """Placeholder indices for every message, in catalog order."""
        return {
            message_id: extract_placeholders(template)
            for message_id, template in self._entries.items()
            if isinstance(template, str)
        }
