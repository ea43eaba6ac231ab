"""Locale identifier utilities.

Centralizes identifier normalization so that every cache key, resource file
name and registry lookup uses the same canonical POSIX-style form:

    "zh-hant"  -> "zh_Hant"
    "pt-pt"    -> "pt_PT"
    "JA"       -> "ja"
    "ja.UTF-8" -> "ja"

Canonicalization is purely syntactic. Legacy codes are NOT remapped: the
Hebrew tables are registered under "iw", and "he" is a different (absent)
identifier. Mapping one to the other belongs to a caller-side fallback chain.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from babel.core import UnknownLocaleError, parse_locale

from localetables.constants import MAX_LOCALE_CACHE_SIZE, ROOT_IDENTIFIER

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "canonicalize_locale",
    "clear_locale_cache",
    "get_babel_locale",
    "get_display_name",
    "normalize_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 separators to POSIX separators.

    Args:
        locale_code: BCP-47 locale code (e.g., "zh-Hant", "pt-PT")

    Returns:
        Locale code with underscores (e.g., "zh_Hant", "pt_PT")

    Example:
        >>> normalize_locale("zh-Hant")
        'zh_Hant'
        >>> normalize_locale("ja")  # Already normalized
        'ja'
    """
    return locale_code.replace("-", "_")


def canonicalize_locale(identifier: str) -> str:
    """Return the canonical registry form of a locale identifier.

    Language is lowercased, script titlecased, territory and variant
    uppercased. Encoding suffixes and modifiers are dropped. The reserved
    identifier "root" (any case) names the default resource.

    Args:
        identifier: BCP-47 or POSIX locale identifier

    Returns:
        Canonical identifier (e.g., "zh_Hant", "pt_PT", "root")

    Raises:
        ValueError: If the identifier is not syntactically a locale identifier
        TypeError: If the identifier is not a string

    Example:
        >>> canonicalize_locale("zh-hant")
        'zh_Hant'
        >>> canonicalize_locale("PT_pt")
        'pt_PT'
    """
    if not isinstance(identifier, str):
        msg = f"Locale identifier must be a string, got {type(identifier).__name__}"
        raise TypeError(msg)
    normalized = normalize_locale(identifier.strip())
    if normalized.lower() == ROOT_IDENTIFIER:
        return ROOT_IDENTIFIER
    # parse_locale raises ValueError for malformed input
    language, territory, script, variant = parse_locale(normalized)[:4]
    return "_".join(part for part in (language, script, territory, variant) if part)


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def get_display_name(identifier: str, display_locale: str = "en") -> str | None:
    """Human-readable name of a locale, as CLDR spells it in ``display_locale``.

    Args:
        identifier: Locale identifier (e.g., "pt_PT")
        display_locale: Locale the name is written in (default: "en")

    Returns:
        Display name (e.g., "Portuguese (Portugal)"), or None for "root" and
        for identifiers Babel has no data for

    Example:
        >>> get_display_name("zh_Hant")
        'Chinese (Traditional)'
    """
    try:
        canonical = canonicalize_locale(identifier)
        if canonical == ROOT_IDENTIFIER:
            return None
        locale = get_babel_locale(canonical)
        return locale.get_display_name(get_babel_locale(display_locale))
    except (UnknownLocaleError, ValueError) as e:
        logger.debug("No display name for %r in %r: %s", identifier, display_locale, e)
        return None


def clear_locale_cache() -> None:
    """Clear the cached Babel Locale instances.

    Useful in tests and long-running processes that switch Babel data.
    """
    get_babel_locale.cache_clear()
