"""Shared constants for localetables.

Centralizes the resource format version, input limits and the structural
expectations used by validation. Placing constants here avoids circular
imports between the tables, loading and validation packages.

Constants are grouped by domain:
- Resource format: On-disk format version and file suffixes
- Identifiers: Reserved identifier for the default catalog
- Input limits: DoS prevention via size constraints
- Field lengths: Expected sequence sizes for FormatData fields

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Resource format
    "DATA_FORMAT_VERSION",
    "TABLE_SUFFIX",
    "CATALOG_SUFFIX",
    "SHARED_REF_KEY",
    # Identifiers
    "ROOT_IDENTIFIER",
    # Input limits
    "MAX_RESOURCE_SIZE",
    "MAX_LOCALE_CACHE_SIZE",
    # Field lengths
    "FIELD_LENGTHS",
    "VARIABLE_LENGTH_CALENDARS",
    "ZONE_NAME_LENGTH",
]

# ============================================================================
# RESOURCE FORMAT
# ============================================================================

# Version of the JSON table layout. Bump on incompatible changes to the
# "shared"/"entries" structure; readers reject any other value.
DATA_FORMAT_VERSION: int = 1

TABLE_SUFFIX: str = ".json"
CATALOG_SUFFIX: str = ".po"

# Marker object key for an entry that points into the shared pool:
# ["roc.MonthNames", {"$ref": "MonthNames"}]
SHARED_REF_KEY: str = "$ref"

# ============================================================================
# IDENTIFIERS
# ============================================================================

# Identifier of the default (untranslated) resource of a domain.
# Follows the CLDR convention of calling the base locale "root".
ROOT_IDENTIFIER: str = "root"

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum resource size in bytes (10 MB).
# The largest packaged table is well under 100 KB.
MAX_RESOURCE_SIZE: int = 10 * 1024 * 1024

# Maximum cached Babel Locale instances (see locale_utils.get_babel_locale).
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# FIELD LENGTHS
# ============================================================================

# Expected number of elements for FormatData sequence fields, keyed by the
# last segment of the dotted key ("roc.narrow.AmPmMarkers" -> "AmPmMarkers").
# Month arrays carry a thirteenth element for lunisolar calendars; it is an
# empty string in every Gregorian-family table.
FIELD_LENGTHS: dict[str, int] = {
    "AmPmMarkers": 2,
    "Eras": 2,
    "DayNames": 7,
    "DayAbbreviations": 7,
    "DayNarrows": 7,
    "MonthNames": 13,
    "MonthAbbreviations": 13,
    "MonthNarrows": 13,
    "QuarterNames": 4,
    "QuarterAbbreviations": 4,
    "QuarterNarrows": 4,
    "DatePatterns": 4,
    "TimePatterns": 4,
    "DateTimePatterns": 4,
    "NumberPatterns": 3,
    "NumberElements": 11,
}

# Calendars whose era arrays grow with history (one entry per imperial era).
VARIABLE_LENGTH_CALENDARS: frozenset[str] = frozenset({"japanese"})

# TimeZoneNames arrays: standard, daylight and generic names, each as a
# long and a short form. Unused forms are empty strings.
ZONE_NAME_LENGTH: int = 6
