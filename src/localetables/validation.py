"""Structural lint for tables and message catalogs.

validate_table() checks FormatData sequence fields against their expected
lengths (twelve months plus the lunisolar thirteenth slot, seven days, and
so on) and flags shared values nothing references.

validate_catalog() compares a translated catalog with the default catalog:
a message whose placeholders differ from the default would receive the
wrong arguments at format time, so that is an error; missing and extra
messages are warnings.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from localetables.constants import FIELD_LENGTHS, VARIABLE_LENGTH_CALENDARS, ZONE_NAME_LENGTH
from localetables.diagnostics import (
    DiagnosticCode,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)
from localetables.enums import ResourceDomain

if TYPE_CHECKING:
    from localetables.tables import MessageCatalog, ResourceTable

__all__ = ["validate_catalog", "validate_table"]

logger = logging.getLogger(__name__)

_EXEMPLAR_CITY_PREFIX = "timezone.excity."


def _expected_length(key: str) -> int | None:
    """Expected sequence length for a FormatData key, or None if unconstrained."""
    segments = key.split(".")
    field = segments[-1]
    expected = FIELD_LENGTHS.get(field)
    if expected is None:
        return None
    if field == "Eras" and len(segments) > 1 and segments[0] in VARIABLE_LENGTH_CALENDARS:
        return None
    return expected


def _check_zone_names(table: ResourceTable) -> list[ValidationError]:
    """Zone ids map to name arrays; exemplar city keys map to strings."""
    errors: list[ValidationError] = []
    for key, value in table.items():
        if key.startswith(_EXEMPLAR_CITY_PREFIX):
            if not isinstance(value, str):
                errors.append(
                    ValidationError(
                        code=DiagnosticCode.UNEXPECTED_LENGTH,
                        message="Expected an exemplar city string, got a sequence",
                        key=key,
                    )
                )
        elif not isinstance(value, tuple) or len(value) != ZONE_NAME_LENGTH:
            got = f"{len(value)} elements" if isinstance(value, tuple) else "a string"
            errors.append(
                ValidationError(
                    code=DiagnosticCode.UNEXPECTED_LENGTH,
                    message=f"Expected {ZONE_NAME_LENGTH} zone name forms, got {got}",
                    key=key,
                )
            )
    return errors


def validate_table(table: ResourceTable) -> ValidationResult:
    """Lint one table.

    Args:
        table: Table to check

    Returns:
        ValidationResult; length findings are errors, unused shared
        values are warnings
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    if table.domain is ResourceDomain.FORMAT_DATA:
        for key, value in table.items():
            expected = _expected_length(key)
            if expected is None:
                continue
            if not isinstance(value, tuple):
                errors.append(
                    ValidationError(
                        code=DiagnosticCode.UNEXPECTED_LENGTH,
                        message=f"Expected a sequence of {expected} strings, got a string",
                        key=key,
                    )
                )
            elif len(value) != expected:
                errors.append(
                    ValidationError(
                        code=DiagnosticCode.UNEXPECTED_LENGTH,
                        message=f"Expected {expected} elements, got {len(value)}",
                        key=key,
                    )
                )
    elif table.domain is ResourceDomain.TIME_ZONE_NAMES:
        errors.extend(_check_zone_names(table))

    referenced = {table.shared_name(key) for key in table}
    for name in table.shared_values:
        if name not in referenced:
            warnings.append(
                ValidationWarning(
                    code=DiagnosticCode.SHARED_VALUE_UNUSED,
                    message=f"Shared value {name!r} is not referenced by any entry",
                    context=name,
                )
            )

    result = ValidationResult(
        resource=table.resource, errors=tuple(errors), warnings=tuple(warnings)
    )
    logger.debug("Validated %s: %d errors, %d warnings", table.resource, len(errors), len(warnings))
    return result


def validate_catalog(catalog: MessageCatalog, reference: MessageCatalog) -> ValidationResult:
    """Compare a catalog with the default catalog of its domain.

    Args:
        catalog: Catalog to check
        reference: Default ("root") catalog

    Returns:
        ValidationResult; placeholder drift is an error, missing and
        extra messages are warnings
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    expected = reference.get_all_placeholders()
    actual = catalog.get_all_placeholders()

    for message_id in expected:
        if message_id not in actual:
            warnings.append(
                ValidationWarning(
                    code=DiagnosticCode.MISSING_MESSAGE,
                    message=f"Message missing; callers fall back to {reference.identifier}",
                    context=message_id,
                )
            )
    for message_id, indices in actual.items():
        if message_id not in expected:
            warnings.append(
                ValidationWarning(
                    code=DiagnosticCode.EXTRA_MESSAGE,
                    message=f"Message not present in {reference.identifier}",
                    context=message_id,
                )
            )
        elif indices != expected[message_id]:
            errors.append(
                ValidationError(
                    code=DiagnosticCode.PLACEHOLDER_MISMATCH,
                    message=(
                        f"Placeholders {sorted(indices)} differ from "
                        f"{reference.identifier} {sorted(expected[message_id])}"
                    ),
                    key=message_id,
                )
            )

    return ValidationResult(
        resource=catalog.resource, errors=tuple(errors), warnings=tuple(warnings)
    )
