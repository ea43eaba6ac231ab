#!/usr/bin/env python3
"""Validate every packaged locale resource.

Loads each resource of each domain through a fresh TableRegistry, then
lints it: FormatData sequence lengths and unused shared values for tables,
message and placeholder consistency against the "root" catalog for
message catalogs.

CHECKS PERFORMED:
    1. Every resource parses (JSON tables, PO catalogs)
    2. FormatData sequence fields have their expected lengths
    3. Every shared value is referenced by at least one entry (warning)
    4. Catalog placeholders match the root catalog
    5. Catalogs neither miss nor add messages relative to root (warning)

Exit Codes:
    0: All resources loaded and validated
    1: A resource failed to load or validation reported errors
       (or warnings, with --strict)
    2: Usage error (bad arguments, missing data root)

Usage:
    uv run python scripts/validate_data.py
    uv run python scripts/validate_data.py --domain FormatData -v
    uv run python scripts/validate_data.py --root build/locale-data --strict

Python 3.13+.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

from localetables import (
    LocaleNotFoundError,
    MessageCatalog,
    ResourceDomain,
    TableRegistry,
    __version__,
)
from localetables.constants import ROOT_IDENTIFIER
from localetables.loading import PathResourceLoader
from localetables.validation import validate_catalog, validate_table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from localetables.diagnostics import ValidationResult

logger = logging.getLogger("validate_data")

# ANSI color codes (disabled if NO_COLOR environment variable is set)
NO_COLOR = os.environ.get("NO_COLOR", "") == "1"


class Colors:
    """ANSI color codes for terminal output."""

    RED = "" if NO_COLOR else "\033[31m"
    GREEN = "" if NO_COLOR else "\033[32m"
    YELLOW = "" if NO_COLOR else "\033[33m"
    BOLD = "" if NO_COLOR else "\033[1m"
    RESET = "" if NO_COLOR else "\033[0m"


class CheckResult(NamedTuple):
    """Outcome of loading and linting one resource."""

    resource: str
    passed: bool
    message: str
    warnings: int = 0


# ==============================================================================
# CHECKS
# ==============================================================================


def check_domain(
    registry: TableRegistry, domain: ResourceDomain, *, strict: bool
) -> list[CheckResult]:
    """Load and lint every resource in one domain."""
    results: list[CheckResult] = []
    summary = registry.preload(domain)

    for failed in summary.get_errors():
        results.append(
            CheckResult(
                resource=f"{domain}/{failed.identifier}",
                passed=False,
                message=f"failed to load: {failed.error}",
            )
        )

    for missing in summary.get_not_found():
        results.append(
            CheckResult(
                resource=f"{domain}/{missing.identifier}",
                passed=False,
                message="file name does not resolve to a loadable identifier",
            )
        )

    reference = None
    if domain.is_message_catalog:
        try:
            reference = registry.load_catalog(ROOT_IDENTIFIER, domain)
        except LocaleNotFoundError:
            results.append(
                CheckResult(
                    resource=f"{domain}/{ROOT_IDENTIFIER}",
                    passed=False,
                    message="default catalog missing; catalogs cannot be compared",
                )
            )

    for loaded in summary.get_successful():
        table = registry.load(loaded.identifier, domain)
        validation: ValidationResult
        if reference is not None and isinstance(table, MessageCatalog):
            validation = validate_catalog(table, reference)
        else:
            validation = validate_table(table)

        for warning in validation.warnings:
            logger.warning("%s: [%s] %s", validation.resource, warning.code.name, warning.message)

        passed = validation.is_valid and not (strict and validation.warning_count)
        message = (
            f"{len(table)} keys, {len(table.shared_values)} shared"
            if passed
            else validation.format()
        )
        results.append(
            CheckResult(
                resource=validation.resource,
                passed=passed,
                message=message,
                warnings=validation.warning_count,
            )
        )
    return results


# ==============================================================================
# OUTPUT
# ==============================================================================


def print_report(results: Sequence[CheckResult], *, verbose: bool) -> None:
    """Print a human-readable report."""
    for result in results:
        if result.passed and not verbose:
            continue
        status = (
            f"{Colors.GREEN}[PASS]{Colors.RESET}"
            if result.passed
            else f"{Colors.RED}[FAIL]{Colors.RESET}"
        )
        print(f"{status} {result.resource}: {result.message}")

    failed = sum(1 for r in results if not r.passed)
    warned = sum(r.warnings for r in results)
    color = Colors.RED if failed else Colors.GREEN
    print(
        f"{Colors.BOLD}{color}{len(results) - failed}/{len(results)} resources valid"
        f"{Colors.RESET}"
        + (f", {Colors.YELLOW}{warned} warnings{Colors.RESET}" if warned else "")
    )


def print_json(results: Sequence[CheckResult]) -> None:
    """Print a machine-readable report."""
    print(
        json.dumps(
            {
                "version": __version__,
                "passed": all(r.passed for r in results),
                "results": [r._asdict() for r in results],
            },
            ensure_ascii=False,
            indent=2,
        )
    )


# ==============================================================================
# MAIN ENTRY POINT
# ==============================================================================


def parse_args(args: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Validate packaged locale tables and message catalogs",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Validate a resource tree on disk instead of the packaged data",
    )
    parser.add_argument(
        "--domain",
        action="append",
        choices=[str(domain) for domain in ResourceDomain],
        default=None,
        help="Domain to validate (can be repeated; default: all)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat validation warnings as failures",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output report as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show passing resources and debug logging",
    )
    return parser.parse_args(args)


def main(args: Sequence[str] | None = None) -> int:
    """Main entry point."""
    options = parse_args(args)
    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if options.root is not None:
        if not options.root.is_dir():
            print(f"[ERROR] Data root not found: {options.root}", file=sys.stderr)
            return 2
        registry = TableRegistry(PathResourceLoader(options.root))
    else:
        registry = TableRegistry()

    domains = (
        [ResourceDomain(name) for name in options.domain]
        if options.domain
        else list(ResourceDomain)
    )

    results: list[CheckResult] = []
    for domain in domains:
        results.extend(check_domain(registry, domain, strict=options.strict))

    if options.json:
        print_json(results)
    else:
        print_report(results, verbose=options.verbose)

    return 0 if all(r.passed for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
