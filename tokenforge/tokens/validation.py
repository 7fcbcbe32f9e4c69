#!/usr/bin/env python3
"""Pre-build validation of a token document.

Checks run in order and never stop at the first finding:
- Expected collections present (missing ones are warnings)
- Leaf tokens with empty values (warnings)
- Count of alias references

A document that cannot be read or is not a well-formed token tree is an
error; only errors make validation fail.

Example:
    >>> report = validate_file("tokens/tokens.json")
    >>> print("\\n".join(report.render()))
    >>> report.exit_code
    0
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from tokenforge.core.constants import DEFAULT_EXPECTED_COLLECTIONS, DocumentKey
from tokenforge.core.errors import (
    CollectionMissingWarning,
    EmptyValueWarning,
    StructuralError,
    TokenError,
    TokenWarning,
)
from tokenforge.infrastructure.logger import Logger, get_logger
from tokenforge.tokens.loader import TokenTreeLoader, read_document


@dataclass
class ValidationReport:
    """Findings of one validation run."""

    expected: List[str] = field(default_factory=list)
    token_counts: Dict[str, int] = field(default_factory=dict)
    empty_values: List[str] = field(default_factory=list)
    alias_count: int = 0
    warnings: List[TokenWarning] = field(default_factory=list)
    errors: List[TokenError] = field(default_factory=list)

    @property
    def collections(self) -> List[str]:
        return list(self.token_counts)

    @property
    def missing(self) -> List[str]:
        return [name for name in self.expected if name not in self.token_counts]

    @property
    def total_tokens(self) -> int:
        return sum(self.token_counts.values())

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    @property
    def verdict(self) -> str:
        if self.errors:
            return "Failed"
        if self.warnings:
            return "Passed with warnings"
        return "All good!"

    def summary(self) -> str:
        return (
            f"{len(self.token_counts)} collections · {self.total_tokens} tokens · "
            f"{len(self.errors)} errors · {len(self.warnings)} warnings"
        )

    def render(self) -> List[str]:
        """Human-readable report lines."""
        lines = ["Validating design tokens..."]

        for error in self.errors:
            lines.append(f"  ERROR {error.message}")

        if not self.errors:
            lines.extend(["", "Checking collections..."])
            for name in self.expected:
                if name in self.token_counts:
                    lines.append(f'  OK    "{name}"  ({self.token_counts[name]} tokens)')
                else:
                    lines.append(f"  WARN  {CollectionMissingWarning(name)}")
            for name, count in self.token_counts.items():
                if name not in self.expected:
                    lines.append(f'  INFO  "{name}"  ({count} tokens, not expected)')

            lines.extend(["", "Checking for empty values..."])
            if self.empty_values:
                lines.extend(f"  WARN  {EmptyValueWarning(path)}" for path in self.empty_values)
            else:
                lines.append("  OK    No empty values found")

            lines.extend(["", f"{self.alias_count} alias references found"])

        lines.extend(["", self.summary(), self.verdict])
        return lines


def is_empty_value(value: Any) -> bool:
    """A value counts as empty when it is null, blank or false; zero is a value."""
    return value is None or value is False or value == ""


def validate_document(
    document: Any,
    expected_collections: Sequence[str] = DEFAULT_EXPECTED_COLLECTIONS,
    reserved_prefix: str = DocumentKey.RESERVED_PREFIX,
    logger: Optional[Logger] = None,
) -> ValidationReport:
    """Validate a parsed token document.

    Args:
        document: Parsed document
        expected_collections: Collection names that should be present
        reserved_prefix: Marker of keys that are not collections or tokens
        logger: Optional logger

    Returns:
        ValidationReport (errors recorded, never raised)
    """
    logger = logger or get_logger()
    report = ValidationReport(expected=list(expected_collections))

    try:
        tree = TokenTreeLoader(reserved_prefix, logger=logger).load(document)
    except StructuralError as e:
        report.errors.append(e)
        logger.error(e.message)
        return report

    for name, group in tree.collections.items():
        report.token_counts[name] = group.count()

    for name in report.missing:
        warning = CollectionMissingWarning(name)
        report.warnings.append(warning)
        logger.warning(str(warning))

    for collection, leaf in tree.leaves():
        token = leaf.token
        full_path = f"{collection}.{token.name}"
        if is_empty_value(token.raw_value):
            report.empty_values.append(full_path)
            report.warnings.append(EmptyValueWarning(full_path))
        if isinstance(token.raw_value, str) and token.raw_value.startswith("{"):
            report.alias_count += 1

    logger.debug(
        "Validated token document",
        collections=len(report.token_counts),
        tokens=report.total_tokens,
        warnings=len(report.warnings),
    )
    return report


def validate_file(
    file_path: Union[str, Path],
    expected_collections: Sequence[str] = DEFAULT_EXPECTED_COLLECTIONS,
    reserved_prefix: str = DocumentKey.RESERVED_PREFIX,
    logger: Optional[Logger] = None,
) -> ValidationReport:
    """Read and validate a token document file."""
    try:
        document = read_document(file_path)
    except StructuralError as e:
        report = ValidationReport(expected=list(expected_collections))
        report.errors.append(e)
        (logger or get_logger()).error(e.message)
        return report
    return validate_document(document, expected_collections, reserved_prefix, logger)
