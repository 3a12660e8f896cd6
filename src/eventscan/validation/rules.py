"""Validation rules for the four rule families.

Each rule checks one aspect of an event and is independent of the others: a
field breaking several rules gets one issue from each.
"""

import json
import logging
import re
from collections.abc import Iterator, Mapping
from typing import Any

from ..config import ScannerConfig, TypeTag
from .framework import Category, Issue, Severity, ValidationRule
from .naming import CaseStyleChecker, get_checker

logger = logging.getLogger(__name__)

ISO_PREFIX = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T")


def type_tag(value: Any) -> str:
    """Return the JSON type tag of a decoded value."""
    if value is None:
        return TypeTag.NULL.value
    if isinstance(value, bool):
        return TypeTag.BOOLEAN.value
    if isinstance(value, (int, float)):
        return TypeTag.NUMBER.value
    if isinstance(value, str):
        return TypeTag.STRING.value
    if isinstance(value, list):
        return TypeTag.ARRAY.value
    return TypeTag.OBJECT.value


def format_value(value: Any) -> str:
    """Render a value for messages: strings bare, everything else as JSON text."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


class RequiredFieldsRule(ValidationRule):
    """Required fields must be present and non-empty."""

    @property
    def name(self) -> str:
        return "required_fields"

    @property
    def category(self) -> Category:
        return Category.REQUIRED

    def check(self, event: Mapping[str, Any], config: ScannerConfig) -> Iterator[Issue]:
        for field in config.required_fields:
            if field not in event:
                yield self.issue(field, f'Missing required field "{field}".', Severity.ERROR)
            elif is_blank(event[field]):
                yield self.issue(
                    field, f'Required field "{field}" is present but empty.', Severity.WARNING
                )


class FieldTypesRule(ValidationRule):
    """Present fields must hold their declared type; timestamps must look like ISO-8601."""

    @property
    def name(self) -> str:
        return "field_types"

    @property
    def category(self) -> Category:
        return Category.TYPE

    def check(self, event: Mapping[str, Any], config: ScannerConfig) -> Iterator[Issue]:
        for field, expected in config.field_types.items():
            # Presence is the required rule's job
            if field not in event:
                continue

            value = event[field]
            actual = type_tag(value)
            if actual != expected.value:
                yield self.issue(
                    field,
                    f'Type mismatch for "{field}": expected {expected.value}, got {actual}.',
                    Severity.ERROR,
                )

            if (
                field in config.timestamp_fields
                and expected == TypeTag.STRING
                and isinstance(value, str)
                and not ISO_PREFIX.match(value)
            ):
                yield self.issue(
                    field,
                    f'Timestamp "{value}" does not look like an ISO-8601 value.',
                    Severity.WARNING,
                )


class NamingConventionRule(ValidationRule):
    """Every key of the event must follow the configured naming convention."""

    def __init__(self, checkers: Mapping[str, CaseStyleChecker] | None = None):
        # None means the module registry filled at import time
        self.checkers = dict(checkers) if checkers is not None else None

    @property
    def name(self) -> str:
        return "naming_convention"

    @property
    def category(self) -> Category:
        return Category.NAMING

    def check(self, event: Mapping[str, Any], config: ScannerConfig) -> Iterator[Issue]:
        if self.checkers is None:
            checker = get_checker(config.naming_convention)
        else:
            checker = self.checkers.get(config.naming_convention)
        if checker is None:
            logger.debug(f"No checker for naming convention '{config.naming_convention}', skipping")
            return

        for key in event:
            if not checker.is_compliant(key):
                yield self.issue(
                    key,
                    f'Field "{key}" does not follow {checker.convention} naming.',
                    Severity.WARNING,
                )


class DomainRule(ValidationRule):
    """Fields with an allowed-value set must hold one of those values exactly."""

    @property
    def name(self) -> str:
        return "domain_values"

    @property
    def category(self) -> Category:
        return Category.DOMAIN

    @staticmethod
    def is_allowed(value: Any, allowed: tuple[Any, ...]) -> bool:
        # True == 1 in Python, so the type tags have to agree as well
        tag = type_tag(value)
        return any(type_tag(option) == tag and option == value for option in allowed)

    def check(self, event: Mapping[str, Any], config: ScannerConfig) -> Iterator[Issue]:
        for field, allowed in config.domain_rules.items():
            if field not in event:
                continue

            value = event[field]
            if not self.is_allowed(value, allowed):
                options = ", ".join(format_value(option) for option in allowed)
                yield self.issue(
                    field,
                    f'Value "{format_value(value)}" for "{field}" is not in allowed set: [{options}].',
                    Severity.WARNING,
                )
