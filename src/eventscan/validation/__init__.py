"""Validation layer for eventscan.

Runs the required, type, naming and domain rule families against one decoded
event and returns the findings with a pass/fail verdict.
"""

from .framework import (
    EVENT_FIELD,
    Category,
    Issue,
    Severity,
    ValidationFramework,
    ValidationResult,
    ValidationRule,
    scan_text,
    validate,
)
from .naming import CaseStyleChecker, SnakeCaseChecker, get_checker, register_checker
from .rules import (
    DomainRule,
    FieldTypesRule,
    NamingConventionRule,
    RequiredFieldsRule,
    type_tag,
)

__all__ = [
    "EVENT_FIELD",
    "Category",
    "Issue",
    "Severity",
    "ValidationFramework",
    "ValidationResult",
    "ValidationRule",
    "scan_text",
    "validate",
    "CaseStyleChecker",
    "SnakeCaseChecker",
    "get_checker",
    "register_checker",
    "DomainRule",
    "FieldTypesRule",
    "NamingConventionRule",
    "RequiredFieldsRule",
    "type_tag",
]
