"""Core validation framework for eventscan.

Rules are small stateless objects run in a fixed order against one event and
one configuration. Findings are returned as data; a failing event never raises.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..config import ScannerConfig
from ..parser import parse_event

logger = logging.getLogger(__name__)

EVENT_FIELD = "event"


class Severity(str, Enum):
    """Issue severity. Only errors fail an event."""
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    """Rule family that produced an issue, in evaluation order."""
    REQUIRED = "required"
    TYPE = "type"
    NAMING = "naming"
    DOMAIN = "domain"


@dataclass(frozen=True)
class Issue:
    """A single finding produced by a rule."""
    category: Category
    field: str
    message: str
    severity: Severity

    def __str__(self) -> str:
        return f"[{self.severity.value.upper()}] {self.category.value} {self.field}: {self.message}"

    def to_dict(self) -> dict[str, str]:
        return {
            "category": self.category.value,
            "field": self.field,
            "message": self.message,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Ordered issues of one scan and the derived verdict."""
    issues: tuple[Issue, ...] = ()

    @property
    def passed(self) -> bool:
        """True when no issue has error severity."""
        return not any(issue.severity == Severity.ERROR for issue in self.issues)

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = passed, 1 = failed."""
        return 0 if self.passed else 1

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == Severity.WARNING)

    def by_category(self, category: Category) -> list[Issue]:
        return [issue for issue in self.issues if issue.category == category]

    def summary(self) -> str:
        """One-line verdict used by reports."""
        total = len(self.issues)
        if total == 0:
            return "All checks passed. No issues detected."

        noun = "issue" if total == 1 else "issues"
        errors = self.error_count
        if errors == 0:
            return f"{total} {noun} detected (warnings only)."
        error_noun = "error" if errors == 1 else "errors"
        return f"{total} {noun} detected · {errors} {error_noun}."

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "passed": self.passed,
            "summary": self.summary(),
            "counts": {
                "total": len(self.issues),
                "errors": self.error_count,
                "warnings": self.warning_count,
            },
            "issues": [issue.to_dict() for issue in self.issues],
        }


class ValidationRule(ABC):
    """Base class for validation rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @property
    @abstractmethod
    def category(self) -> Category:
        """Category attached to every issue the rule emits."""
        pass

    @abstractmethod
    def check(self, event: Mapping[str, Any], config: ScannerConfig) -> Iterator[Issue]:
        """Yield issues found in the event.

        Args:
            event: Decoded event record, never modified
            config: Rule set to check against
        """
        pass

    def issue(self, field: str, message: str, severity: Severity) -> Issue:
        return Issue(self.category, field, message, severity)


class ValidationFramework:
    """Runs an ordered list of rules against events."""

    def __init__(self, rules: Iterable[ValidationRule] | None = None):
        self.rules: list[ValidationRule] = list(rules or [])

    def add_rule(self, rule: ValidationRule) -> None:
        """Add a validation rule."""
        self.rules.append(rule)

    def validate(self, event: Mapping[str, Any], config: ScannerConfig) -> ValidationResult:
        """Run every rule on the event.

        Args:
            event: Decoded event record
            config: Rule set to check against

        Returns:
            ValidationResult with issues in rule order
        """
        issues: list[Issue] = []

        for rule in self.rules:
            logger.debug(f"Executing rule: {rule.name}")
            found = list(rule.check(event, config))
            logger.debug(f"Rule {rule.name} produced {len(found)} issues")
            issues.extend(found)

        result = ValidationResult(tuple(issues))
        logger.info(f"Validation completed: {result.summary()}")
        return result

    @classmethod
    def with_default_rules(cls) -> "ValidationFramework":
        """Create a framework holding the four standard rule families."""
        from .rules import DomainRule, FieldTypesRule, NamingConventionRule, RequiredFieldsRule

        return cls([
            RequiredFieldsRule(),
            FieldTypesRule(),
            NamingConventionRule(),
            DomainRule(),
        ])


def validate(event: Mapping[str, Any], config: ScannerConfig) -> ValidationResult:
    """Validate one event against a configuration with the standard rules."""
    return ValidationFramework.with_default_rules().validate(event, config)


def scan_text(text: str, config: ScannerConfig) -> ValidationResult:
    """Parse raw text and validate the event.

    Raises:
        EventParseError: If the text is not a single JSON object; no rule runs
    """
    return validate(parse_event(text), config)
