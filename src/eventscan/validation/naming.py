"""Case-style checkers for the naming rule, keyed by convention name.

The module registry is filled at import time and read by the default
NamingConventionRule. Register extra checkers at import time as well, or pass
a checker map to NamingConventionRule to keep them local to one framework.
"""

import re
from abc import ABC, abstractmethod

from ..config import NamingConvention


class CaseStyleChecker(ABC):
    """Decides whether a key follows one naming convention."""

    convention: str

    @abstractmethod
    def is_compliant(self, key: str) -> bool:
        pass


class SnakeCaseChecker(CaseStyleChecker):
    """Lowercase letter/digit runs joined by single underscores."""

    convention = NamingConvention.SNAKE_CASE.value
    pattern = re.compile(r"[a-z0-9]+(?:_[a-z0-9]+)*")

    def is_compliant(self, key: str) -> bool:
        return self.pattern.fullmatch(key) is not None


_CHECKERS: dict[str, CaseStyleChecker] = {}


def register_checker(checker: CaseStyleChecker) -> None:
    """Register a checker, replacing any existing one for its convention."""
    _CHECKERS[checker.convention] = checker


def get_checker(convention: str) -> CaseStyleChecker | None:
    """Return the checker for a convention, or None when none is registered."""
    return _CHECKERS.get(convention)


register_checker(SnakeCaseChecker())
