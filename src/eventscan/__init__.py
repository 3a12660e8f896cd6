"""eventscan - Rule-based data-quality scanner for single pipeline events.

eventscan checks one JSON event against a configured rule set: required fields,
expected types, a naming convention and per-field allowed values.
"""

__version__ = "0.1.0"
__author__ = "eventscan contributors"
__description__ = "Rule-based data-quality scanner for pipeline events"

from eventscan.config import ScannerConfig, create_default_config, load_config
from eventscan.parser import EventParseError, InvalidShape, InvalidSyntax, parse_event
from eventscan.validation import ValidationResult, scan_text, validate

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "ScannerConfig",
    "create_default_config",
    "load_config",
    "EventParseError",
    "InvalidShape",
    "InvalidSyntax",
    "parse_event",
    "ValidationResult",
    "scan_text",
    "validate",
]
