"""Parser settings for the passbook parser.

Provides data-driven configuration with sensible defaults. Every key can be
overridden from a JSON file; anything not overridden falls back to
DEFAULT_SETTINGS.
"""

import json
import logging
from pathlib import Path
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, Any, Optional, Tuple

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable the CLI reads a settings path from
SETTINGS_ENV_VAR = "EPF_PASSBOOK_CONFIG"

DEFAULT_SETTINGS = {
    "$schema": "epf_passbook_settings_v1",
    "version": "1.0",

    "anchors": {
        "table_start": ["EPF Wages", "Wage Month", "Transaction Date", "Particulars"],
        "table_end": ["Total Contributions", "Closing Balance", "Taxable Data"],
        "taxable": "Taxable Data for the year",
    },

    "defaults": {
        "financial_year": "2025-2026",
        "opening_as_on": "31/03/2025",
        "closing_as_on": "Unknown",
        "withdrawal_year": "2025",
        "interest_status": "N/A",
        "printed_on": "Unknown",
        "pdf_type": "EPF Passbook",
    },

    "classification": {
        "statutory_employee_rate": "0.12",
    },
}


_ANCHORS = DEFAULT_SETTINGS["anchors"]
_DEFAULTS = DEFAULT_SETTINGS["defaults"]

# Statutory employee share of EPF wages
STATUTORY_EMPLOYEE_RATE = Decimal(DEFAULT_SETTINGS["classification"]["statutory_employee_rate"])


@dataclass(frozen=True)
class AnchorConfig:
    """Anchor phrases used to locate passbook sections."""
    table_start: Tuple[str, ...] = tuple(_ANCHORS["table_start"])
    table_end: Tuple[str, ...] = tuple(_ANCHORS["table_end"])
    taxable: str = _ANCHORS["taxable"]


@dataclass(frozen=True)
class DefaultsConfig:
    """Structural-zero defaults substituted when an anchor is absent."""
    financial_year: str = _DEFAULTS["financial_year"]
    opening_as_on: str = _DEFAULTS["opening_as_on"]
    closing_as_on: str = _DEFAULTS["closing_as_on"]
    withdrawal_year: str = _DEFAULTS["withdrawal_year"]
    interest_status: str = _DEFAULTS["interest_status"]
    printed_on: str = _DEFAULTS["printed_on"]
    pdf_type: str = _DEFAULTS["pdf_type"]


@dataclass(frozen=True)
class ParserSettings:
    """
    Immutable settings for EPFPassbookParser.

    Usage:
        settings = ParserSettings.load(Path("settings.json"))
        parser = EPFPassbookParser(settings)
    """
    anchors: AnchorConfig = field(default_factory=AnchorConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    statutory_employee_rate: Decimal = STATUTORY_EMPLOYEE_RATE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserSettings":
        """
        Build settings from a (possibly partial) settings dictionary.

        Raises:
            ConfigurationError: If a section or value has the wrong shape
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings must be an object, got {type(data).__name__}")

        merged = _deep_merge(DEFAULT_SETTINGS, data)
        anchors = _section(merged, "anchors")
        defaults = _section(merged, "defaults")
        classification = _section(merged, "classification")

        rate = classification["statutory_employee_rate"]
        try:
            statutory_rate = Decimal(str(rate))
        except InvalidOperation as e:
            raise ConfigurationError(f"Invalid statutory_employee_rate: {rate!r}") from e

        for key in ("table_start", "table_end"):
            value = anchors[key]
            if not isinstance(value, list) or not all(isinstance(a, str) for a in value):
                raise ConfigurationError(f"anchors.{key} must be a list of strings, got {value!r}")
        if not isinstance(anchors["taxable"], str):
            raise ConfigurationError(f"anchors.taxable must be a string, got {anchors['taxable']!r}")

        for key, value in defaults.items():
            if key in _DEFAULTS and not isinstance(value, str):
                raise ConfigurationError(f"defaults.{key} must be a string, got {value!r}")

        return cls(
            anchors=AnchorConfig(
                table_start=tuple(anchors["table_start"]),
                table_end=tuple(anchors["table_end"]),
                taxable=anchors["taxable"],
            ),
            defaults=DefaultsConfig(**{key: defaults[key] for key in _DEFAULTS}),
            statutory_employee_rate=statutory_rate,
        )

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "ParserSettings":
        """
        Load settings from a JSON file, falling back to defaults.

        Args:
            path: Settings JSON file. None returns the defaults.

        Returns:
            ParserSettings instance

        Raises:
            ConfigurationError: If the file is missing or not valid JSON
        """
        if path is None:
            return cls()

        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Settings file not found: {path}", path=str(path))

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid settings JSON in {path}: {e}", path=str(path)) from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings root must be an object: {path}", path=str(path))

        logger.debug(f"Loaded parser settings from {path}")
        return cls.from_dict(data)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merge two dictionaries, override takes precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _section(settings: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a settings section, which must be an object."""
    section = settings[name]
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"Settings section '{name}' must be an object, got {type(section).__name__}"
        )
    return section
