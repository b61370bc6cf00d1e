"""Severity model — ordinal levels plus the suppression and bypass rules.

Lower non-zero values are more severe.  ``STDOUT_ONLY`` (0) is not a real
severity: it is a bypass sentinel that is never suppressed and always goes
to the console sink alone, whatever the threshold or sink configuration.
"""

from __future__ import annotations

import logging
from enum import IntEnum

logger = logging.getLogger(__name__)


class Severity(IntEnum):
    """Closed set of record severities."""

    STDOUT_ONLY = 0
    CRITICAL = 1
    ERROR = 2
    WARNING = 3
    INFO = 4
    DEBUG = 5

    @property
    def label(self) -> str:
        """Name used when rendering a record (``"Error"``, ``"Debug"``...)."""
        return _LABELS[self]

    @classmethod
    def parse(cls, value: str | int | Severity) -> Severity:
        """Resolve a label, member name or integer into a ``Severity``.

        Raises ``ValueError`` for anything outside the closed set.  Used for
        user-supplied configuration, where silent clamping would hide typos.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        text = str(value).strip()
        if text.lstrip("-").isdigit():
            return cls(int(text))
        key = text.replace("-", "_").upper()
        if key in cls.__members__:
            return cls[key]
        for member, label in _LABELS.items():
            if label.lower() == text.lower():
                return member
        # "warn" and "errors" are common spellings of the Go-era names
        alias = _ALIASES.get(text.lower())
        if alias is not None:
            return alias
        raise ValueError(f"Unknown severity: {value!r}")

    @classmethod
    def coerce(cls, value: int) -> Severity:
        """Clamp an arbitrary integer into the closed set.

        Out-of-range values are caller misuse; they are clamped (below the
        sentinel -> ``CRITICAL``, above ``DEBUG`` -> ``DEBUG``) and reported
        through the diagnostics logger instead of failing the caller.
        """
        if isinstance(value, cls):
            return value
        number = int(value)
        if number < cls.STDOUT_ONLY:
            clamped = cls.CRITICAL
        elif number > cls.DEBUG:
            clamped = cls.DEBUG
        else:
            return cls(number)
        logger.warning(
            "Severity %d is outside the closed set; clamped to %s",
            number,
            clamped.label,
        )
        return clamped


_LABELS: dict[Severity, str] = {
    Severity.STDOUT_ONLY: "StdoutOnly",
    Severity.CRITICAL: "Critical",
    Severity.ERROR: "Error",
    Severity.WARNING: "Warning",
    Severity.INFO: "Info",
    Severity.DEBUG: "Debug",
}

_ALIASES: dict[str, Severity] = {
    "warn": Severity.WARNING,
    "warnings": Severity.WARNING,
    "errors": Severity.ERROR,
    "stdout": Severity.STDOUT_ONLY,
}

# Threshold used when none (or the zero value) is configured.
DEFAULT_THRESHOLD: Severity = Severity.ERROR


def is_bypass(severity: Severity) -> bool:
    """Return ``True`` for the console-only sentinel level."""
    return severity == Severity.STDOUT_ONLY


def is_suppressed(severity: Severity, threshold: Severity) -> bool:
    """Return ``True`` if a record must be dropped before reaching any sink."""
    return severity > threshold and not is_bypass(severity)


def is_urgent(severity: Severity) -> bool:
    """Return ``True`` for levels that notify remote channel members.

    Error and Critical qualify; the bypass sentinel never reaches the
    remote sink, so it is excluded here too.
    """
    return not is_bypass(severity) and severity <= Severity.ERROR
