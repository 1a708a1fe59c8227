"""Status-line model and display helpers for the form viewmodels.

Call context:
    ``FormVM`` and ``GreetingVM`` hold a ``StatusMessage``; views map its
    severity to a text color class with :func:`status_css_class`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    NONE = "none"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    text: str = ""
    severity: Severity = Severity.NONE

    @classmethod
    def success(cls, text: str) -> "StatusMessage":
        return cls(text, Severity.SUCCESS)

    @classmethod
    def error(cls, text: str) -> "StatusMessage":
        return cls(text, Severity.ERROR)


_CSS_CLASSES = {
    Severity.SUCCESS: "slds-text-color_success",
    Severity.ERROR: "slds-text-color_error",
}


def status_css_class(severity: Severity) -> str:
    """Return the text color class for a status severity ("" for none)."""
    return _CSS_CLASSES.get(severity, "")


def success_text(display_name: str) -> str:
    return f"{display_name} added successfully!"


def error_text(entity_key: str, message: str) -> str:
    return f"Error adding {entity_key}: {message}"


__all__ = [
    "Severity",
    "StatusMessage",
    "error_text",
    "status_css_class",
    "success_text",
]
