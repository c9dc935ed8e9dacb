"""
Standardized Validation Errors

Field-level failures are collected as FieldError records and flattened into
the mapping the form templates render inline:

    {"amount": ["Please enter an amount greater than $0."], ...}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List


class ErrorCode(str, Enum):
    FIELD_REQUIRED = "FIELD_REQUIRED"
    FIELD_INVALID = "FIELD_INVALID"
    FIELD_INVALID_TYPE = "FIELD_INVALID_TYPE"
    FIELD_OUT_OF_RANGE = "FIELD_OUT_OF_RANGE"


@dataclass
class FieldError:
    field: str
    code: str
    message: str


def flatten_field_errors(errors: Iterable[FieldError]) -> Dict[str, List[str]]:
    """Group messages by field, preserving the order they were raised in."""
    flattened: Dict[str, List[str]] = {}
    for error in errors:
        flattened.setdefault(error.field, []).append(error.message)
    return flattened
