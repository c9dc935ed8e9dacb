"""
Centralized Validation Module

Form schemas return their outcome as data; expected validation failures are
never raised.
"""

from .schemas import (
    InvoiceFormSchema,
    InvoiceFormData,
    ParseResult,
)
from .errors import (
    ErrorCode,
    FieldError,
    flatten_field_errors,
)

__all__ = [
    "InvoiceFormSchema",
    "InvoiceFormData",
    "ParseResult",
    "ErrorCode",
    "FieldError",
    "flatten_field_errors",
]
