"""
Form Validation Schemas

Declarative rules per submitted form. Values arrive as strings (or are
missing) exactly as the browser posted them.

Each schema provides:
- Field constraints (required, coercion, numeric bounds, choices)
- One human-readable message per failing field
- safe_parse(), which returns a ParseResult instead of raising
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from .errors import ErrorCode, FieldError, flatten_field_errors


@dataclass
class FieldConstraints:
    message: str
    required: bool = True
    coerce: Optional[str] = None
    gt: Optional[Decimal] = None
    lte: Optional[Decimal] = None
    places: Optional[int] = None
    max_message: Optional[str] = None
    choices: Optional[List[str]] = None


@dataclass
class ParseResult:
    success: bool
    data: Any = None
    errors: Dict[str, List[str]] = field(default_factory=dict)


class BaseSchema:
    FIELDS: Dict[str, FieldConstraints] = {}

    @classmethod
    def safe_parse(cls, raw: Mapping[str, Any]) -> ParseResult:
        cleaned: Dict[str, Any] = {}
        errors: List[FieldError] = []

        for field_name, constraints in cls.FIELDS.items():
            value, error = cls._parse_field(field_name, raw.get(field_name), constraints)
            if error is not None:
                errors.append(error)
            else:
                cleaned[field_name] = value

        if errors:
            return ParseResult(success=False, errors=flatten_field_errors(errors))
        return ParseResult(success=True, data=cls.build(cleaned))

    @classmethod
    def build(cls, cleaned: Dict[str, Any]) -> Any:
        return cleaned

    @classmethod
    def _parse_field(
        cls,
        field_name: str,
        value: Any,
        constraints: FieldConstraints,
    ) -> tuple[Any, Optional[FieldError]]:
        def fail(code: ErrorCode) -> tuple[Any, FieldError]:
            return None, FieldError(field=field_name, code=code.value, message=constraints.message)

        if constraints.coerce == "number":
            number = _coerce_number(value)
            if number is None:
                return fail(ErrorCode.FIELD_INVALID_TYPE)
            if constraints.lte is not None and number > constraints.lte:
                return None, FieldError(
                    field=field_name,
                    code=ErrorCode.FIELD_OUT_OF_RANGE.value,
                    message=constraints.max_message or constraints.message,
                )
            if constraints.gt is not None and not number > constraints.gt:
                return fail(ErrorCode.FIELD_OUT_OF_RANGE)
            # The lower bound also holds for the value as stored, after rounding
            if constraints.places is not None and constraints.gt is not None:
                stored = number.quantize(Decimal(1).scaleb(-constraints.places), rounding=ROUND_HALF_UP)
                if not stored > constraints.gt:
                    return fail(ErrorCode.FIELD_OUT_OF_RANGE)
            return number, None

        if value is None:
            return fail(ErrorCode.FIELD_REQUIRED) if constraints.required else (None, None)

        if not isinstance(value, str):
            return fail(ErrorCode.FIELD_INVALID_TYPE)

        if constraints.required and not value.strip():
            return fail(ErrorCode.FIELD_REQUIRED)

        if constraints.choices is not None and value not in constraints.choices:
            return fail(ErrorCode.FIELD_INVALID)

        return value, None


def _coerce_number(value: Any) -> Optional[Decimal]:
    """Coerce a posted value to a finite Decimal; missing or blank becomes zero."""
    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, (int, float, Decimal)):
        raw = str(value)
    elif isinstance(value, str):
        raw = value.strip() or "0"
    else:
        return None

    try:
        number = Decimal(raw)
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


@dataclass(frozen=True)
class InvoiceFormData:
    customer_id: str
    amount: Decimal
    status: str


# Largest amount whose cents fit a 32-bit integer column
MAX_AMOUNT = Decimal("21474836.47")


class InvoiceFormSchema(BaseSchema):
    STATUS_CHOICES = ["pending", "paid"]

    FIELDS = {
        "customerId": FieldConstraints(
            message="Please select a customer.",
            required=True,
        ),
        "amount": FieldConstraints(
            message="Please enter an amount greater than $0.",
            coerce="number",
            gt=Decimal("0"),
            lte=MAX_AMOUNT,
            places=2,
            max_message="Please enter an amount no greater than $21,474,836.47.",
        ),
        "status": FieldConstraints(
            message="Please select an invoice status",
            required=True,
            choices=STATUS_CHOICES,
        ),
    }

    @classmethod
    def build(cls, cleaned: Dict[str, Any]) -> InvoiceFormData:
        return InvoiceFormData(
            customer_id=cleaned["customerId"],
            amount=cleaned["amount"],
            status=cleaned["status"],
        )

