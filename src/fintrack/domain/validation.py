"""Input validation for account create and edit forms.

Pure functions: no store access. Every failing field is reported at once.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, Mapping, Optional, TypeVar

from fintrack.core.exceptions import ValidationError
from fintrack.domain.models.enums import AccountType

MAX_NAME_LENGTH = 50

T = TypeVar("T")

_MISSING = object()


@dataclass
class AccountCreate:
    """Validated input for creating an account."""

    name: str
    account_type: AccountType
    balance: Decimal
    is_default: bool = False


@dataclass
class AccountUpdate:
    """Validated partial update. ``None`` fields are left untouched."""

    name: Optional[str] = None
    account_type: Optional[AccountType] = None
    balance: Optional[Decimal] = None
    is_default: Optional[bool] = None


@dataclass
class ValidationResult(Generic[T]):
    """Outcome of validating a form: either a value or field errors."""

    value: Optional[T] = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def unwrap(self) -> T:
        """Return the validated value or raise ``ValidationError``."""
        if self.errors:
            raise ValidationError(self.errors)
        return self.value


def validate_create(data: Mapping[str, Any]) -> ValidationResult[AccountCreate]:
    """
    Validate input for a new account.

    ``name``, ``type`` and ``balance`` are required; ``is_default`` defaults
    to False.
    """
    errors: dict[str, str] = {}

    name = _check_name(data.get("name", _MISSING), errors, required=True)
    account_type = _check_type(data.get("type", _MISSING), errors, required=True)
    balance = _check_balance(data.get("balance", _MISSING), errors, required=True)
    is_default = _check_is_default(data.get("is_default", _MISSING), errors)

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(
        value=AccountCreate(
            name=name,
            account_type=account_type,
            balance=balance,
            is_default=bool(is_default),
        )
    )


def validate_update(data: Mapping[str, Any]) -> ValidationResult[AccountUpdate]:
    """Validate a partial account update; absent fields are skipped."""
    errors: dict[str, str] = {}

    name = _check_name(data.get("name", _MISSING), errors, required=False)
    account_type = _check_type(data.get("type", _MISSING), errors, required=False)
    balance = _check_balance(data.get("balance", _MISSING), errors, required=False)
    is_default = _check_is_default(data.get("is_default", _MISSING), errors)

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(
        value=AccountUpdate(
            name=name,
            account_type=account_type,
            balance=balance,
            is_default=is_default,
        )
    )


def _absent(value: Any) -> bool:
    return value is _MISSING or value is None


def _check_name(value: Any, errors: dict[str, str], required: bool) -> Optional[str]:
    if _absent(value):
        if required:
            errors["name"] = "Account name is required"
        return None
    if not isinstance(value, str) or not value.strip():
        errors["name"] = "Account name is required"
        return None
    name = value.strip()
    if len(name) > MAX_NAME_LENGTH:
        errors["name"] = f"Account name must be {MAX_NAME_LENGTH} characters or less"
        return None
    return name


def _check_type(value: Any, errors: dict[str, str], required: bool) -> Optional[AccountType]:
    if _absent(value) or value == "":
        if required or value == "":
            errors["type"] = "Account type is required"
        return None
    try:
        return AccountType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in AccountType)
        errors["type"] = f"Account type must be one of: {allowed}"
        return None


def _check_balance(value: Any, errors: dict[str, str], required: bool) -> Optional[Decimal]:
    if _absent(value):
        if required:
            errors["balance"] = "Balance must be a valid number"
        return None

    balance = _to_decimal(value)
    if balance is None:
        errors["balance"] = "Balance must be a valid number"
    return balance


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Convert a numeric input to Decimal; None if it is not a finite number."""
    # bool is an int subclass but never a balance
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return Decimal(str(value))
    if isinstance(value, (int, Decimal, str)):
        try:
            result = Decimal(value.strip() if isinstance(value, str) else value)
        except (InvalidOperation, ValueError):
            return None
        return result if result.is_finite() else None
    return None


def _check_is_default(value: Any, errors: dict[str, str]) -> Optional[bool]:
    if _absent(value):
        return None
    if not isinstance(value, bool):
        errors["is_default"] = "Default flag must be true or false"
        return None
    return value
