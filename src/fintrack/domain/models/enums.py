"""Enumerations for domain models."""

from enum import Enum


class AccountType(str, Enum):
    """Kinds of financial account a user can track."""

    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT_CARD = "credit_card"
    CASH = "cash"

    @property
    def label(self) -> str:
        """Human-readable name for display."""
        return _ACCOUNT_TYPE_LABELS[self]


_ACCOUNT_TYPE_LABELS = {
    AccountType.CHECKING: "Checking",
    AccountType.SAVINGS: "Savings",
    AccountType.CREDIT_CARD: "Credit Card",
    AccountType.CASH: "Cash",
}
