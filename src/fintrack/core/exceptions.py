"""Application-level exceptions."""

from decimal import Decimal
from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails.

    ``field_errors`` maps each failing field to its message; all failing
    fields are reported together.
    """

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        fields = ", ".join(sorted(self.field_errors))
        super().__init__(f"Invalid input: {fields}", code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class UnauthorizedError(AppError):
    """Raised when a resource exists but belongs to another user."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            f"Unauthorized access to {resource.lower()}: {identifier}",
            code="UNAUTHORIZED",
        )


class NotAuthenticatedError(AppError):
    """Raised when no authenticated user accompanies a request."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="NOT_AUTHENTICATED")


class BalanceNotZeroError(AppError):
    """Raised when deleting an account that still carries a balance."""

    def __init__(self, account_id: str, balance: Decimal):
        self.account_id = account_id
        self.balance = balance
        super().__init__(
            f"Cannot delete account with non-zero balance: {account_id} ({balance})",
            code="BALANCE_NOT_ZERO",
        )


class StoreError(AppError):
    """Base for store failures re-signaled at the repository boundary.

    The underlying exception is kept on ``cause`` for diagnostics.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        code: str,
        cause: Optional[BaseException] = None,
    ):
        self.operation = operation
        self.cause = cause
        super().__init__(message, code=code)


class StoreUnavailableError(StoreError):
    """Raised when the document store cannot be reached."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        super().__init__(
            operation,
            f"Document store unavailable during {operation}",
            code="STORE_UNAVAILABLE",
            cause=cause,
        )


class OperationFailedError(StoreError):
    """Raised when a store operation fails for any other reason."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        super().__init__(
            operation,
            f"Failed to {operation.replace('_', ' ')}",
            code="OPERATION_FAILED",
            cause=cause,
        )
