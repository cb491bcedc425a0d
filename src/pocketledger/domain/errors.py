"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist for the owner."""


class ForbiddenError(DomainError):
    """Operation not allowed on an existing entity."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class AuthenticationError(DomainError):
    """Credentials or session token could not be verified."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def edit_window_expired(hours: int) -> str:
    """Return message when a transaction is too old to amend."""
    return f"Cannot edit transaction after {hours} hours"


def unknown_period(period: str, supported: list[str]) -> str:
    """Return message for an unrecognized analytics period."""
    return f"Unknown period: '{period}'. Supported periods: {', '.join(supported)}"


def missing_field(field_name: str) -> str:
    """Return message for a missing required field."""
    return f"Missing required field: {field_name}"


def user_already_exists(email: str) -> str:
    """Return message for duplicate registration."""
    return f"User '{email}' already exists"
