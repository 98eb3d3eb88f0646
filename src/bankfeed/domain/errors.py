"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class UnsupportedFormatError(DomainError):
    """File type is not one of the supported statement formats.

    Raised before any parsing happens; aborts the whole import.
    """


class ParseError(DomainError):
    """A record (or a whole file) could not be parsed."""

    def __init__(self, message: str, source_ref: Optional[str] = None):
        super().__init__(message)
        self.source_ref = source_ref


class StorageError(DomainError):
    """Storage failed while applying an import batch; the batch was rolled back."""


INVALID_FILE_TYPE = "Invalid file type"
IMPORT_CANCELLED = "Import cancelled"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for an account name that is already taken."""
    return f"Account with name '{name}' already exists"


def duplicate_import_id(import_id: str) -> str:
    """Return message for an import ID repeated within one file."""
    return f"Duplicate import id '{import_id}' in file"


def unreadable_file(path: str, reason: str) -> str:
    """Return message for a file that could not be read."""
    return f"Could not read file '{path}': {reason}"
