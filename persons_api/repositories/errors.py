"""Exceptions raised by the repositories."""


class RepositoryError(Exception):
    """Base class for data-access failures."""


class ConstraintViolationError(RepositoryError):
    """A unique or primary-key constraint rejected the write."""


class RoleAssignmentError(ConstraintViolationError):
    """Replacing a user's roles failed; the transaction was rolled back."""
