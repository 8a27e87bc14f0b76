# boxmfg/errors.py

from typing import List, Optional


class AppError(Exception):
    """Base for errors that map onto an HTTP error envelope."""

    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error if error is not None else message


class ValidationError(AppError):
    status_code = 400

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        super().__init__(message, ", ".join(self.errors) if self.errors else message)

    @classmethod
    def from_messages(cls, errors: List[str]) -> "ValidationError":
        """One error per field, joined into the message itself."""
        return cls(", ".join(errors), errors)


class ReferenceNotFoundError(ValidationError):
    """A foreign key in a write payload points at nothing."""

    def __init__(self, resource: str, field: str, ref_id):
        self.resource = resource
        self.field = field
        self.ref_id = ref_id
        super().__init__(
            f"{resource} not found",
            [f"No {resource} with id {ref_id!r} ({field})"],
        )


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")
        self.resource = resource


class DatabaseError(AppError):
    status_code = 500

    def __init__(self, message: str = "Database operation failed", error: Optional[str] = None):
        super().__init__(message, error)
