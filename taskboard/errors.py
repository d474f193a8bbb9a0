from typing import Any, Optional


class BoardError(Exception):
    """Base for failures surfaced to board callers; ``code`` names the condition."""

    code = "BOARD_ERROR"
    status_code = 500

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.code)
        self.message = message or self.code


class ValidationFailed(BoardError):
    code = "VALIDATION_FAILED"
    status_code = 422

    def __init__(self, message: str = "Invalid task fields", *, errors: Optional[list[Any]] = None):
        super().__init__(message)
        self.errors = errors or []


class EditForbidden(BoardError):
    code = "EDIT_FORBIDDEN"
    status_code = 403

    def __init__(self, message: str = "Editing is locked"):
        super().__init__(message)


class BackendNotConfigured(BoardError):
    """Raised when the relational store is used without a connection string."""

    code = "BACKEND_NOT_CONFIGURED"
    status_code = 500

    def __init__(self, message: str = "No database connection configured"):
        super().__init__(message)
