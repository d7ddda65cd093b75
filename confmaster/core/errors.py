from __future__ import annotations


class WorkflowError(Exception):
    """Base for every error kind surfaced to the API boundary."""

    code = "error"
    http_status = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthorized(WorkflowError):
    code = "unauthorized"
    http_status = 401


class Forbidden(WorkflowError):
    code = "forbidden"
    http_status = 403


class NotFound(WorkflowError):
    code = "not_found"
    http_status = 404


class Conflict(WorkflowError):
    code = "conflict"
    http_status = 409


class ValidationFailed(WorkflowError):
    code = "validation"
    http_status = 422


class InvalidStatus(ValidationFailed):
    code = "invalid_status"
