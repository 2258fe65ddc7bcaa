"""Named failure kinds reported by every store and grade operation."""
from __future__ import annotations


class GradebookError(Exception):
    code = "error"
    http_status = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.detail}


class NotFound(GradebookError):
    code = "not_found"
    http_status = 404


class NotUnique(GradebookError):
    code = "not_unique"
    http_status = 409


class InvalidInput(GradebookError):
    code = "invalid_input"
    http_status = 422


class HasDependents(GradebookError):
    # deletes cascade, so nothing raises this today; kept so callers can match on it
    code = "has_dependents"
    http_status = 409
