from __future__ import annotations

from typing import Optional


class ReportError(Exception):
    """Base for rejections the API reports back to the caller (never fatal)."""

    status_code: int = 400
    code: str = "BAD_REQUEST"

    def __init__(self, message: str, *, param: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.param = param

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code, "param": self.param}


class ParameterValidationError(ReportError):
    """Out-of-range or malformed numeric parameter (year, ref, month, limit)."""

    code = "VALIDATION_ERROR"


class MissingParameterError(ReportError):
    """A required opaque id (e.g. productId) was not supplied."""

    code = "MISSING_PARAMETER"


class NotFoundError(ReportError):
    status_code = 404
    code = "NOT_FOUND"


class ReloadFailedError(ReportError):
    """The dataset files could not be loaded; the previous snapshot is kept."""

    status_code = 500
    code = "RELOAD_FAILED"
