# app/core/errors.py
# error taxonomy: every error knows its HTTP status and the message shown to the client

from __future__ import annotations
from typing import Any, Dict, Optional


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    # missing file, malformed id, bad request body
    status_code = 400
    default_message = "Invalid request"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConfigurationError(AppError):
    # required credential absent, reported and never retried
    status_code = 500
    default_message = "Server misconfigured"


class UpstreamError(AppError):
    # external API failed; details carries the upstream body
    status_code = 500
    default_message = "Upstream error"


class UnknownError(AppError):
    status_code = 500
    default_message = "Unexpected error"
