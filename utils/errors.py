from typing import List, Optional


class FitPlanError(Exception):
    """Base class for errors raised by the planning core."""

    status_code = 500

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.details = list(details or [])

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(FitPlanError):
    """Missing or malformed input; reported to the caller as a client error."""

    status_code = 400


class InternalError(FitPlanError):
    """Unexpected failure during computation."""

    status_code = 500
