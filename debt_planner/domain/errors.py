# debt_planner/domain/errors.py
from typing import Dict, Optional


class AppError(Exception):
    status_code = 400
    def __init__(self, message: str, status_code: int = None, field: Optional[str] = None):
        super().__init__(message)
        if status_code:
            self.status_code = status_code
        self.message = message
        self.field = field

    def to_dict(self) -> Dict:
        body = {"error": self.message}
        if self.field:
            body["field"] = self.field
        return body

class BadRequest(AppError):
    status_code = 400

class NotFound(AppError):
    status_code = 404

class UpstreamError(AppError):
    """Debt store unreachable or returned something unusable."""
    status_code = 502
