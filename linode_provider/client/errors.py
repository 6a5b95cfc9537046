"""
Client errors — what the API client raises.

Not-found has its own class so callers never have to compare status
codes to decide whether a resource is simply gone.
"""

from __future__ import annotations


class ApiError(Exception):
    """A failed API call.

    ``status`` is the HTTP status code, or 0 when no response was
    received at all (DNS failure, refused connection, timeout).
    ``reasons`` are the human-readable reasons the API returned.
    """

    def __init__(self, status: int, reasons: list[str] | None = None, message: str = ""):
        self.status = status
        self.reasons = list(reasons or [])
        if not message:
            message = "; ".join(self.reasons) or "request failed"
        self.message = message
        super().__init__(f"[{status:03d}] {message}")


class NotFoundError(ApiError):
    """The requested entity does not exist (HTTP 404)."""

    def __init__(self, reasons: list[str] | None = None, message: str = ""):
        super().__init__(404, reasons, message or "Not found")
