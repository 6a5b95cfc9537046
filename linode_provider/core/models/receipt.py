"""
Receipt model — the outcome of one driver operation.

Drivers raise on failure. The driver table catches those errors and
hands back a Receipt, so callers dispatching through the table inspect
a status instead of handling exceptions.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

Operation = Literal["create", "read", "update", "delete", "import"]


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Result of a driver operation.

    ``resource_id`` is the identifier after the operation; it is empty
    when the resource is gone (deleted, or found missing on read).
    ``attributes`` holds the resulting snapshot for successful operations.
    """

    kind: str
    operation: str
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    resource_id: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the operation succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the operation failed."""
        return self.status == "failed"

    @property
    def gone(self) -> bool:
        """Whether the resource no longer exists after a successful operation."""
        return self.ok and not self.resource_id

    @classmethod
    def success(
        cls,
        kind: str,
        operation: Operation,
        resource_id: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            kind=kind,
            operation=operation,
            status="ok",
            resource_id=resource_id,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        kind: str,
        operation: Operation,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            kind=kind,
            operation=operation,
            status="failed",
            error=error,
            **kwargs,
        )
