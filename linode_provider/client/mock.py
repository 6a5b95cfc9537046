"""
Mock client — in-memory StackScript API.

Used by tests and by ``--mock`` mode to exercise drivers without network
access. Behaves like the remote side where the drivers care: IDs are
assigned on create, computed fields are filled in, missing IDs raise
``NotFoundError``, and a public StackScript cannot be made private again.
"""

from __future__ import annotations

import re
import threading
from datetime import UTC, datetime
from typing import Any

from linode_provider.client.base import StackscriptClient
from linode_provider.client.errors import ApiError, NotFoundError
from linode_provider.core.models.stackscript import (
    Stackscript,
    StackscriptCreateOptions,
    StackscriptUpdateOptions,
    UserDefinedField,
)


class MockClient(StackscriptClient):
    """In-memory StackScript API.

    Args:
        first_id: ID assigned to the first created StackScript.
        username: Owner reported on created StackScripts.
    """

    def __init__(self, first_id: int = 1, username: str = "mock-user"):
        self._next_id = first_id
        self._username = username
        self._stackscripts: dict[int, Stackscript] = {}
        self._call_log: list[tuple[str, Any]] = []
        self._failures: dict[str, ApiError] = {}
        self._lock = threading.Lock()

    @property
    def call_log(self) -> list[tuple[str, Any]]:
        """Every call received, as ``(method, argument)`` pairs."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls(self, method: str) -> list[Any]:
        """Arguments of every call to ``method``."""
        return [arg for name, arg in self._call_log if name == method]

    def set_failure(self, method: str, error: ApiError | None = None) -> None:
        """Make every later call to ``method`` raise ``error``."""
        self._failures[method] = error or ApiError(500, ["Mock failure"])

    def put(self, stackscript: Stackscript) -> None:
        """Seed a StackScript directly, bypassing create."""
        with self._lock:
            self._stackscripts[stackscript.id] = stackscript
            self._next_id = max(self._next_id, stackscript.id + 1)

    def remove(self, stackscript_id: int) -> None:
        """Drop a StackScript behind the driver's back (simulates drift)."""
        with self._lock:
            self._stackscripts.pop(stackscript_id, None)

    def reset(self) -> None:
        """Clear stored StackScripts, call log and configured failures."""
        with self._lock:
            self._stackscripts.clear()
            self._call_log.clear()
            self._failures.clear()

    # ── StackScript API ─────────────────────────────────────────

    def get_stackscript(self, stackscript_id: int) -> Stackscript:
        self._record("get_stackscript", stackscript_id)
        with self._lock:
            return self._lookup(stackscript_id).model_copy(deep=True)

    def create_stackscript(self, opts: StackscriptCreateOptions) -> Stackscript:
        self._record("create_stackscript", opts)
        _validate(opts.label, opts.script, opts.images)
        now = _now()
        with self._lock:
            stackscript = Stackscript(
                id=self._next_id,
                username=self._username,
                user_gravatar_id=f"gravatar-{self._username}",
                created=now,
                updated=now,
                user_defined_fields=_parse_udfs(opts.script),
                **opts.model_dump(),
            )
            self._stackscripts[stackscript.id] = stackscript
            self._next_id += 1
            return stackscript.model_copy(deep=True)

    def update_stackscript(
        self, stackscript_id: int, opts: StackscriptUpdateOptions
    ) -> Stackscript:
        self._record("update_stackscript", (stackscript_id, opts))
        _validate(opts.label, opts.script, opts.images)
        with self._lock:
            current = self._lookup(stackscript_id)
            if current.is_public and not opts.is_public:
                raise ApiError(
                    400,
                    ["[is_public] Public StackScripts cannot be made private"],
                )
            updated = current.model_copy(
                update={
                    **opts.model_dump(),
                    "user_defined_fields": _parse_udfs(opts.script),
                    "updated": _now(),
                },
                deep=True,
            )
            self._stackscripts[stackscript_id] = updated
            return updated.model_copy(deep=True)

    def delete_stackscript(self, stackscript_id: int) -> None:
        self._record("delete_stackscript", stackscript_id)
        with self._lock:
            self._lookup(stackscript_id)
            del self._stackscripts[stackscript_id]

    # ── Internals ───────────────────────────────────────────────

    def _record(self, method: str, arg: Any) -> None:
        self._call_log.append((method, arg))
        if method in self._failures:
            raise self._failures[method]

    def _lookup(self, stackscript_id: int) -> Stackscript:
        try:
            return self._stackscripts[stackscript_id]
        except KeyError:
            raise NotFoundError() from None


def _now() -> datetime:
    return datetime.now(UTC).replace(microsecond=0)


def _validate(label: str, script: str, images: list[str]) -> None:
    reasons = []
    if not 3 <= len(label) <= 128:
        reasons.append("[label] Length must be 3-128 characters")
    if not script.startswith("#!"):
        reasons.append("[script] Script must begin with a shebang (#!)")
    if not images:
        reasons.append("[images] At least one image is required")
    if reasons:
        raise ApiError(400, reasons)


def _parse_udfs(script: str) -> list[UserDefinedField]:
    """Extract ``<UDF name="..." label="..." ... />`` tags from a script body."""
    fields = []
    for tag in re.findall(r"<UDF\s+([^>]*?)/?>", script):
        attrs = dict(re.findall(r'(\w+)="([^"]*)"', tag))
        fields.append(
            UserDefinedField(
                name=attrs.get("name", ""),
                label=attrs.get("label", ""),
                example=attrs.get("example", ""),
                one_of=attrs.get("oneof", ""),
                many_of=attrs.get("manyof", ""),
                default=attrs.get("default", ""),
            )
        )
    return fields
