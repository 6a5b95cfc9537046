"""
HTTP client — StackScript calls against the Linode REST API.

A thin request/response mapper over ``urllib.request``. It sends JSON,
decodes JSON, and turns HTTP failures into ``ApiError`` /
``NotFoundError``. No retries: a failed call is reported to the caller.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any

from pydantic import ValidationError

from linode_provider import __version__
from linode_provider.client.base import StackscriptClient
from linode_provider.client.errors import ApiError, NotFoundError
from linode_provider.core.models.stackscript import (
    Stackscript,
    StackscriptCreateOptions,
    StackscriptUpdateOptions,
)

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://api.linode.com"
DEFAULT_API_VERSION = "v4"
DEFAULT_TIMEOUT = 30.0

_STACKSCRIPTS_PATH = "linode/stackscripts"


class LinodeClient(StackscriptClient):
    """Linode API v4 client for StackScripts.

    Args:
        token: Personal access token, sent as a bearer token.
        url: API root (no version segment).
        api_version: Version path segment, e.g. ``"v4"`` or ``"v4beta"``.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        token: str,
        url: str = DEFAULT_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._token = token
        self._base_url = f"{url.rstrip('/')}/{api_version.strip('/')}"
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    # ── StackScript API ─────────────────────────────────────────

    def get_stackscript(self, stackscript_id: int) -> Stackscript:
        path = f"{_STACKSCRIPTS_PATH}/{stackscript_id}"
        return _to_stackscript(self._request("GET", path), "GET", path)

    def create_stackscript(self, opts: StackscriptCreateOptions) -> Stackscript:
        data = self._request("POST", _STACKSCRIPTS_PATH, body=opts.model_dump())
        return _to_stackscript(data, "POST", _STACKSCRIPTS_PATH)

    def update_stackscript(
        self, stackscript_id: int, opts: StackscriptUpdateOptions
    ) -> Stackscript:
        path = f"{_STACKSCRIPTS_PATH}/{stackscript_id}"
        data = self._request("PUT", path, body=opts.model_dump())
        return _to_stackscript(data, "PUT", path)

    def delete_stackscript(self, stackscript_id: int) -> None:
        self._request("DELETE", f"{_STACKSCRIPTS_PATH}/{stackscript_id}")

    # ── Transport ───────────────────────────────────────────────

    def _request(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        url = f"{self._base_url}/{path}"
        payload = json.dumps(body).encode("utf-8") if body is not None else None
        req = urllib.request.Request(
            url,
            data=payload,
            method=method,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": f"linode-provider/{__version__}",
            },
        )

        logger.debug("%s %s", method, url)
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            raise _translate_http_error(e) from e
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            raise ApiError(0, message=f"{method} {url} failed: {e}") from e

        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ApiError(0, message=f"Invalid JSON from {method} {url}: {e}") from e
        if not isinstance(data, dict):
            raise ApiError(0, message=f"Unexpected response from {method} {url}")
        return data


def _translate_http_error(e: urllib.error.HTTPError) -> ApiError:
    """Build an ApiError from an HTTP error response.

    The API answers failures with ``{"errors": [{"reason": ..., "field": ...}]}``.
    """
    reasons: list[str] = []
    try:
        body = json.loads(e.read() or b"{}")
    except (json.JSONDecodeError, OSError):
        body = {}

    if isinstance(body, dict):
        for err in body.get("errors", []) or []:
            if not isinstance(err, dict):
                continue
            reason = err.get("reason", "")
            field = err.get("field")
            if reason:
                reasons.append(f"[{field}] {reason}" if field else reason)

    if e.code == 404:
        return NotFoundError(reasons)
    return ApiError(e.code, reasons, message="; ".join(reasons) or str(e.reason))


def _to_stackscript(data: dict[str, Any], method: str, path: str) -> Stackscript:
    try:
        return Stackscript.model_validate(data)
    except ValidationError as e:
        raise ApiError(0, message=f"Unexpected response from {method} {path}: {e}") from e
