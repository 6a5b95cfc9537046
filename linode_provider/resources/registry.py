"""
Driver table — explicit {kind → driver} dispatch for one provider instance.

The table is built by the provider-assembly step and passed to whoever
needs it; there is no process-wide registry. ``execute`` is the main
entry point: it runs one lifecycle operation and always returns a
Receipt instead of raising.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from linode_provider.core.models.receipt import Operation, Receipt
from linode_provider.core.models.resource_data import ResourceData
from linode_provider.core.models.schema import ResourceSchema
from linode_provider.resources.base import ResourceDriver, ResourceError

logger = logging.getLogger(__name__)

OPERATIONS: tuple[Operation, ...] = ("create", "read", "update", "delete", "import")


class DriverTable:
    """Dispatch table of resource drivers keyed by kind."""

    def __init__(self, drivers: list[ResourceDriver] | None = None):
        self._drivers: dict[str, ResourceDriver] = {}
        for driver in drivers or []:
            self.register(driver)

    def register(self, driver: ResourceDriver) -> None:
        """Register a driver under its kind."""
        kind = driver.kind
        if kind in self._drivers:
            logger.warning("Overwriting existing driver: %s", kind)
        self._drivers[kind] = driver
        logger.debug("Registered driver: %s", kind)

    def get(self, kind: str) -> ResourceDriver | None:
        """Look up a driver by kind."""
        return self._drivers.get(kind)

    def kinds(self) -> list[str]:
        """All registered kinds, sorted."""
        return sorted(self._drivers)

    def schema(self, kind: str) -> ResourceSchema | None:
        driver = self._drivers.get(kind)
        return driver.schema if driver else None

    def __contains__(self, kind: str) -> bool:
        return kind in self._drivers

    def __len__(self) -> int:
        return len(self._drivers)

    def execute(
        self,
        kind: str,
        operation: Operation,
        data: ResourceData | None = None,
        *,
        config: dict[str, Any] | None = None,
        attributes: dict[str, Any] | None = None,
        resource_id: str = "",
    ) -> Receipt:
        """Run one lifecycle operation through the driver for ``kind``.

        The snapshot comes from ``data`` when given. Otherwise the driver
        builds one from cached ``attributes`` (a stored record) or from
        user ``config``, together with ``resource_id``. ``import`` only
        needs ``resource_id``.

        Returns:
            Receipt with the resulting identifier and attributes.
            Never raises.
        """
        start_time = time.monotonic()

        driver = self._drivers.get(kind)
        if driver is None:
            return Receipt.failure(
                kind=kind,
                operation=operation,
                error=f"No driver registered for '{kind}'",
                resource_id=resource_id,
            )
        if operation not in OPERATIONS:
            return Receipt.failure(
                kind=kind,
                operation=operation,
                error=f"Unsupported operation '{operation}'",
                resource_id=resource_id,
            )

        try:
            result = self._dispatch(driver, operation, data, config, attributes, resource_id)
        except ResourceError as e:
            receipt = Receipt.failure(
                kind=kind,
                operation=operation,
                error=str(e),
                resource_id=data.id if data is not None else resource_id,
            )
        except Exception as e:
            # Drivers should only raise ResourceError, but keep the table total
            logger.error("Driver %s raised during %s: %s", kind, operation, e)
            receipt = Receipt.failure(
                kind=kind,
                operation=operation,
                error=f"Unexpected error: {e}",
                resource_id=data.id if data is not None else resource_id,
            )
        else:
            if result is None:
                receipt = Receipt.success(kind=kind, operation=operation)
            else:
                receipt = Receipt.success(
                    kind=kind,
                    operation=operation,
                    resource_id=result.id,
                    attributes=result.attributes() if result.exists else {},
                )

        receipt.duration_ms = int((time.monotonic() - start_time) * 1000)
        return receipt

    def _dispatch(
        self,
        driver: ResourceDriver,
        operation: Operation,
        data: ResourceData | None,
        config: dict[str, Any] | None,
        attributes: dict[str, Any] | None,
        resource_id: str,
    ) -> ResourceData | None:
        if operation == "import":
            return driver.import_state(resource_id)

        if data is None and attributes is not None:
            data = driver.restore(attributes, resource_id)
        elif data is None:
            data = driver.new_data(config or {}, resource_id=resource_id)

        if operation == "create":
            return driver.create(data)
        if operation == "read":
            return driver.read(data)
        if operation == "update":
            return driver.update(data)
        return driver.delete(data)
