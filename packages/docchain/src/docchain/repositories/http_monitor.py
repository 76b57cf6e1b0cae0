"""HttpMonitor repository - typed wrapper over a DocumentCollection"""

import logging

from ..collection import DocumentCollection
from ..errors import InvalidArgumentError
from .models import HttpMonitor, HttpMonitorId

logger = logging.getLogger(__name__)


class HttpMonitorRepository:
    """Stores HttpMonitor documents keyed by their id"""

    def __init__(self, collection: DocumentCollection[HttpMonitor]):
        self.collection = collection

    async def get(self, id: HttpMonitorId) -> HttpMonitor | None:
        """Get a monitor by id, or None if it does not exist"""
        return await self.collection.get(self._key(id))

    async def put(self, http_monitor: HttpMonitor | None) -> None:
        """Create or replace a monitor"""
        if http_monitor is None:
            raise InvalidArgumentError("http_monitor", "Cannot put a None monitor")
        await self.collection.put(self._key(http_monitor.id), http_monitor)

    async def delete(self, id: HttpMonitorId) -> None:
        """Delete a monitor. Deleting an unknown id is not an error."""
        await self.collection.delete(self._key(id))

    @staticmethod
    def _key(id: HttpMonitorId) -> str:
        if not isinstance(id, HttpMonitorId):
            raise InvalidArgumentError("id", f"Expected HttpMonitorId, got {type(id).__name__}")
        return str(id)
