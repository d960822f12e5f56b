"""Worker thread loading the boundary and cities GeoJSON."""

import asyncio
import logging
from typing import List, Optional

from PyQt6.QtCore import QThread, pyqtSignal

from src.core.resource_loader import ResourceLoader, ResourceSlot

logger = logging.getLogger(__name__)


class ResourceLoadWorker(QThread):
    """Runs a ResourceLoader on its own event loop and reports each slot."""

    resource_loaded = pyqtSignal(str, object)  # slot name, GeoJSON dict
    resource_failed = pyqtSignal(str, str)  # slot name, error message

    def __init__(self, slots: List[ResourceSlot], parent=None):
        """
        Initialize worker.

        Args:
            slots: Slots to populate
            parent: Parent object
        """
        super().__init__(parent)
        self.slots = slots
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._loader: Optional[ResourceLoader] = None

    def run(self):
        """Load all slots; each one is reported as soon as it finishes."""
        self._loop = asyncio.new_event_loop()
        try:
            self._loop.run_until_complete(self._load())
        except Exception:
            logger.exception("Error while loading map resources")
        finally:
            self._loop.close()
            self._loop = None

    async def _load(self):
        async with ResourceLoader(self.slots) as loader:
            self._loader = loader
            await loader.load_all(on_update=self._report)
        self._loader = None

    def _report(self, slot: ResourceSlot):
        if slot.is_loaded:
            self.resource_loaded.emit(slot.name, slot.data)
        else:
            self.resource_failed.emit(slot.name, slot.error or "")

    def cancel(self):
        """Cancel outstanding loads from another thread."""
        loop = self._loop
        loader = self._loader
        if loop is not None and loader is not None and not loop.is_closed():
            loop.call_soon_threadsafe(loader.cancel)
