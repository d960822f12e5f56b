"""Best-effort asynchronous loading of the optional GeoJSON resources."""

import asyncio
import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

import aiohttp

from src.core.config import DOWNLOAD_TIMEOUT

logger = logging.getLogger(__name__)


class ResourceLoadError(Exception):
    """Raised when a resource answers with a bad status or is not GeoJSON."""


class LoadStatus(Enum):
    """Lifecycle of an optional resource."""

    NOT_LOADED = "not_loaded"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class ResourceSlot:
    """Holds one optional GeoJSON document and its load status."""

    name: str
    url: str
    status: LoadStatus = LoadStatus.NOT_LOADED
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self.status is LoadStatus.LOADED

    def mark_loaded(self, data: Dict[str, Any]):
        self.status = LoadStatus.LOADED
        self.data = data
        self.error = None

    def mark_failed(self, error: str):
        self.status = LoadStatus.FAILED
        self.data = None
        self.error = error


def is_http_url(url: str) -> bool:
    return urlparse(url).scheme in ("http", "https")


def _local_path(url: str) -> Path:
    """Convert a plain path or file:// URL to a filesystem path."""
    parsed = urlparse(url)
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    return Path(url)


def parse_geojson(text: Union[str, bytes], source: str) -> Dict[str, Any]:
    """
    Parse and sanity-check a GeoJSON document.

    Args:
        text: Raw document (bytes are decoded as UTF-8)
        source: Where it came from (for error messages)

    Returns:
        Parsed GeoJSON object

    Raises:
        ResourceLoadError: If the document is not UTF-8 JSON with a type member
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ResourceLoadError(f"Not UTF-8 encoded: {source}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResourceLoadError(f"Invalid JSON in {source}: {e}") from e

    if not isinstance(data, dict) or "type" not in data:
        raise ResourceLoadError(f"Not a GeoJSON object: {source}")
    return data


class ResourceLoader:
    """Loads resource slots concurrently; each slot succeeds or fails on its own."""

    def __init__(self, slots: List[ResourceSlot], timeout: float = DOWNLOAD_TIMEOUT):
        """
        Initialize resource loader.

        Args:
            slots: Slots to populate
            timeout: Total timeout per HTTP request in seconds
        """
        self.slots = slots
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None
        self._tasks: List[asyncio.Task] = []

    async def __aenter__(self):
        """Async context manager entry."""
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.session:
            await self.session.close()

    async def fetch(self, url: str) -> Dict[str, Any]:
        """
        Fetch a GeoJSON document over HTTP or from disk.

        Args:
            url: HTTP(S) URL, file:// URL or local path

        Returns:
            Parsed GeoJSON object

        Raises:
            ResourceLoadError: On non-200 status or malformed content
            aiohttp.ClientError: On connection failures
            OSError: If a local file cannot be read
        """
        if is_http_url(url):
            async with self.session.get(url) as response:
                if response.status != 200:
                    raise ResourceLoadError(f"HTTP error! status: {response.status}")
                body = await response.read()
            return parse_geojson(body, url)

        path = _local_path(url)
        body = await asyncio.to_thread(path.read_bytes)
        return parse_geojson(body, str(path))

    async def load(self, slot: ResourceSlot) -> ResourceSlot:
        """
        Load a single slot, recording success or failure on it.

        Args:
            slot: Slot to populate

        Returns:
            The same slot, updated
        """
        try:
            data = await self.fetch(slot.url)
        except (ResourceLoadError, aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            logger.error(f"Error loading {slot.name} GeoJSON from {slot.url}: {e}")
            slot.mark_failed(str(e) or type(e).__name__)
        else:
            slot.mark_loaded(data)
            logger.info(f"Loaded {slot.name} GeoJSON: {len(data.get('features', []))} features")
        return slot

    async def load_all(self, on_update: Optional[Callable[[ResourceSlot], None]] = None) -> List[ResourceSlot]:
        """
        Load every slot concurrently.

        Args:
            on_update: Optional callback invoked as soon as each slot finishes

        Returns:
            The slots, in their original order
        """

        async def load_and_report(slot: ResourceSlot):
            await self.load(slot)
            if on_update:
                on_update(slot)

        self._tasks = [asyncio.create_task(load_and_report(slot)) for slot in self.slots]
        results = await asyncio.gather(*self._tasks, return_exceptions=True)

        for slot, result in zip(self.slots, results):
            if isinstance(result, asyncio.CancelledError):
                logger.debug(f"Loading {slot.name} cancelled")
            elif isinstance(result, Exception):
                logger.error(f"Unexpected error loading {slot.name}: {result}")

        return self.slots

    def cancel(self):
        """Cancel outstanding loads; cancelled slots stay NOT_LOADED."""
        for task in self._tasks:
            if not task.done():
                task.cancel()


def build_resource_slots(boundary_url: str, cities_url: str) -> List[ResourceSlot]:
    """Create the boundary and cities slots."""
    return [
        ResourceSlot(name="boundary", url=boundary_url),
        ResourceSlot(name="cities", url=cities_url),
    ]
