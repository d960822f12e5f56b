"""Data model for geographic extents."""

from dataclasses import dataclass
from typing import Dict

from src.core.config import DRC_REGION_BOUNDS, Bounds


@dataclass(frozen=True)
class Extent:
    """Geographic extent defined by lat/lon bounds."""

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def is_valid(self) -> bool:
        """
        Check if extent has valid bounds.

        Returns:
            True if min values are less than max values
        """
        return (self.min_lon < self.max_lon and
                self.min_lat < self.max_lat and
                -180 <= self.min_lon <= 180 and
                -180 <= self.max_lon <= 180 and
                -90 <= self.min_lat <= 90 and
                -90 <= self.max_lat <= 90)

    @property
    def center(self) -> tuple[float, float]:
        """Center of the extent as (lat, lon)."""
        return (
            (self.min_lat + self.max_lat) / 2,
            (self.min_lon + self.max_lon) / 2,
        )

    def to_leaflet_bounds(self) -> Bounds:
        """
        Convert to Leaflet's [[south, west], [north, east]] ordering.

        Returns:
            Tuple of southwest and northeast (lat, lon) corners
        """
        return ((self.min_lat, self.min_lon), (self.max_lat, self.max_lon))

    @classmethod
    def from_leaflet_bounds(cls, bounds: Bounds) -> 'Extent':
        """
        Create extent from Leaflet-style corner pairs.

        Args:
            bounds: ((south, west), (north, east))

        Returns:
            Extent instance
        """
        (south, west), (north, east) = bounds
        return cls(min_lon=west, min_lat=south, max_lon=east, max_lat=north)

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> 'Extent':
        """
        Create extent from dictionary.

        Args:
            data: Dictionary with min_lon, min_lat, max_lon, max_lat keys

        Returns:
            Extent instance
        """
        return cls(
            min_lon=data['min_lon'],
            min_lat=data['min_lat'],
            max_lon=data['max_lon'],
            max_lat=data['max_lat'],
        )


DRC_EXTENT = Extent.from_dict(DRC_REGION_BOUNDS)
