"""Geographic bounding box filter."""
from typing import Dict


class BoundingBoxFilter:
    """Handles geographic bounding box filtering."""

    def __init__(self, min_lat: float, min_lon: float,
                 max_lat: float, max_lon: float):
        """Initialize bounding box.

        Args:
            min_lat: Minimum latitude
            min_lon: Minimum longitude
            max_lat: Maximum latitude
            max_lon: Maximum longitude
        """
        self.min_lat = min_lat
        self.min_lon = min_lon
        self.max_lat = max_lat
        self.max_lon = max_lon

    def contains(self, lat: float, lon: float) -> bool:
        """Check if a point is within the bounding box (bounds inclusive).

        Args:
            lat: Point latitude
            lon: Point longitude

        Returns:
            True if point is within bounds
        """
        return (self.min_lat <= lat <= self.max_lat and
                self.min_lon <= lon <= self.max_lon)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {
            'min_lat': self.min_lat,
            'min_lon': self.min_lon,
            'max_lat': self.max_lat,
            'max_lon': self.max_lon
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> 'BoundingBoxFilter':
        """Create from dictionary."""
        return cls(d['min_lat'], d['min_lon'], d['max_lat'], d['max_lon'])

    def __repr__(self) -> str:
        return (f"BoundingBoxFilter(lat {self.min_lat}..{self.max_lat}, "
                f"lon {self.min_lon}..{self.max_lon})")
