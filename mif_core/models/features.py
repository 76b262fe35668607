"""Output record data model."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from mif_core.models.elements import Coordinate

REGION_TYPES = ('region',)


@dataclass
class MifRecord:
    """One geometry block plus its attribute row.

    Coordinates are (lat, lon) pairs; writers put longitude first.
    """
    way_id: int
    geometry_type: str  # 'Pline' or 'Region'
    style: str
    coordinates: List[Coordinate]
    values: Dict[str, str] = field(default_factory=dict)
    restrictions: Optional[str] = None

    @property
    def is_region(self) -> bool:
        """Check if this record is a closed region rather than a polyline."""
        return self.geometry_type.lower() in REGION_TYPES

    @property
    def point_count(self) -> int:
        return len(self.coordinates)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a simple dictionary representation."""
        return {
            'way_id': self.way_id,
            'geometry_type': self.geometry_type,
            'style': self.style,
            'coordinates': [[lon, lat] for lat, lon in self.coordinates],
            'values': dict(self.values),
            'restrictions': self.restrictions,
        }
