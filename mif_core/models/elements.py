"""OSM element data models used across the two passes."""
from dataclasses import dataclass, field
from typing import List, Tuple

# (latitude, longitude)
Coordinate = Tuple[float, float]


@dataclass
class TurnRestriction:
    """Turn restriction relation captured during the index pass.

    A relation is only kept when it is tagged ``type=restriction``, every
    node and way member carries one of the via/from/to roles on the right
    member type, and the from, to and via members were all observed.
    Relation members are ignored.
    """
    id: int
    from_way_ids: List[int] = field(default_factory=list)
    to_way_id: int = -1
    via_node_id: int = -1
    is_restriction: bool = False
    has_foreign_member: bool = False

    def add_member(self, member_type: str, ref: int, role: str) -> None:
        """Record a relation member by its type and role.

        Args:
            member_type: 'node', 'way' or 'relation'
            ref: Referenced element ID
            role: Member role
        """
        if member_type == 'node' and role == 'via':
            self.via_node_id = ref
        elif member_type == 'way' and role == 'from':
            self.from_way_ids.append(ref)
        elif member_type == 'way' and role == 'to':
            self.to_way_id = ref
        elif member_type in ('node', 'way'):
            self.has_foreign_member = True

    @property
    def is_complete(self) -> bool:
        """Check that from, to and via members were all observed."""
        return (len(self.from_way_ids) > 0 and
                self.to_way_id >= 0 and
                self.via_node_id >= 0)

    @property
    def is_indexable(self) -> bool:
        """Check if this relation should be kept in the restriction index."""
        return (self.is_restriction and
                not self.has_foreign_member and
                self.is_complete)


@dataclass
class WaySegment:
    """Part of a way between two cut points.

    ``end_index`` is the position of the segment's last node in the way's
    node list. ``start_cut_index`` is the position of its first node when
    that node closed the previous segment, or -1 for a way's first segment.
    """
    way_id: int
    coordinates: List[Coordinate]
    end_index: int
    start_cut_index: int = -1

    @property
    def point_count(self) -> int:
        return len(self.coordinates)
