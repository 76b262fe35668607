"""In-memory indices built by the index pass and read by the emit pass."""
from typing import Dict, List, Optional, Tuple

from mif_core.models.elements import Coordinate, TurnRestriction


class EntityIndex:
    """Node coordinates, node usage counts, way node lists and restrictions.

    Relations are owned by a single table keyed by relation ID; the
    from-way index only holds relation IDs.
    """

    def __init__(self):
        self.node_coordinates: Dict[int, Coordinate] = {}
        self.node_usage: Dict[int, int] = {}
        self.way_nodes: Dict[int, List[int]] = {}
        self.relations: Dict[int, TurnRestriction] = {}
        self.relations_by_from_way: Dict[int, List[int]] = {}

    # === Building ===

    def add_node(self, node_id: int, lat: float, lon: float) -> None:
        """Store a retained node's coordinates."""
        self.node_coordinates[node_id] = (lat, lon)
        self.node_usage.setdefault(node_id, 0)

    def start_way(self, way_id: int) -> List[int]:
        """Get the node list a way's references are appended to."""
        return self.way_nodes.setdefault(way_id, [])

    def add_way_node(self, way_id: int, node_id: int) -> None:
        """Append a node reference to a way and count the node's usage.

        A node referenced twice by the same way is counted twice.
        """
        self.start_way(way_id).append(node_id)
        self.node_usage[node_id] = self.node_usage.get(node_id, 0) + 1

    def add_relation(self, relation: TurnRestriction) -> bool:
        """Index a restriction under every one of its from-ways.

        Args:
            relation: Relation captured by the index pass

        Returns:
            True if the relation was indexed, False if it was discarded
        """
        if not relation.is_indexable:
            return False
        self.relations[relation.id] = relation
        for way_id in relation.from_way_ids:
            bucket = self.relations_by_from_way.setdefault(way_id, [])
            if relation.id not in bucket:
                bucket.append(relation.id)
        return True

    # === Lookup ===

    def coordinate(self, node_id: int) -> Optional[Coordinate]:
        return self.node_coordinates.get(node_id)

    def usage_count(self, node_id: int) -> int:
        """Number of way references to a node."""
        return self.node_usage.get(node_id, 0)

    def nodes_of(self, way_id: int) -> List[int]:
        """Ordered node IDs of a way (empty if the way was never seen)."""
        return self.way_nodes.get(way_id, [])

    def relations_from(self, way_id: int) -> List[TurnRestriction]:
        """Restrictions whose from-way is the given way."""
        return [self.relations[rid] for rid in self.relations_by_from_way.get(way_id, [])]

    def resolve_way(self, way_id: int) -> List[Tuple[int, int, Coordinate]]:
        """Resolve a way's nodes to coordinates.

        Returns:
            (index in way, node ID, (lat, lon)) for every node with known
            coordinates, in way order
        """
        resolved = []
        for index, node_id in enumerate(self.nodes_of(way_id)):
            coord = self.node_coordinates.get(node_id)
            if coord is not None:
                resolved.append((index, node_id, coord))
        return resolved

    @property
    def node_count(self) -> int:
        return len(self.node_coordinates)

    @property
    def way_count(self) -> int:
        return len(self.way_nodes)

    @property
    def relation_count(self) -> int:
        return len(self.relations)

    def __repr__(self) -> str:
        return (f"EntityIndex(nodes={self.node_count}, ways={self.way_count}, "
                f"restrictions={self.relation_count})")
