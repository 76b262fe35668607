"""Turn restriction resolution at segment boundaries.

A restriction relation names a from-way, a via node and a to-way. When a
segment of the from-way ends (or starts) at the via node, the maneuver
into the to-way is classified with the signed angle between the edge of
the from-way arriving at the via node and the to-way's edge leaving it.
Right turns are written to the segment's restriction annotation.
"""
from typing import List, Optional, Tuple

from mif_core.index.entity_index import EntityIndex
from mif_core.models.elements import TurnRestriction, WaySegment
from mif_core.models.statistics import ConversionStats
from mif_core.utils.geo_utils import is_right_turn

RESTRICTION_SEPARATOR = ';'


class TurnRestrictionResolver:
    """Finds banned right turns for the segments of a way."""

    def __init__(self, index: EntityIndex, stats: Optional[ConversionStats] = None):
        self.index = index
        self.stats = stats if stats is not None else ConversionStats()

    def to_way_edge(self, relation: TurnRestriction) -> Optional[Tuple[int, int]]:
        """Locate the to-way's edge leaving the via node.

        The first occurrence of the via node in the to-way is used: the edge
        runs to the following node if there is one, otherwise to the
        preceding node.

        Returns:
            (via node ID, neighbour node ID), or None if the via node is not
            part of the to-way or has no neighbour there
        """
        nodes = self.index.nodes_of(relation.to_way_id)
        via = relation.via_node_id
        for i, node_id in enumerate(nodes):
            if node_id != via:
                continue
            if i < len(nodes) - 1:
                return via, nodes[i + 1]
            if i > 0:
                return via, nodes[i - 1]
            return None
        return None

    def banned_turns(self, way_id: int, cut_index: int,
                     look_ahead: bool = False) -> List[int]:
        """To-way IDs of restrictions that ban a right turn at a cut node.

        Args:
            way_id: The from-way
            cut_index: Index in the way's node list of the cut node
            look_ahead: Use the edge from the following node back to the cut
                node instead of the edge from the preceding node

        Returns:
            To-way IDs in relation order
        """
        if cut_index < 0:
            return []
        nodes = self.index.nodes_of(way_id)
        if cut_index >= len(nodes):
            return []

        junction = nodes[cut_index]
        if look_ahead:
            if cut_index >= len(nodes) - 1:
                return []
            approach = nodes[cut_index + 1]
        else:
            if cut_index == 0:
                return []
            approach = nodes[cut_index - 1]

        banned = []
        for relation in self.index.relations_from(way_id):
            if relation.via_node_id != junction:
                continue
            self.stats.restrictions_found += 1

            edge = self.to_way_edge(relation)
            if edge is None:
                continue
            coords = [self.index.coordinate(n) for n in (approach, junction) + edge]
            if any(c is None for c in coords):
                continue

            if is_right_turn(*coords):
                banned.append(relation.to_way_id)
                self.stats.restrictions_written += 1
        return banned

    def annotate(self, segment: WaySegment) -> str:
        """Build the restriction annotation for a segment.

        Combines the turns banned when arriving at the segment's end node
        with those banned when leaving the segment back through its start
        node (if that start was itself a cut).

        Returns:
            Semicolon-separated to-way IDs, possibly empty
        """
        banned = self.banned_turns(segment.way_id, segment.end_index)
        banned += self.banned_turns(segment.way_id, segment.start_cut_index,
                                    look_ahead=True)
        return RESTRICTION_SEPARATOR.join(str(way_id) for way_id in banned)
