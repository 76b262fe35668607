"""Way segmentation at junction nodes."""
from typing import Iterator

from mif_core.index.entity_index import EntityIndex
from mif_core.models.elements import WaySegment


class WaySegmenter:
    """Cuts a way's geometry into segments at junction nodes.

    A junction is a node referenced more than once across all ways. Only
    nodes with known coordinates take part; missing nodes are left out of
    the geometry without breaking it. Consecutive segments share their
    boundary coordinate.
    """

    def __init__(self, index: EntityIndex):
        self.index = index

    def is_junction(self, node_id: int) -> bool:
        return self.index.usage_count(node_id) > 1

    def segments(self, way_id: int, break_up: bool = True) -> Iterator[WaySegment]:
        """Yield the segments of a way.

        Args:
            way_id: Way to segment
            break_up: Cut at junctions; if False only the way's end is a cut

        Yields:
            WaySegment objects with at least two coordinates each
        """
        resolved = self.index.resolve_way(way_id)
        if len(resolved) < 2:
            return

        last_index = resolved[-1][0]
        coordinates = []
        start_cut_index = -1

        for index, node_id, coord in resolved:
            coordinates.append(coord)
            if len(coordinates) < 2:
                continue

            if index == last_index or (break_up and self.is_junction(node_id)):
                yield WaySegment(
                    way_id=way_id,
                    coordinates=coordinates,
                    end_index=index,
                    start_cut_index=start_cut_index
                )
                coordinates = [coord]
                start_cut_index = index
