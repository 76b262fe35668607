"""Index pass: read nodes, ways and restriction relations into an EntityIndex."""
from typing import Callable, Optional

from mif_core.index.entity_index import EntityIndex
from mif_core.models.elements import TurnRestriction
from mif_core.models.statistics import ConversionStats
from mif_core.parsing.element_reader import OSMElementHandler
from mif_core.rules.bbox import BoundingBoxFilter

RESTRICTION_TYPE = 'restriction'


class IndexBuilder(OSMElementHandler):
    """SAX handler for the first pass over the input.

    Keeps the coordinates of every node inside the bounding box, the node
    list of every way, and (when enabled) every complete turn restriction.
    Nothing is written during this pass.
    """

    def __init__(self, index: EntityIndex,
                 bbox: Optional[BoundingBoxFilter] = None,
                 process_relations: bool = True,
                 stats: Optional[ConversionStats] = None,
                 progress: Optional[Callable[[str, int], None]] = None,
                 progress_interval: int = 100000):
        super().__init__()
        self.index = index
        self.bbox = bbox
        self.process_relations = process_relations
        self.stats = stats if stats is not None else ConversionStats()
        self.progress = progress
        self.progress_interval = progress_interval

        self._current_way: Optional[int] = None
        self._current_relation: Optional[TurnRestriction] = None

    def on_node(self, attrs) -> None:
        node_id = self.int_attr(attrs, 'id', 'numeric node ID')
        self.stats.nodes_read += 1

        if 'lat' in attrs and 'lon' in attrs:
            lat = self.float_attr(attrs, 'lat', 'latitude')
            lon = self.float_attr(attrs, 'lon', 'longitude')
            if self.bbox is None or self.bbox.contains(lat, lon):
                self.index.add_node(node_id, lat, lon)
                self.stats.nodes_retained += 1

        if self.progress and self.stats.nodes_read % self.progress_interval == 0:
            self.progress('nodes', self.stats.nodes_read)

    def on_way_start(self, attrs) -> None:
        self._current_way = self.int_attr(attrs, 'id', 'numeric way ID')
        self.index.start_way(self._current_way)

    def on_node_ref(self, attrs) -> None:
        if self._current_way is None:
            return
        node_id = self.int_attr(attrs, 'ref', 'numeric node ID')
        self.index.add_way_node(self._current_way, node_id)

    def on_way_end(self) -> None:
        self._current_way = None

    def on_relation_start(self, attrs) -> None:
        self.stats.relations_read += 1
        if not self.process_relations:
            return
        relation_id = self.int_attr(attrs, 'id', 'numeric relation ID')
        self._current_relation = TurnRestriction(id=relation_id)

    def on_member(self, attrs) -> None:
        if self._current_relation is None:
            return
        ref = self.int_attr(attrs, 'ref', 'numeric relation member ID')
        self._current_relation.add_member(
            attrs.get('type', ''), ref, attrs.get('role', '')
        )

    def on_tag(self, key: str, value: str) -> None:
        if self._current_relation is not None and key == 'type':
            self._current_relation.is_restriction = value == RESTRICTION_TYPE

    def on_relation_end(self) -> None:
        if self._current_relation is None:
            return
        if self.index.add_relation(self._current_relation):
            self.stats.relations_indexed += 1
        self._current_relation = None
