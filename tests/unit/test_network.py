"""Tests for way segmentation, turn angles and restriction resolution."""
import pytest

from mif_core.index.entity_index import EntityIndex
from mif_core.models.elements import TurnRestriction, WaySegment
from mif_core.models.statistics import ConversionStats
from mif_core.network.segmenter import WaySegmenter
from mif_core.network.turn_restrictions import TurnRestrictionResolver
from mif_core.utils.geo_utils import (
    ensure_winding_order, get_signed_area, is_right_turn, normalize_angle,
    signed_turn_angle
)

NORTH_FROM = (0.0, 0.0)
VIA = (1.0, 0.0)
EAST = (1.0, 1.0)
WEST = (1.0, -1.0)


def make_index(nodes, ways):
    """Build an index from {node_id: (lat, lon)} and {way_id: [node_ids]}."""
    index = EntityIndex()
    for node_id, (lat, lon) in nodes.items():
        index.add_node(node_id, lat, lon)
    for way_id, node_ids in ways.items():
        for node_id in node_ids:
            index.add_way_node(way_id, node_id)
    return index


def add_restriction(index, relation_id, from_way, via, to_way):
    relation = TurnRestriction(id=relation_id, from_way_ids=[from_way],
                               to_way_id=to_way, via_node_id=via,
                               is_restriction=True)
    index.add_relation(relation)
    return relation


class TestTurnAngles:
    """Tests for signed turn angle classification."""

    def test_north_then_east_is_right(self):
        """Test heading north then east turns right."""
        assert signed_turn_angle(NORTH_FROM, VIA, VIA, EAST) == pytest.approx(-90.0)
        assert is_right_turn(NORTH_FROM, VIA, VIA, EAST) is True

    def test_north_then_west_is_not_right(self):
        """Test heading north then west turns left."""
        assert signed_turn_angle(NORTH_FROM, VIA, VIA, WEST) == pytest.approx(90.0)
        assert is_right_turn(NORTH_FROM, VIA, VIA, WEST) is False

    def test_straight_on_is_not_right(self):
        """Test continuing straight is not a right turn."""
        assert is_right_turn(NORTH_FROM, VIA, VIA, (2.0, 0.0)) is False

    def test_reversal_is_not_right(self):
        """Test turning back is not a right turn."""
        assert signed_turn_angle(NORTH_FROM, VIA, VIA, NORTH_FROM) == pytest.approx(180.0)
        assert is_right_turn(NORTH_FROM, VIA, VIA, NORTH_FROM) is False

    def test_angle_wraps(self):
        """Test angles crossing the -x axis are normalised."""
        # Heading west-south-west, then north-west: a right turn
        angle = signed_turn_angle((0.0, 0.0), (-0.1, -1.0), (-0.1, -1.0), (0.9, -2.0))
        assert -180.0 < angle < 0.0

    @pytest.mark.parametrize('raw,expected', [
        (0.0, 0.0),
        (270.0, -90.0),
        (-270.0, 90.0),
        (180.0, 180.0),
        (-180.0, 180.0),
        (540.0, 180.0),
    ])
    def test_normalize_angle(self, raw, expected):
        """Test normalisation into (-180, 180]."""
        assert normalize_angle(raw) == pytest.approx(expected)


class TestWindingOrder:
    """Tests for ring winding helpers."""

    def test_signed_area(self):
        """Test counter-clockwise rings have positive area."""
        ring = [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]
        assert get_signed_area(ring) == pytest.approx(1.0)

    def test_ensure_clockwise(self):
        """Test counter-clockwise rings are reversed to clockwise."""
        ring = [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]
        result = ensure_winding_order(ring, 'cw')
        assert get_signed_area(result) < 0


class TestWaySegmenter:
    """Tests for WaySegmenter class."""

    NODES = {1: (0.0, 0.0), 2: (0.0, 1.0), 3: (0.0, 2.0), 4: (0.0, 3.0), 9: (1.0, 1.0)}

    def test_cut_at_junction(self):
        """Test [A,B,C,D] with shared B yields [A,B] and [B,C,D]."""
        index = make_index(self.NODES, {10: [1, 2, 3, 4], 20: [2, 9]})
        segments = list(WaySegmenter(index).segments(10))
        assert [s.coordinates for s in segments] == [
            [(0.0, 0.0), (0.0, 1.0)],
            [(0.0, 1.0), (0.0, 2.0), (0.0, 3.0)],
        ]
        assert [(s.start_cut_index, s.end_index) for s in segments] == [(-1, 1), (1, 3)]

    def test_breakup_suppressed(self):
        """Test suppressed breakup yields the whole way."""
        index = make_index(self.NODES, {10: [1, 2, 3, 4], 20: [2, 9]})
        segments = list(WaySegmenter(index).segments(10, break_up=False))
        assert len(segments) == 1
        assert segments[0].point_count == 4
        assert segments[0].end_index == 3

    def test_junction_at_first_node_does_not_cut(self):
        """Test a shared first node does not produce a one-point segment."""
        index = make_index(self.NODES, {10: [2, 3, 4], 20: [2, 9]})
        segments = list(WaySegmenter(index).segments(10))
        assert len(segments) == 1
        assert segments[0].point_count == 3

    def test_junction_at_last_node(self):
        """Test a shared last node closes a single segment."""
        index = make_index(self.NODES, {10: [1, 2, 3], 20: [3, 9]})
        segments = list(WaySegmenter(index).segments(10))
        assert len(segments) == 1
        assert segments[0].end_index == 2

    def test_missing_nodes_are_skipped(self):
        """Test nodes without coordinates are left out of the geometry."""
        index = make_index(self.NODES, {10: [1, 5, 3, 4]})
        segments = list(WaySegmenter(index).segments(10))
        assert len(segments) == 1
        assert segments[0].coordinates == [(0.0, 0.0), (0.0, 2.0), (0.0, 3.0)]

    def test_trailing_missing_node(self):
        """Test the last resolved node closes the way."""
        index = make_index(self.NODES, {10: [1, 2, 6]})
        segments = list(WaySegmenter(index).segments(10))
        assert len(segments) == 1
        assert segments[0].end_index == 1

    def test_too_short(self):
        """Test ways with fewer than two known nodes yield nothing."""
        index = make_index(self.NODES, {10: [1, 7, 8], 11: []})
        segmenter = WaySegmenter(index)
        assert list(segmenter.segments(10)) == []
        assert list(segmenter.segments(11)) == []
        assert list(segmenter.segments(99)) == []

    def test_closed_way(self):
        """Test a closed way yields one ring segment."""
        nodes = {1: (0.0, 0.0), 2: (0.0, 1.0), 3: (1.0, 1.0)}
        index = make_index(nodes, {10: [1, 2, 3, 1]})
        segments = list(WaySegmenter(index).segments(10))
        # Node 1 is a junction but only opens and closes the ring
        assert len(segments) == 1
        assert segments[0].point_count == 4

    def test_segments_share_boundary(self):
        """Test consecutive segments share exactly one coordinate."""
        index = make_index(self.NODES, {10: [1, 2, 3, 4], 20: [2, 9], 30: [3, 9]})
        segments = list(WaySegmenter(index).segments(10))
        assert len(segments) == 3
        for first, second in zip(segments, segments[1:]):
            assert first.coordinates[-1] == second.coordinates[0]
        total = sum(s.point_count for s in segments) - (len(segments) - 1)
        assert total == 4


class TestTurnRestrictionResolver:
    """Tests for TurnRestrictionResolver class."""

    NODES = {1: NORTH_FROM, 2: VIA, 3: EAST, 4: WEST, 5: (2.0, 0.0)}

    def test_right_turn_banned(self):
        """Test a right-turn restriction is reported at the segment end."""
        index = make_index(self.NODES, {10: [1, 2], 20: [2, 3]})
        add_restriction(index, 500, 10, 2, 20)
        resolver = TurnRestrictionResolver(index)
        assert resolver.banned_turns(10, 1) == [20]

    def test_left_turn_not_banned(self):
        """Test a left-turn restriction is not reported."""
        index = make_index(self.NODES, {10: [1, 2], 30: [2, 4]})
        add_restriction(index, 501, 10, 2, 30)
        assert TurnRestrictionResolver(index).banned_turns(10, 1) == []

    def test_via_node_must_match_cut(self):
        """Test restrictions at other nodes are ignored."""
        index = make_index(self.NODES, {10: [1, 2], 20: [2, 3]})
        add_restriction(index, 500, 10, 3, 20)
        assert TurnRestrictionResolver(index).banned_turns(10, 1) == []

    def test_to_way_edge_uses_following_node(self):
        """Test the to-way edge runs to the node after the via node."""
        index = make_index(self.NODES, {20: [2, 3, 4]})
        relation = TurnRestriction(id=1, from_way_ids=[10], to_way_id=20, via_node_id=2)
        assert TurnRestrictionResolver(index).to_way_edge(relation) == (2, 3)

    def test_to_way_edge_falls_back_to_preceding_node(self):
        """Test a via node at the end of the to-way uses its predecessor."""
        index = make_index(self.NODES, {20: [3, 2]})
        relation = TurnRestriction(id=1, from_way_ids=[10], to_way_id=20, via_node_id=2)
        assert TurnRestrictionResolver(index).to_way_edge(relation) == (2, 3)

    def test_to_way_edge_no_neighbour(self):
        """Test a via node that is the to-way's only node has no edge."""
        index = make_index(self.NODES, {20: [2]})
        relation = TurnRestriction(id=1, from_way_ids=[10], to_way_id=20, via_node_id=2)
        assert TurnRestrictionResolver(index).to_way_edge(relation) is None

    def test_to_way_edge_via_absent(self):
        """Test a to-way not passing through the via node has no edge."""
        index = make_index(self.NODES, {20: [3, 4]})
        relation = TurnRestriction(id=1, from_way_ids=[10], to_way_id=20, via_node_id=2)
        assert TurnRestrictionResolver(index).to_way_edge(relation) is None

    def test_look_ahead_uses_following_edge(self):
        """Test the start check uses the edge from the next node back to the cut."""
        # Way 10 runs south from node 5 through the via node 2 to node 1.
        # Leaving 2 back towards 5 means arriving southbound; east is a left
        # turn and west a right turn.
        index = make_index(self.NODES, {10: [5, 2, 1], 20: [2, 3], 30: [2, 4]})
        add_restriction(index, 500, 10, 2, 20)
        add_restriction(index, 501, 10, 2, 30)
        resolver = TurnRestrictionResolver(index)
        # Arriving at 2 from 5 heading south: west is a right turn
        assert resolver.banned_turns(10, 1) == [30]
        # Arriving at 2 from 1 heading north: east is a right turn
        assert resolver.banned_turns(10, 1, look_ahead=True) == [20]

    def test_look_ahead_skipped_for_first_segment(self):
        """Test no start check is made without a start cut."""
        index = make_index(self.NODES, {10: [1, 2]})
        assert TurnRestrictionResolver(index).banned_turns(10, -1, look_ahead=True) == []

    def test_missing_coordinate_skipped(self):
        """Test restrictions with unknown coordinates are skipped silently."""
        index = make_index({1: NORTH_FROM, 2: VIA}, {10: [1, 2], 20: [2, 3]})
        add_restriction(index, 500, 10, 2, 20)
        assert TurnRestrictionResolver(index).banned_turns(10, 1) == []

    def test_annotate_joins_both_ends(self):
        """Test the annotation combines end and start checks."""
        index = make_index(self.NODES, {10: [5, 2, 1], 20: [2, 3], 30: [2, 4]})
        add_restriction(index, 500, 10, 2, 20)
        add_restriction(index, 501, 10, 2, 30)
        resolver = TurnRestrictionResolver(index)
        first = WaySegment(way_id=10, coordinates=[(2.0, 0.0), VIA], end_index=1)
        second = WaySegment(way_id=10, coordinates=[VIA, NORTH_FROM], end_index=2,
                            start_cut_index=1)
        assert resolver.annotate(first) == '30'
        assert resolver.annotate(second) == '20'

    def test_annotate_multiple(self):
        """Test several banned turns are joined with semicolons."""
        nodes = dict(self.NODES)
        nodes[6] = (0.5, 1.0)
        index = make_index(nodes, {10: [1, 2], 20: [2, 3], 40: [2, 6]})
        add_restriction(index, 500, 10, 2, 20)
        add_restriction(index, 502, 10, 2, 40)
        segment = WaySegment(way_id=10, coordinates=[NORTH_FROM, VIA], end_index=1)
        assert TurnRestrictionResolver(index).annotate(segment) == '20;40'

    def test_stats_counted(self):
        """Test found and written restrictions are counted."""
        index = make_index(self.NODES, {10: [1, 2], 20: [2, 3], 30: [2, 4]})
        add_restriction(index, 500, 10, 2, 20)
        add_restriction(index, 501, 10, 2, 30)
        stats = ConversionStats()
        TurnRestrictionResolver(index, stats).banned_turns(10, 1)
        assert stats.restrictions_found == 2
        assert stats.restrictions_written == 1
