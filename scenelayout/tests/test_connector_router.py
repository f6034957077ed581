"""Tests for positioned geometry and edge routing."""

import dataclasses

import pytest

from scenelayout.dsl.schema import EdgeDatum
from scenelayout.engine.connector_router import AnchorMode, EdgeRouter, facing_anchors
from scenelayout.engine.positioned import DiagramLayout, Point, RoutedEdge


class TestPositionedNode:
    """Tests for PositionedNode geometry."""

    def test_edges_and_center(self, make_node) -> None:
        """Test derived edges and centre."""
        node = make_node("a", 100, 50, width=120, height=60)
        assert node.right == 220
        assert node.bottom == 110
        assert node.center == Point(160, 80)

    def test_move_center_to(self, make_node) -> None:
        """Test centring a node on a point."""
        node = make_node("a", 0, 0)
        node.move_center_to(500, 300)
        assert (node.x, node.y) == (440, 270)

    def test_overlap_detection(self, make_node) -> None:
        """Test intersecting boxes overlap."""
        assert make_node("a", 0, 0).overlaps(make_node("b", 100, 40))

    def test_touching_is_not_overlap(self, make_node) -> None:
        """Test boxes sharing an edge do not overlap."""
        a = make_node("a", 0, 0)
        assert not a.overlaps(make_node("b", 120, 0))
        assert not a.overlaps(make_node("c", 0, 60))

    def test_overlap_needs_both_axes(self, make_node) -> None:
        """Test horizontal overlap alone is not enough."""
        assert not make_node("a", 0, 0).overlaps(make_node("b", 50, 200))


class TestDiagramLayout:
    """Tests for DiagramLayout helpers."""

    def test_bounds(self, make_node) -> None:
        """Test the bounding extent covers every node."""
        layout = DiagramLayout(nodes=[make_node("a", 10, 20), make_node("b", 300, 400)])
        bounds = layout.bounds()
        assert (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y) == (10, 20, 420, 460)
        assert bounds.width == 410

    def test_empty_bounds(self) -> None:
        """Test an empty layout has zero bounds."""
        assert DiagramLayout().bounds().width == 0

    def test_validate_reports_duplicates(self, make_node) -> None:
        """Test structural validation flags duplicate ids."""
        layout = DiagramLayout(nodes=[make_node("a", 0, 0), make_node("a", 300, 0)])
        assert any("Duplicate" in w for w in layout.validate())

    def test_to_dict(self, make_node) -> None:
        """Test the plain-data view."""
        layout = DiagramLayout(
            nodes=[make_node("a", 0, 0)],
            edges=[RoutedEdge(source="a", target="b")],
        )
        data = layout.to_dict()
        assert data["nodes"][0]["id"] == "a"
        assert data["edges"][0]["points"] == []

    def test_point_is_plain_value(self) -> None:
        """Test points compare by value and cannot be mutated."""
        point = Point(1, 2)
        assert point == Point(1.0, 2.0)
        assert dataclasses.asdict(point) == {"x": 1, "y": 2}
        with pytest.raises(dataclasses.FrozenInstanceError):
            point.x = 5


class TestEdgeRouter:
    """Tests for EdgeRouter."""

    def test_center_route(self, make_node) -> None:
        """Test centre mode connects the two box centres."""
        router = EdgeRouter()
        points = router.route(make_node("a", 0, 0, 100, 50), make_node("b", 200, 100, 100, 50))
        assert points == [Point(50, 25), Point(250, 125)]

    def test_facing_route_left_to_right(self, make_node) -> None:
        """Test facing anchors when the source is on the left."""
        source = make_node("a", 0, 0, 100, 50)
        target = make_node("b", 200, 100, 100, 50)
        assert facing_anchors(source, target) == (Point(100, 25), Point(200, 125))

    def test_facing_route_right_to_left(self, make_node) -> None:
        """Test facing anchors keep source-first order when the source is on the right."""
        source = make_node("a", 300, 0, 100, 50)
        target = make_node("b", 0, 100, 100, 50)
        router = EdgeRouter(AnchorMode.FACING)
        assert router.route(source, target) == [Point(300, 25), Point(100, 125)]

    def test_facing_tie_source_is_left(self, make_node) -> None:
        """Test the source counts as the left node when centres align."""
        source = make_node("a", 0, 0, 100, 50)
        target = make_node("b", 0, 200, 100, 50)
        assert facing_anchors(source, target) == (Point(100, 25), Point(0, 225))

    def test_missing_target_gives_empty_points(self, make_node) -> None:
        """Test an edge to an unknown node is left unrouted."""
        router = EdgeRouter()
        edge = EdgeDatum(source="a", target="ghost", label="x")
        routed = router.route_edge(edge, {"a": make_node("a", 0, 0)})

        assert routed.points == []
        assert not routed.is_routable
        assert routed.label == "x"

    def test_route_all_preserves_order(self, make_node) -> None:
        """Test edges come back in input order."""
        nodes = [make_node("a", 0, 0), make_node("b", 300, 0), make_node("c", 600, 0)]
        edges = [EdgeDatum(source="b", target="c"), EdgeDatum(source="a", target="b")]
        routed = EdgeRouter().route_all(edges, nodes)

        assert [(e.source, e.target) for e in routed] == [("b", "c"), ("a", "b")]
        assert all(e.is_routable for e in routed)

    def test_reroute_follows_moved_nodes(self, make_node) -> None:
        """Test rerouting picks up new node positions."""
        nodes = [make_node("a", 0, 0), make_node("b", 300, 0)]
        router = EdgeRouter()
        routed = router.route_all([EdgeDatum(source="a", target="b")], nodes)

        nodes[1].x = 600
        rerouted = router.reroute(routed, nodes)
        assert rerouted[0].points[1] == Point(660, 30)
