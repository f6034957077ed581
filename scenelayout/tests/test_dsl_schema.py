"""Tests for the input schema and node sizing."""

import pytest
from pydantic import ValidationError

from scenelayout.dsl.schema import DiagramType, EdgeDatum, LayoutConfig, NodeDatum
from scenelayout.engine.text_measure import label_width, node_height, node_width, size_node


class TestDiagramType:
    """Tests for DiagramType enum."""

    def test_values(self) -> None:
        """Test the closed set of diagram types."""
        assert {t.value for t in DiagramType} == {
            "flow", "tree", "timeline", "matrix", "cycle", "comparison",
        }

    def test_from_string(self) -> None:
        """Test construction from the string value."""
        assert DiagramType("cycle") is DiagramType.CYCLE

    def test_unknown_string(self) -> None:
        """Test unknown strings are rejected."""
        with pytest.raises(ValueError):
            DiagramType("venn")


class TestGraphModels:
    """Tests for NodeDatum and EdgeDatum."""

    def test_node_defaults(self) -> None:
        """Test a node without label gets an empty label."""
        node = NodeDatum(id="a")
        assert node.label == ""

    def test_node_requires_id(self) -> None:
        """Test empty ids are rejected."""
        with pytest.raises(ValidationError):
            NodeDatum(id="")

    def test_node_is_frozen(self) -> None:
        """Test nodes are immutable."""
        node = NodeDatum(id="a", label="A")
        with pytest.raises(ValidationError):
            node.label = "B"

    def test_edge_optional_label(self) -> None:
        """Test edges default to no label."""
        edge = EdgeDatum(source="a", target="b")
        assert edge.label is None


class TestLayoutConfig:
    """Tests for LayoutConfig validation."""

    def test_defaults(self, config: LayoutConfig) -> None:
        """Test default values."""
        assert config.canvas_width == 1920
        assert config.canvas_height == 1080
        assert config.node_width == 120
        assert config.node_height == 60
        assert config.char_width == 8
        assert config.padding == 20
        assert config.node_separation == 50
        assert config.edge_separation == 10
        assert config.rank_separation == 50
        assert config.margin_x == 50
        assert config.margin_y == 50

    @pytest.mark.parametrize("field", ["canvas_width", "node_height", "char_width", "node_separation"])
    def test_rejects_non_positive(self, field: str) -> None:
        """Test every dimension must be positive."""
        with pytest.raises(ValidationError):
            LayoutConfig(**{field: 0})

    def test_canvas_too_narrow(self) -> None:
        """Test the canvas must fit a node at its maximum width."""
        with pytest.raises(ValidationError):
            LayoutConfig(canvas_width=200, node_width=120)

    def test_canvas_too_short(self) -> None:
        """Test the canvas must fit a node's height."""
        with pytest.raises(ValidationError):
            LayoutConfig(canvas_height=40, node_height=60)

    def test_with_overrides_tracks_set_fields(self) -> None:
        """Test overrides keep explicitly set fields marked as set."""
        base = LayoutConfig(canvas_width=800)
        updated = base.with_overrides(node_separation=70)

        assert updated.canvas_width == 800
        assert updated.node_separation == 70
        assert updated.model_fields_set == {"canvas_width", "node_separation"}
        assert base.node_separation == 50


class TestNodeSizing:
    """Tests for label-driven node dimensions."""

    def test_empty_label_uses_base_width(self, config: LayoutConfig) -> None:
        """Test a missing label yields the base width."""
        assert node_width(NodeDatum(id="a"), config) == 120

    def test_short_label_uses_base_width(self, config: LayoutConfig) -> None:
        """Test short labels never shrink a node below the base width."""
        assert node_width(NodeDatum(id="a", label="abc"), config) == 120

    def test_label_grows_width(self, config: LayoutConfig) -> None:
        """Test width follows character count plus padding."""
        node = NodeDatum(id="a", label="x" * 20)
        assert label_width(node.label, config) == 180
        assert node_width(node, config) == 180

    def test_width_capped(self, config: LayoutConfig) -> None:
        """Test width never exceeds twice the base width."""
        assert node_width(NodeDatum(id="a", label="x" * 40), config) == 240

    def test_height_is_fixed(self, config: LayoutConfig) -> None:
        """Test height ignores the label."""
        assert node_height(NodeDatum(id="a", label="x" * 40), config) == 60

    def test_size_node(self, config: LayoutConfig) -> None:
        """Test size_node builds a positioned node."""
        positioned = size_node(NodeDatum(id="a", label="Alpha"), config, x=10, y=20)
        assert positioned.id == "a"
        assert positioned.label == "Alpha"
        assert (positioned.x, positioned.y) == (10, 20)
        assert (positioned.width, positioned.height) == (120, 60)
