"""Pytest configuration and fixtures."""

import pytest

from scenelayout.dsl.schema import EdgeDatum, LayoutConfig, NodeDatum
from scenelayout.engine.positioned import DiagramLayout, PositionedNode


def _make_node(node_id: str, x: float, y: float, width: float = 120, height: float = 60) -> PositionedNode:
    """Create a positioned node with the default box size."""
    return PositionedNode(id=node_id, label=node_id, x=x, y=y, width=width, height=height)


@pytest.fixture
def make_node():
    """Factory for positioned nodes."""
    return _make_node


@pytest.fixture
def config() -> LayoutConfig:
    """Default layout configuration (1920x1080 canvas)."""
    return LayoutConfig()


@pytest.fixture
def small_config() -> LayoutConfig:
    """A 500x500 canvas for dense resolver scenarios."""
    return LayoutConfig(canvas_width=500, canvas_height=500, node_width=40, node_height=20)


@pytest.fixture
def chain_nodes() -> list[NodeDatum]:
    """Four nodes forming a simple process."""
    return [
        NodeDatum(id="start", label="Start"),
        NodeDatum(id="collect", label="Collect data"),
        NodeDatum(id="analyze", label="Analyze"),
        NodeDatum(id="report", label="Report"),
    ]


@pytest.fixture
def chain_edges() -> list[EdgeDatum]:
    """Edges linking chain_nodes in order."""
    return [
        EdgeDatum(source="start", target="collect"),
        EdgeDatum(source="collect", target="analyze"),
        EdgeDatum(source="analyze", target="report"),
    ]


@pytest.fixture
def org_nodes() -> list[NodeDatum]:
    """A small org chart: one root, two managers, three reports."""
    return [
        NodeDatum(id="ceo", label="CEO"),
        NodeDatum(id="cto", label="CTO"),
        NodeDatum(id="cfo", label="CFO"),
        NodeDatum(id="dev1", label="Developer"),
        NodeDatum(id="dev2", label="Developer"),
        NodeDatum(id="acct", label="Accountant"),
    ]


@pytest.fixture
def org_edges() -> list[EdgeDatum]:
    """Reporting lines for org_nodes."""
    return [
        EdgeDatum(source="ceo", target="cto"),
        EdgeDatum(source="ceo", target="cfo"),
        EdgeDatum(source="cto", target="dev1"),
        EdgeDatum(source="cto", target="dev2"),
        EdgeDatum(source="cfo", target="acct"),
    ]


@pytest.fixture
def coincident_layout() -> DiagramLayout:
    """Two nodes stacked exactly on top of each other."""
    return DiagramLayout(nodes=[_make_node("a", 400, 300), _make_node("b", 400, 300)])
