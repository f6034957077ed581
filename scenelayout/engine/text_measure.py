"""
text_measure.py — Size nodes from their labels BEFORE placing them.

Every strategy sizes its nodes through this module so that all diagram
types agree on how big a label makes a box:
- short labels get the base width
- long labels grow with character count, capped at twice the base width
- height is fixed to the configured base height
"""

from typing import Optional

from ..dsl.schema import LayoutConfig, NodeDatum
from .positioned import PositionedNode


def label_width(label: Optional[str], config: LayoutConfig) -> float:
    """Raw width a label needs, including padding."""
    return len(label or "") * config.char_width + config.padding


def node_width(node: NodeDatum, config: LayoutConfig) -> float:
    """
    Compute the box width for a node.

    Args:
        node: The node to size
        config: Layout configuration supplying base width, char width, padding

    Returns:
        Width between node_width and 2 * node_width
    """
    base = config.node_width
    return max(base, min(label_width(node.label, config), base * 2))


def node_height(node: NodeDatum, config: LayoutConfig) -> float:
    """Compute the box height for a node (fixed for now)."""
    return config.node_height


def size_node(
    node: NodeDatum,
    config: LayoutConfig,
    x: float = 0.0,
    y: float = 0.0,
) -> PositionedNode:
    """Create a PositionedNode for the given node at (x, y)."""
    return PositionedNode(
        id=node.id,
        label=node.label,
        x=x,
        y=y,
        width=node_width(node, config),
        height=node_height(node, config),
    )
