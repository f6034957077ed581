# Scene Layout Engine

from .positioned import (
    Point,
    PositionedNode,
    RoutedEdge,
    LayoutBounds,
    DiagramLayout,
)

from .units import (
    MAX_RESOLVE_ITERATIONS,
    SPIRAL_ATTEMPTS,
    SPIRAL_BASE_RADIUS,
    SPIRAL_RADIUS_STEP,
    spiral_offset,
)

from .text_measure import (
    label_width,
    node_width,
    node_height,
    size_node,
)

from .connector_router import (
    AnchorMode,
    EdgeRouter,
    center_anchor,
    facing_anchors,
)

from .layout_strategies import (
    BaseLayoutStrategy,
    STRATEGIES,
    get_strategy,
)

from .layout_engine import (
    LayoutEngine,
    LayoutResult,
    compute_confidence,
    create_layout,
)

__all__ = [
    # Positioned contract
    'Point',
    'PositionedNode',
    'RoutedEdge',
    'LayoutBounds',
    'DiagramLayout',
    # Constants
    'MAX_RESOLVE_ITERATIONS',
    'SPIRAL_ATTEMPTS',
    'SPIRAL_BASE_RADIUS',
    'SPIRAL_RADIUS_STEP',
    'spiral_offset',
    # Sizing
    'label_width',
    'node_width',
    'node_height',
    'size_node',
    # Routing
    'AnchorMode',
    'EdgeRouter',
    'center_anchor',
    'facing_anchors',
    # Strategies
    'BaseLayoutStrategy',
    'STRATEGIES',
    'get_strategy',
    # Orchestration
    'LayoutEngine',
    'LayoutResult',
    'compute_confidence',
    'create_layout',
]
