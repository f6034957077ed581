"""
tree_strategy.py — Hierarchical tree layout strategy.

Used for: Org Chart, Tree Diagram, Hierarchy, Taxonomy
Pattern: Parents above their children, one row per level.
"""

from collections import defaultdict, deque
from typing import Any, Dict, List, Sequence

from .base_strategy import BaseLayoutStrategy
from ..positioned import PositionedNode
from ...dsl.schema import DiagramType, EdgeDatum, LayoutConfig


class TreeStrategy(BaseLayoutStrategy):
    """
    Tree layout strategy for hierarchical structures.

    Key features:
    - Tree structure inferred from edges (source is the parent)
    - Level-based rows, top-down
    - Each parent centred over the span of its subtree
    - Cycles and multiple parents tolerated: first parent found wins
    """

    diagram_type = DiagramType.TREE

    def get_strategy_defaults(self) -> Dict[str, float]:
        return {
            'node_separation': 40,
            'rank_separation': 80,
        }

    def build_tree(
        self,
        nodes: Sequence[PositionedNode],
        edges: Sequence[EdgeDatum],
    ) -> Dict[str, Any]:
        """
        Build a spanning forest from nodes and edges.

        Returns a dict with:
        - 'roots': IDs of tree roots, in input order
        - 'children': Dict mapping parent_id -> list of child IDs
        - 'levels': Dict mapping node_id -> level number
        - 'order': node IDs in breadth-first order (parents before children)
        """
        node_ids = []
        for node in nodes:
            if node.id not in node_ids:
                node_ids.append(node.id)

        successors = defaultdict(list)
        has_parent = set()
        for edge in self._known_edges(nodes, edges):
            successors[edge.source].append(edge.target)
            has_parent.add(edge.target)

        roots = [node_id for node_id in node_ids if node_id not in has_parent]
        if not roots:
            # Every node has a parent: the graph is cyclic, start from the first node
            roots = [node_ids[0]]

        children: Dict[str, List[str]] = defaultdict(list)
        levels: Dict[str, int] = {}
        order: List[str] = []

        def visit_from(root_id: str) -> None:
            levels[root_id] = 0
            queue = deque([root_id])
            while queue:
                node_id = queue.popleft()
                order.append(node_id)
                for child_id in successors.get(node_id, []):
                    if child_id not in levels:
                        levels[child_id] = levels[node_id] + 1
                        children[node_id].append(child_id)
                        queue.append(child_id)

        for root_id in roots:
            if root_id not in levels:
                visit_from(root_id)

        # Nodes only reachable through a cycle start trees of their own
        for node_id in node_ids:
            if node_id not in levels:
                roots.append(node_id)
                visit_from(node_id)

        return {
            'roots': roots,
            'children': dict(children),
            'levels': levels,
            'order': order,
        }

    def _place(
        self,
        nodes: List[PositionedNode],
        edges: Sequence[EdgeDatum],
        config: LayoutConfig,
    ) -> None:
        tree = self.build_tree(nodes, edges)
        children = tree['children']
        order = tree['order']
        levels = tree['levels']

        by_id: Dict[str, PositionedNode] = {}
        for node in nodes:
            by_id.setdefault(node.id, node)

        gap = config.node_separation

        # Subtree spans, leaves first
        span: Dict[str, float] = {}
        for node_id in reversed(order):
            kids = children.get(node_id, [])
            kids_width = sum(span[k] for k in kids) + gap * max(0, len(kids) - 1)
            span[node_id] = max(by_id[node_id].width, kids_width)

        total_width = sum(span[r] for r in tree['roots']) + gap * (len(tree['roots']) - 1)

        # Compress level spacing if the tree is taller than the canvas
        num_levels = max(levels.values()) + 1
        row_height = max(n.height for n in nodes)
        level_gap = config.rank_separation
        if num_levels > 1:
            fit_gap = (config.canvas_height - 2 * config.margin_y - num_levels * row_height) / (num_levels - 1)
            level_gap = max(0.0, min(level_gap, fit_gap))
        total_height = num_levels * row_height + (num_levels - 1) * level_gap

        left_of: Dict[str, float] = {}
        cursor = (config.canvas_width - total_width) / 2
        for root_id in tree['roots']:
            left_of[root_id] = cursor
            cursor += span[root_id] + gap

        top = (config.canvas_height - total_height) / 2
        for node_id in order:
            node = by_id[node_id]
            center_x = left_of[node_id] + span[node_id] / 2
            node.x = center_x - node.width / 2
            node.y = top + levels[node_id] * (row_height + level_gap)

            kids = children.get(node_id, [])
            kids_width = sum(span[k] for k in kids) + gap * max(0, len(kids) - 1)
            child_left = center_x - kids_width / 2
            for child_id in kids:
                left_of[child_id] = child_left
                child_left += span[child_id] + gap

        # Duplicate ids share the first node's slot; the resolver separates them
        for node in nodes:
            if by_id[node.id] is not node:
                node.x, node.y = by_id[node.id].x, by_id[node.id].y
