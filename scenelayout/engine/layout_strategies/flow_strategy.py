"""
flow_strategy.py — Sequential flow layout strategy.

Used for: Process Flow, Pipeline, Workflow
Pattern: Elements arranged top to bottom in rank order, wrapping into
additional columns when the sequence is taller than the canvas.
"""

import logging
import math
from typing import Dict, List, Sequence, Set, Tuple

import networkx as nx

from .base_strategy import BaseLayoutStrategy
from ..positioned import PositionedNode
from ...dsl.schema import DiagramType, EdgeDatum, LayoutConfig

logger = logging.getLogger(__name__)


class FlowStrategy(BaseLayoutStrategy):
    """
    Flow layout strategy for sequential processes.

    Key features:
    - Ranks by longest path, so every edge points downwards
    - Cycles broken at DFS back edges
    - Without edges, input order is the sequence
    - Automatic wrapping into columns when too many ranks
    """

    diagram_type = DiagramType.FLOW

    def get_strategy_defaults(self) -> Dict[str, float]:
        return {
            'node_separation': 30,
            'rank_separation': 60,
        }

    def build_graph(
        self,
        nodes: Sequence[PositionedNode],
        edges: Sequence[EdgeDatum],
    ) -> nx.DiGraph:
        """Directed graph over unique node ids, in input order."""
        graph = nx.DiGraph()
        for node in nodes:
            graph.add_node(node.id)
        for edge in self._known_edges(nodes, edges):
            graph.add_edge(edge.source, edge.target)
        return graph

    def find_back_edges(self, graph: nx.DiGraph) -> Set[Tuple[str, str]]:
        """
        Edges that close a cycle, found by depth-first search.

        Search starts from nodes without predecessors, then from any node
        still unvisited.
        """
        back_edges: Set[Tuple[str, str]] = set()
        if nx.is_directed_acyclic_graph(graph):
            return back_edges

        visited: Set[str] = set()
        on_stack: Set[str] = set()

        def dfs(start: str) -> None:
            visited.add(start)
            on_stack.add(start)
            stack = [(start, iter(list(graph.successors(start))))]
            while stack:
                node, successors = stack[-1]
                for successor in successors:
                    if successor not in visited:
                        visited.add(successor)
                        on_stack.add(successor)
                        stack.append((successor, iter(list(graph.successors(successor)))))
                        break
                    if successor in on_stack:
                        back_edges.add((node, successor))
                else:
                    on_stack.discard(node)
                    stack.pop()

        roots = [n for n in graph.nodes() if graph.in_degree(n) == 0]
        for root in roots:
            if root not in visited:
                dfs(root)
        for node in graph.nodes():
            if node not in visited:
                dfs(node)

        return back_edges

    def assign_ranks(
        self,
        nodes: Sequence[PositionedNode],
        edges: Sequence[EdgeDatum],
    ) -> List[List[str]]:
        """
        Group node ids into ranks, top rank first.

        Each node sits one rank below its deepest predecessor. Nodes keep
        input order inside a rank.
        """
        graph = self.build_graph(nodes, edges)
        order = list(graph.nodes())

        if graph.number_of_edges() == 0:
            return [[node_id] for node_id in order]

        back_edges = self.find_back_edges(graph)
        if back_edges:
            logger.debug(f"[{self.name}] Ignoring {len(back_edges)} back edges for ranking")
            graph.remove_edges_from(back_edges)

        rank: Dict[str, int] = {}
        for node_id in nx.topological_sort(graph):
            predecessors = list(graph.predecessors(node_id))
            rank[node_id] = max((rank[p] for p in predecessors), default=-1) + 1

        ranks: List[List[str]] = [[] for _ in range(max(rank.values()) + 1)]
        for node_id in order:
            ranks[rank[node_id]].append(node_id)
        return ranks

    def _place(
        self,
        nodes: List[PositionedNode],
        edges: Sequence[EdgeDatum],
        config: LayoutConfig,
    ) -> None:
        ranks = self.assign_ranks(nodes, edges)

        by_id: Dict[str, List[PositionedNode]] = {}
        for node in nodes:
            by_id.setdefault(node.id, []).append(node)

        row_height = max(n.height for n in nodes)
        rank_gap = config.rank_separation

        # Wrap into columns when the ranks don't fit vertically
        available_height = config.canvas_height - 2 * config.margin_y
        max_per_column = max(1, math.floor((available_height + rank_gap) / (row_height + rank_gap)))
        num_columns = math.ceil(len(ranks) / max_per_column)
        if num_columns > 1:
            logger.debug(f"[{self.name}] Wrapping {len(ranks)} ranks into {num_columns} columns")

        for column in range(num_columns):
            column_ranks = ranks[column * max_per_column:(column + 1) * max_per_column]
            center_x = config.canvas_width * (column + 1) / (num_columns + 1)

            column_height = len(column_ranks) * row_height + (len(column_ranks) - 1) * rank_gap
            y = (config.canvas_height - column_height) / 2

            for rank_ids in column_ranks:
                # Duplicate ids stay with their first occurrence's rank
                rank_nodes = [n for node_id in rank_ids for n in by_id[node_id]]
                self._stack_row(rank_nodes, center_x, y, config.node_separation)
                y += row_height + rank_gap
