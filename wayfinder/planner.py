"""Shortest-path search over the layout graph."""

import heapq
from typing import Optional

from .models import Node
from .geo import euclidean_distance
from .graph import LayoutGraph
from .logger import Logger


class PathFinder:
    """A* search between two layout nodes.

    Stateless between calls: every search allocates its own frontier, score
    maps and closed set, so one PathFinder (and one LayoutGraph) can serve
    concurrent searches.
    """

    def __init__(self, graph: LayoutGraph, logger: Optional[Logger] = None):
        self.graph = graph
        self.logger = logger

    @staticmethod
    def heuristic(node: Node, goal: Node) -> float:
        """Straight-line distance to the goal"""
        return euclidean_distance(node.x, node.y, goal.x, goal.y)

    def find_path(self, start: Node, goal: Node) -> list[Node]:
        """Find the cheapest path from start to goal.

        Returns the node sequence from start to goal, [start] when they are
        the same node, or [] when the goal is unreachable.

        Frontier entries are ordered by (f, h, node id): equal f prefers the
        node closer to the goal, then the lexicographically smaller id.
        """
        if start.id == goal.id:
            return [start]

        if start.id not in self.graph or goal.id not in self.graph:
            if self.logger:
                self.logger.log("Path endpoint not in layout", {"start": start.id, "goal": goal.id})
            return []

        h_start = self.heuristic(start, goal)
        g_score: dict[str, float] = {start.id: 0.0}
        h_score: dict[str, float] = {start.id: h_start}
        parent: dict[str, Optional[str]] = {start.id: None}
        closed: set[str] = set()
        frontier: list[tuple[float, float, str]] = [(h_start, h_start, start.id)]

        while frontier:
            f, h, current_id = heapq.heappop(frontier)
            if current_id in closed:
                continue  # stale entry superseded by a better score
            if f > g_score[current_id] + h_score[current_id]:
                continue

            if current_id == goal.id:
                return self._reconstruct(parent, current_id)

            closed.add(current_id)

            for neighbor_id in self.graph.neighbors(current_id):
                if neighbor_id in closed:
                    continue
                tentative_g = g_score[current_id] + self.graph.edge_weight(current_id, neighbor_id)
                if tentative_g < g_score.get(neighbor_id, float("inf")):
                    if neighbor_id not in h_score:
                        h_score[neighbor_id] = self.heuristic(self.graph.node_by_id(neighbor_id), goal)
                    parent[neighbor_id] = current_id
                    g_score[neighbor_id] = tentative_g
                    neighbor_h = h_score[neighbor_id]
                    heapq.heappush(frontier, (tentative_g + neighbor_h, neighbor_h, neighbor_id))

        if self.logger:
            self.logger.log("No path found", {"start": start.id, "goal": goal.id})
        return []

    def _reconstruct(self, parent: dict[str, Optional[str]], goal_id: str) -> list[Node]:
        path = []
        node_id: Optional[str] = goal_id
        while node_id is not None:
            path.append(self.graph.node_by_id(node_id))
            node_id = parent[node_id]
        path.reverse()
        return path

    def find_path_by_id(self, start_id: str, goal_id: str) -> list[Node]:
        """Find a path between two node ids or scanned codes"""
        start = self.graph.resolve(start_id)
        goal = self.graph.resolve(goal_id)
        if start is None or goal is None:
            return []
        return self.find_path(start, goal)

    def path_cost(self, path: list[Node]) -> float:
        """Total walking cost of a path"""
        return self.graph.path_cost(path)
