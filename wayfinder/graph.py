"""Layout graph representation."""

import math
from typing import Iterable, Optional

import networkx as nx

from .models import Node, Edge, NodeKind
from .geo import euclidean_distance
from .logger import Logger


class LayoutGraph:
    """Graph representation of an indoor layout.

    Built once from a layout definition and frozen afterwards, so a single
    instance can be shared by any number of concurrent path searches.
    """

    def __init__(self, logger: Optional[Logger] = None):
        self.graph = nx.Graph()
        self.logger = logger
        self._nodes: dict[str, Node] = {}  # node_id -> Node
        self._by_code: dict[str, Node] = {}  # external_code -> Node
        self.dropped_edges: list[dict] = []
        self.dropped_nodes: list[dict] = []

    @classmethod
    def from_layout(cls, layout: dict, logger: Optional[Logger] = None) -> "LayoutGraph":
        graph = cls(logger=logger)
        graph.build_from_layout(layout)
        return graph

    @classmethod
    def from_parts(cls, nodes: Iterable[Node], edges: Iterable[tuple],
                   logger: Optional[Logger] = None) -> "LayoutGraph":
        """Build from Node objects and (a, b) or (a, b, weight) tuples"""
        layout = {
            "nodes": [n.to_dict() for n in nodes],
            "edges": [
                {"fromId": e[0], "toId": e[1], "weight": e[2] if len(e) > 2 else None}
                for e in edges
            ],
        }
        return cls.from_layout(layout, logger=logger)

    def _log(self, message: str, data: Optional[dict] = None):
        if self.logger:
            self.logger.log(message, data)

    def build_from_layout(self, layout: dict):
        """Build graph from a layout definition ({"nodes": [...], "edges": [...]})"""
        if nx.is_frozen(self.graph):
            raise RuntimeError("LayoutGraph is already built")

        # First pass: collect all nodes
        for record in layout.get("nodes", []):
            node = self._parse_node(record)
            if node is None:
                self.dropped_nodes.append(record)
                self._log("Dropped node record", {"node": record})
                continue
            if node.id in self._nodes:
                self.dropped_nodes.append(record)
                self._log("Dropped duplicate node", {"id": node.id})
                continue
            self._nodes[node.id] = node
            if node.external_code and node.external_code not in self._by_code:
                self._by_code[node.external_code] = node
            self.graph.add_node(node.id)

        # Second pass: symmetric edges between known nodes
        for record in layout.get("edges", []):
            edge = self._parse_edge(record)
            if edge is None:
                self.dropped_edges.append(record)
                self._log("Dropped edge", {"edge": record})
                continue
            self.graph.add_edge(edge.a, edge.b, weight=edge.weight, edge_id=edge.id)

        nx.freeze(self.graph)
        self._log("Built graph", {
            "nodes": len(self._nodes),
            "edges": self.graph.number_of_edges(),
            "dropped_edges": len(self.dropped_edges),
        })

    @staticmethod
    def _parse_node(record: dict) -> Optional[Node]:
        if not isinstance(record, dict):
            return None
        try:
            node_id = str(record["id"])
            x = float(record["x"])
            y = float(record["y"])
        except (KeyError, TypeError, ValueError):
            return None
        if not math.isfinite(x) or not math.isfinite(y):
            return None
        kind = record.get("kind", record.get("type"))
        code = record.get("externalCode", record.get("external_code", record.get("qrCode")))
        return Node(
            id=node_id,
            x=x,
            y=y,
            kind=NodeKind.normalize(kind),
            external_code=str(code) if code is not None else None,
        )

    def _parse_edge(self, record: dict) -> Optional[Edge]:
        if not isinstance(record, dict):
            return None
        a = record.get("fromId", record.get("from_id"))
        b = record.get("toId", record.get("to_id"))
        if a is None or b is None:
            return None
        a, b = str(a), str(b)
        if a not in self._nodes or b not in self._nodes or a == b:
            return None

        node_a, node_b = self._nodes[a], self._nodes[b]
        length = euclidean_distance(node_a.x, node_a.y, node_b.x, node_b.y)
        weight = record.get("weight")
        try:
            weight = float(weight) if weight is not None else length
        except (TypeError, ValueError):
            weight = length
        if not math.isfinite(weight) or weight < 0:
            weight = length
        return Edge(a=a, b=b, weight=weight)

    @property
    def nodes(self) -> list[Node]:
        """All nodes in layout order"""
        return list(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def node_by_id(self, node_id: str) -> Optional[Node]:
        """Get a node by its id"""
        return self._nodes.get(node_id)

    def node_by_external_code(self, code: str) -> Optional[Node]:
        """Get the node carrying a scanned code"""
        return self._by_code.get(code)

    def resolve(self, token: str) -> Optional[Node]:
        """Resolve a node id or a scanned code, id first"""
        return self.node_by_id(token) or self.node_by_external_code(token)

    def neighbors(self, node_id: str) -> list[str]:
        """Get neighboring node ids"""
        if node_id not in self.graph:
            return []
        return list(self.graph.neighbors(node_id))

    def has_edge(self, a: str, b: str) -> bool:
        return self.graph.has_edge(a, b)

    def edge_weight(self, a: str, b: str) -> Optional[float]:
        """Get the walking cost between two adjacent nodes"""
        data = self.graph.get_edge_data(a, b)
        if data is None:
            return None
        return data["weight"]

    def path_cost(self, path: list[Node]) -> float:
        """Sum of edge weights along a path"""
        total = 0.0
        for current, nxt in zip(path, path[1:]):
            weight = self.edge_weight(current.id, nxt.id)
            if weight is None:
                return math.inf
            total += weight
        return total

    def find_nearest_node(self, x: float, y: float) -> Optional[Node]:
        """Find the nearest node to a position"""
        if not self._nodes:
            return None

        min_dist = float("inf")
        nearest = None

        for node in self._nodes.values():
            dist = euclidean_distance(x, y, node.x, node.y)
            if dist < min_dist or (dist == min_dist and node.id < nearest.id):
                min_dist = dist
                nearest = node

        return nearest
