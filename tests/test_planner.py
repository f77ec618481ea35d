import itertools
import math

import networkx as nx
import pytest

from wayfinder.graph import LayoutGraph
from wayfinder.models import Node
from wayfinder.planner import PathFinder


def ids(path):
    return [n.id for n in path]


# ---------- Reference scenario


def test_abc_route_and_cost(abc_graph: LayoutGraph):
    finder = PathFinder(abc_graph)
    a, c = abc_graph.node_by_id("A"), abc_graph.node_by_id("C")
    path = finder.find_path(a, c)
    assert ids(path) == ["A", "B", "C"]
    assert finder.path_cost(path) == 20.0


def test_disconnected_node_is_unreachable(abc_graph: LayoutGraph, recording_logger):
    finder = PathFinder(abc_graph, logger=recording_logger)
    assert finder.find_path(abc_graph.node_by_id("A"), abc_graph.node_by_id("D")) == []
    assert "No path found" in recording_logger.messages()


def test_same_start_and_goal(abc_graph: LayoutGraph):
    finder = PathFinder(abc_graph)
    for node in abc_graph.nodes:
        assert finder.find_path(node, node) == [node]


def test_endpoint_outside_layout_is_no_route(abc_graph: LayoutGraph):
    finder = PathFinder(abc_graph)
    stranger = Node("Z", 1, 1)
    assert finder.find_path(abc_graph.node_by_id("A"), stranger) == []
    assert finder.find_path_by_id("A", "Z") == []


def test_find_path_by_id_accepts_codes(abc_graph: LayoutGraph):
    finder = PathFinder(abc_graph)
    assert ids(finder.find_path_by_id("QR-A", "QR-C")) == ["A", "B", "C"]


# ---------- Properties


def test_paths_are_valid_and_optimal(grid_graph: LayoutGraph):
    finder = PathFinder(grid_graph)
    for start, goal in itertools.permutations(grid_graph.nodes, 2):
        path = finder.find_path(start, goal)
        assert path[0] == start and path[-1] == goal
        for u, v in zip(path, path[1:]):
            assert grid_graph.has_edge(u.id, v.id)
        expected = nx.shortest_path_length(grid_graph.graph, start.id, goal.id, weight="weight")
        assert finder.path_cost(path) == pytest.approx(expected)


def test_cost_is_symmetric(demo_graph: LayoutGraph):
    finder = PathFinder(demo_graph)
    nodes = demo_graph.nodes
    for start, goal in zip(nodes, reversed(nodes)):
        there = finder.find_path(start, goal)
        back = finder.find_path(goal, start)
        assert finder.path_cost(there) == pytest.approx(finder.path_cost(back))


def test_results_are_deterministic(grid_graph: LayoutGraph):
    start, goal = grid_graph.node_by_id("r0c0"), grid_graph.node_by_id("r2c2")
    first = PathFinder(grid_graph).find_path(start, goal)
    for _ in range(5):
        assert PathFinder(grid_graph).find_path(start, goal) == first


def test_tie_break_prefers_smaller_h_then_smaller_id():
    # Two equal-cost routes S->X->G and S->Y->G, mirrored about the S-G line:
    # equal f and equal h at X and Y, so the smaller id (X) must be expanded first.
    nodes = [Node("S", 0, 0), Node("Y", 5, -5), Node("X", 5, 5), Node("G", 10, 0)]
    g = LayoutGraph.from_parts(nodes, [("S", "Y"), ("Y", "G"), ("S", "X"), ("X", "G")])
    assert ids(PathFinder(g).find_path(nodes[0], nodes[3])) == ["S", "X", "G"]

    # Same cost, but K sits closer to the goal (smaller h) so it wins over a smaller id.
    nodes = [Node("S", 0, 0), Node("A", 2, 0), Node("K", 8, 0), Node("G", 10, 0)]
    g = LayoutGraph.from_parts(nodes, [
        ("S", "A", 6.0), ("A", "G", 8.0),
        ("S", "K", 12.0), ("K", "G", 2.0),
    ])
    path = PathFinder(g).find_path(nodes[0], nodes[3])
    assert PathFinder(g).path_cost(path) == 14.0
    assert ids(path) == ["S", "K", "G"]


def test_cheaper_detour_beats_short_expensive_edge():
    nodes = [Node("S", 0, 0), Node("M", 5, 5), Node("G", 10, 0)]
    g = LayoutGraph.from_parts(nodes, [("S", "G", 50.0), ("S", "M"), ("M", "G")])
    path = PathFinder(g).find_path(nodes[0], nodes[2])
    assert ids(path) == ["S", "M", "G"]
    assert PathFinder(g).path_cost(path) == pytest.approx(2 * math.hypot(5, 5))


def test_demo_route(demo_graph: LayoutGraph):
    finder = PathFinder(demo_graph)
    path = finder.find_path_by_id("P4", "P15")
    assert ids(path) == ["P4", "M4", "M5", "M6", "M7", "P15"]
    assert finder.path_cost(path) == 75.0
