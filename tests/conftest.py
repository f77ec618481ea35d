import pytest

from wayfinder.graph import LayoutGraph
from wayfinder.layout import load_demo_layout
from wayfinder.models import Node, NodeKind


@pytest.fixture
def abc_layout() -> dict:
    # A(0,0) - B(10,0) - C(10,10), D isolated
    return {
        "nodes": [
            {"id": "A", "x": 0, "y": 0, "kind": "entrance", "externalCode": "QR-A"},
            {"id": "B", "x": 10, "y": 0, "kind": "junction"},
            {"id": "C", "x": 10, "y": 10, "kind": "parking", "externalCode": "QR-C"},
            {"id": "D", "x": 50, "y": 50},
        ],
        "edges": [
            {"fromId": "A", "toId": "B"},
            {"fromId": "B", "toId": "C"},
        ],
    }


@pytest.fixture
def abc_graph(abc_layout) -> LayoutGraph:
    return LayoutGraph.from_layout(abc_layout)


@pytest.fixture
def grid_graph() -> LayoutGraph:
    # 3x3 grid, 10 m spacing, ids "r{row}c{col}"
    nodes = [
        Node(id=f"r{r}c{c}", x=c * 10.0, y=r * 10.0, kind=NodeKind.JUNCTION)
        for r in range(3) for c in range(3)
    ]
    edges = []
    for r in range(3):
        for c in range(3):
            if c < 2:
                edges.append((f"r{r}c{c}", f"r{r}c{c + 1}"))
            if r < 2:
                edges.append((f"r{r}c{c}", f"r{r + 1}c{c}"))
    return LayoutGraph.from_parts(nodes, edges)


@pytest.fixture
def demo_graph() -> LayoutGraph:
    return LayoutGraph.from_layout(load_demo_layout())


class RecordingLogger:
    """Collects log calls instead of printing them"""

    def __init__(self):
        self.records = []

    def log(self, message, data=None):
        self.records.append((message, data))

    def messages(self):
        return [m for m, _ in self.records]

    def close(self):
        pass


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
