"""Data classes for Wayfinder."""

from dataclasses import dataclass, asdict, field
from typing import Optional

Point = tuple[float, float]


class NodeKind:
    """Layout node kinds"""
    PARKING = "parking"
    JUNCTION = "junction"
    ENTRANCE = "entrance"
    PATH_MARKER = "path-marker"
    UNSPECIFIED = "unspecified"

    ALL = (PARKING, JUNCTION, ENTRANCE, PATH_MARKER, UNSPECIFIED)
    # Spellings found in older layout files
    ALIASES = {"path": PATH_MARKER, "path_marker": PATH_MARKER}

    @classmethod
    def normalize(cls, kind: Optional[str]) -> str:
        if not kind:
            return cls.UNSPECIFIED
        kind = cls.ALIASES.get(kind, kind)
        return kind if kind in cls.ALL else cls.UNSPECIFIED


@dataclass(frozen=True)
class Node:
    """A point of interest in the layout (parking spot, junction, ...)"""
    id: str
    x: float
    y: float
    kind: str = NodeKind.UNSPECIFIED
    external_code: Optional[str] = None  # decoded QR / barcode payload

    @property
    def point(self) -> Point:
        return (self.x, self.y)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Edge:
    """A symmetric walkable connection between two nodes"""
    a: str
    b: str
    weight: float

    @classmethod
    def make_id(cls, a: str, b: str) -> str:
        return f"{min(a, b)}-{max(a, b)}"

    @property
    def id(self) -> str:
        return Edge.make_id(self.a, self.b)


@dataclass(frozen=True)
class Instruction:
    """One step of turn-by-turn guidance.

    first_segment / last_segment are the indices of the path segments this
    step covers; segment i joins path[i] and path[i + 1]. A turn made at
    path[i] belongs to segment i - 1, so it is passed once the user walks
    segment i.
    """
    text: str
    action: str
    distance: Optional[float] = None
    first_segment: int = 0
    last_segment: int = 0
    current: bool = False
    passed: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class TrackingResult:
    """Where a live position sits relative to the active path"""
    segment_index: Optional[int]
    deviation: Optional[float]  # meters to nearest point on the path
    on_path: bool

    @classmethod
    def not_tracked(cls) -> "TrackingResult":
        return cls(segment_index=None, deviation=None, on_path=False)

    @property
    def is_tracked(self) -> bool:
        return self.segment_index is not None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class NavigationState:
    """Everything the navigator knows at one moment; replaced, never mutated"""
    destination: Optional[Node] = None
    current: Optional[Node] = None
    path: tuple[Node, ...] = ()
    instructions: tuple[Instruction, ...] = ()
    tracking: TrackingResult = field(default_factory=TrackingResult.not_tracked)

    @classmethod
    def empty(cls) -> "NavigationState":
        return cls()

    @property
    def has_route(self) -> bool:
        return len(self.path) > 0
