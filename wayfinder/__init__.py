"""Wayfinder - Indoor turn-by-turn guide back to your parking spot."""

from .config import CONFIG
from .models import Node, NodeKind, Edge, Instruction, TrackingResult, NavigationState
from .logger import Logger
from .geo import (
    euclidean_distance,
    cardinal_heading,
    relative_turn,
    project_onto_segment,
    point_to_segment_distance,
)
from .layout import LayoutError, load_layout, load_demo_layout
from .graph import LayoutGraph
from .planner import PathFinder
from .directions import synthesize, annotate_progress, instruction_texts
from .tracker import track, DeviationTracker
from .positions import PositionPlayback, PositionRecorder, ManualPositionSource
from .app import Navigator
from .__main__ import main

__all__ = [
    "CONFIG",
    "Node",
    "NodeKind",
    "Edge",
    "Instruction",
    "TrackingResult",
    "NavigationState",
    "Logger",
    "euclidean_distance",
    "cardinal_heading",
    "relative_turn",
    "project_onto_segment",
    "point_to_segment_distance",
    "LayoutError",
    "load_layout",
    "load_demo_layout",
    "LayoutGraph",
    "PathFinder",
    "synthesize",
    "annotate_progress",
    "instruction_texts",
    "track",
    "DeviationTracker",
    "PositionPlayback",
    "PositionRecorder",
    "ManualPositionSource",
    "Navigator",
    "main",
]
