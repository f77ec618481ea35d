"""Planar geometry helpers.

Layout coordinates live in a single flat unit system (meters) with x growing
east and y growing south, the way floor plans are drawn on screen.
"""

import math

# Clockwise order used for turn classification
HEADINGS = ["north", "east", "south", "west"]


def euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Straight-line distance between two points"""
    return math.hypot(x2 - x1, y2 - y1)


def cardinal_heading(x1: float, y1: float, x2: float, y2: float) -> str:
    """Dominant-axis heading from point 1 to point 2.

    Horizontal wins only when strictly larger; ties go to the vertical axis.
    """
    dx = x2 - x1
    dy = y2 - y1
    if abs(dx) > abs(dy):
        return "east" if dx > 0 else "west"
    return "south" if dy > 0 else "north"


def relative_turn(from_heading: str, to_heading: str) -> str:
    """Classify the turn between two cardinal headings"""
    diff = (HEADINGS.index(to_heading) - HEADINGS.index(from_heading)) % 4
    if diff == 0:
        return "straight"
    elif diff == 1:
        return "turn right"
    elif diff == 3:
        return "turn left"
    else:
        return "turn around"


def project_onto_segment(px: float, py: float,
                         x1: float, y1: float, x2: float, y2: float) -> tuple[float, float, float]:
    """Project a point onto a segment.

    Returns (t, proj_x, proj_y) with t clamped to [0, 1]. A zero-length
    segment projects onto its start point.
    """
    dx = x2 - x1
    dy = y2 - y1
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return 0.0, x1, y1
    t = ((px - x1) * dx + (py - y1) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return t, x1 + t * dx, y1 + t * dy


def point_to_segment_distance(px: float, py: float,
                              x1: float, y1: float, x2: float, y2: float) -> float:
    """Shortest distance from a point to a line segment"""
    _, proj_x, proj_y = project_onto_segment(px, py, x1, y1, x2, y2)
    return euclidean_distance(px, py, proj_x, proj_y)
