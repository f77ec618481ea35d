"""Live deviation tracking against the active path."""

from typing import Optional, Sequence

from .config import CONFIG
from .models import Point, TrackingResult
from .geo import point_to_segment_distance


def track(path_points: Sequence[Point], position: Point, threshold: float) -> TrackingResult:
    """Find the path segment nearest to a position and the distance to it.

    Segment i joins path_points[i] and path_points[i + 1]. The first segment
    reaching the minimum distance wins. on_path is inclusive of threshold.
    """
    if len(path_points) < 2:
        return TrackingResult.not_tracked()

    px, py = position
    min_dist = float("inf")
    nearest = 0

    for i in range(len(path_points) - 1):
        (x1, y1), (x2, y2) = path_points[i], path_points[i + 1]
        dist = point_to_segment_distance(px, py, x1, y1, x2, y2)
        if dist < min_dist:
            min_dist = dist
            nearest = i

    return TrackingResult(segment_index=nearest, deviation=min_dist, on_path=min_dist <= threshold)


class DeviationTracker:
    """Keeps the latest TrackingResult for the active path.

    The result is an immutable value swapped in whole on each update, so a
    reader always sees either the previous result or the new one.
    """

    def __init__(self, threshold: Optional[float] = None):
        self.threshold = threshold if threshold is not None else CONFIG["route_deviation_threshold"]
        self.path_points: tuple[Point, ...] = ()
        self.result: TrackingResult = TrackingResult.not_tracked()

    def set_path(self, path_points: Sequence[Point]):
        """Switch to a new active path; the old result no longer applies"""
        self.path_points = tuple(path_points)
        self.result = TrackingResult.not_tracked()

    def update(self, position: Point) -> TrackingResult:
        """Track a new live position against the active path"""
        self.result = track(self.path_points, position, self.threshold)
        return self.result

    def track(self, path_points: Sequence[Point], position: Point,
              threshold: Optional[float] = None) -> TrackingResult:
        """Track against an explicit path and threshold"""
        self.path_points = tuple(path_points)
        if threshold is not None:
            self.threshold = threshold
        return self.update(position)

    def reset(self):
        self.path_points = ()
        self.result = TrackingResult.not_tracked()
