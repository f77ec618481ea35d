"""Main Wayfinder application."""

import time
from dataclasses import replace
from typing import Optional

from .config import CONFIG
from .models import Node, Point, NavigationState, TrackingResult
from .logger import Logger
from .graph import LayoutGraph
from .planner import PathFinder
from .directions import synthesize, annotate_progress
from .tracker import DeviationTracker


class Navigator:
    """Guides the user from the current location to the destination.

    All navigation state lives in a NavigationState value that is replaced on
    every change; the planner and direction synthesis it calls are pure.
    """

    def __init__(self, graph: LayoutGraph, logger: Optional[Logger] = None,
                 threshold: Optional[float] = None, strategy: Optional[str] = None):
        self.graph = graph
        self.logger = logger or Logger(echo=False)
        self.finder = PathFinder(graph, logger=self.logger)
        self.tracker = DeviationTracker(threshold)
        self.strategy = strategy or CONFIG["direction_strategy"]
        self.state = NavigationState.empty()
        self.updates = 0
        self.off_path_updates = 0

    def get_state(self) -> dict:
        """Get current state as dict for logging"""
        state = {
            "destination": self.state.destination.id if self.state.destination else None,
            "current": self.state.current.id if self.state.current else None,
            "path": [n.id for n in self.state.path],
            "tracking": self.state.tracking.to_dict(),
        }
        current = next((ins for ins in self.state.instructions if ins.current), None)
        if current:
            state["instruction"] = current.text
        return state

    def set_destination(self, token: str) -> Optional[Node]:
        """Set the destination (e.g. the parked vehicle) from a node id or scanned code"""
        node = self.graph.resolve(token)
        if node is None:
            self.logger.log("Unknown destination", {"token": token})
            return None
        self.state = replace(self.state, destination=node)
        self.logger.log("Destination set", {"node": node.id})
        self._refresh_route()
        return node

    def set_current_location(self, token: str) -> Optional[Node]:
        """Set the user's current location from a node id or scanned code"""
        node = self.graph.resolve(token)
        if node is None:
            self.logger.log("Unknown location", {"token": token})
            return None
        self.state = replace(self.state, current=node)
        self.logger.log("Current location set", {"node": node.id})
        self._refresh_route()
        return node

    def _refresh_route(self):
        """Recompute the path when both endpoints are known and it changed"""
        if self.state.destination is None or self.state.current is None:
            return

        path = tuple(self.finder.find_path(self.state.current, self.state.destination))
        if [n.id for n in path] == [n.id for n in self.state.path] and self.state.instructions:
            return

        instructions = tuple(synthesize(path, self.strategy)) if path else ()
        self.tracker.set_path([n.point for n in path])
        self.state = replace(self.state, path=path, instructions=instructions,
                             tracking=TrackingResult.not_tracked())
        if path:
            self.logger.log("Route calculated", {
                "path": [n.id for n in path],
                "cost": round(self.finder.path_cost(list(path)), 2),
            })
        else:
            self.logger.log("No path available", {
                "from": self.state.current.id, "to": self.state.destination.id,
            })

    def update(self, position: Point) -> TrackingResult:
        """Track a live position and refresh instruction progress"""
        previous = self.state.tracking
        result = self.tracker.update(position)
        instructions = tuple(annotate_progress(self.state.instructions, result.segment_index))
        self.state = replace(self.state, tracking=result, instructions=instructions)
        self.updates += 1

        if result.is_tracked and not result.on_path:
            self.off_path_updates += 1
            if previous.on_path or not previous.is_tracked:
                self.logger.log("Left the path", {
                    "position": list(position),
                    "deviation": round(result.deviation, 2),
                    "segment": result.segment_index,
                })
        elif result.on_path and previous.is_tracked and not previous.on_path:
            self.logger.log("Back on path", {"segment": result.segment_index})
        return result

    def status_text(self) -> str:
        if not self.state.destination:
            return "Destination not set"
        if not self.state.current:
            return "Current location not set"
        if not self.state.path:
            return "No path available"
        return f"{len(self.state.path) - 1} steps to destination"

    def reset(self):
        """Forget both locations and the route"""
        self.state = NavigationState.empty()
        self.tracker.reset()
        self.updates = 0
        self.off_path_updates = 0
        self.logger.log("Navigation reset")

    def get_poll_interval(self, source) -> float:
        if hasattr(source, "get_poll_interval"):
            return source.get_poll_interval()
        return CONFIG["position_poll_interval"]

    def run(self, source):
        """Follow a live position source until it runs out or the user stops"""
        if not self.state.path:
            print(self.status_text())
            return

        start_time = time.time()
        try:
            while not source.is_finished():
                position = source.get_position()
                if position is None:
                    self.logger.log("Position unavailable", {"status": source.get_status()})
                else:
                    self.update(position)
                    self.logger.log("Position update", self.get_state())
                time.sleep(self.get_poll_interval(source))
        except KeyboardInterrupt:
            print("\nNavigation interrupted")
            self.logger.log("Navigation interrupted by user")
        finally:
            if hasattr(source, "save"):
                source.save()

            summary = {
                "updates": self.updates,
                "off_path_updates": self.off_path_updates,
                "duration": time.time() - start_time,
            }
            self.logger.log("Navigation summary", summary)

            print(f"\nNavigation summary:")
            print(f"  Updates: {summary['updates']}")
            print(f"  Off path: {summary['off_path_updates']}")
            print(f"  Duration: {summary['duration']:.1f} s")
