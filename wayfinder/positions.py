"""Live position sources: trace playback, recording and manual entry.

Positions arrive already estimated (dead reckoning happens elsewhere); these
classes only deliver (x, y) pairs in layout coordinates.
"""

import json
import sys
import time
from datetime import datetime
from typing import Optional, TextIO

from .config import CONFIG
from .models import Point


def _point_from_dict(d: dict) -> Point:
    return (float(d["x"]), float(d["y"]))


def _elapsed(entry) -> float:
    try:
        return float(entry.get("elapsed", 0))
    except (AttributeError, TypeError, ValueError):
        return 0.0


class PositionPlayback:
    """Plays back a position trace from file"""

    def __init__(self, playback_path: str, speed: float = 1.0):
        self.playback_path = playback_path
        self.speed = speed
        self.trace: list[dict] = []
        self.index = 0
        self.last_position: Optional[Point] = None
        self.consecutive_failures = 0

        with open(playback_path, encoding="utf-8") as f:
            data = json.load(f)
        self.trace = data["trace"]
        if not isinstance(self.trace, list):
            raise ValueError(f"'trace' in {playback_path} must be a list")

    def get_position(self) -> Optional[Point]:
        """Get next position from trace sequentially"""
        if self.index >= len(self.trace):
            return None

        entry = self.trace[self.index]
        self.index += 1

        try:
            position = _point_from_dict(entry["position"]) if entry.get("position") else None
        except (AttributeError, KeyError, TypeError, ValueError):
            position = None

        if position is None:
            self.consecutive_failures += 1
            return None
        self.last_position = position
        self.consecutive_failures = 0
        return position

    def get_poll_interval(self) -> float:
        """Get the interval to wait between polls based on trace timing and speed"""
        if self.index <= 0 or self.index >= len(self.trace):
            return CONFIG["position_poll_interval"] / self.speed

        prev_elapsed = _elapsed(self.trace[self.index - 1])
        curr_elapsed = _elapsed(self.trace[self.index])
        delta = curr_elapsed - prev_elapsed

        # Apply speed multiplier and clamp to reasonable range
        interval = delta / self.speed
        return max(0.1, min(interval, 5.0))

    def is_finished(self) -> bool:
        return self.index >= len(self.trace)

    def get_status(self) -> str:
        progress = f"{self.index}/{len(self.trace)}"
        if self.consecutive_failures == 0:
            return f"Playback OK ({progress})"
        else:
            return f"Playback: {self.consecutive_failures} failures ({progress})"


class PositionRecorder:
    """Records the samples of another position source to a trace file"""

    def __init__(self, source, record_path: str):
        self.source = source
        self.record_path = record_path
        self.trace: list[dict] = []
        self.start_time = time.time()

    def get_position(self) -> Optional[Point]:
        position = self.source.get_position()

        # Record even failed samples
        self.trace.append({
            "elapsed": time.time() - self.start_time,
            "position": {"x": position[0], "y": position[1]} if position else None,
            "status": self.source.get_status(),
        })
        return position

    def get_status(self) -> str:
        return self.source.get_status()

    def is_finished(self) -> bool:
        return self.source.is_finished()

    def save(self):
        """Save trace to file in the playback format"""
        with open(self.record_path, "w") as f:
            json.dump({
                "recorded_at": datetime.now().isoformat(),
                "trace": self.trace
            }, f, indent=2)
        print(f"Position trace saved to {self.record_path} ({len(self.trace)} entries)")


class ManualPositionSource:
    """Reads 'x,y' or 'x y' lines typed by the user; 'q' or EOF stops"""

    def __init__(self, stream: Optional[TextIO] = None, prompt: bool = False):
        self.stream = stream or sys.stdin
        self.prompt = prompt
        self.finished = False
        self.consecutive_failures = 0

    def get_position(self) -> Optional[Point]:
        if self.finished:
            return None
        if self.prompt:
            print("position x,y (q to stop)> ", end="", flush=True)
        line = self.stream.readline()
        if not line or line.strip().lower() in ("q", "quit"):
            self.finished = True
            return None

        parts = line.replace(",", " ").split()
        try:
            if len(parts) != 2:
                raise ValueError(line)
            position = (float(parts[0]), float(parts[1]))
        except ValueError:
            self.consecutive_failures += 1
            return None
        self.consecutive_failures = 0
        return position

    def get_poll_interval(self) -> float:
        return 0.0

    def is_finished(self) -> bool:
        return self.finished

    def get_status(self) -> str:
        if self.consecutive_failures == 0:
            return "Manual input OK"
        return f"Manual input: {self.consecutive_failures} unreadable lines"
