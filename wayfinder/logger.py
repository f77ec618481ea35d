"""Navigation event log for Wayfinder."""

import json
from datetime import datetime
from typing import Optional, Callable, TextIO


class Logger:
    """Writes timestamped navigation events to the console, a log file and a callback.

    Structured data is appended as JSON; values JSON cannot encode (sets,
    tuples of odd objects, dataclasses) fall back to their str() form so a
    log call never fails on the data it is given.
    """

    def __init__(self, log_path: Optional[str] = None, callback: Optional[Callable] = None,
                 echo: bool = True):
        self.log_path = log_path
        self.callback = callback
        self.echo = echo
        self.file: Optional[TextIO] = None
        if log_path:
            self.file = open(log_path, "a", encoding="utf-8")
            self.file.write(f"--- Wayfinder session {datetime.now().isoformat()} ---\n")
            self.file.flush()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info):
        self.close()

    @staticmethod
    def format_line(message: str, data: Optional[dict] = None) -> str:
        line = f"[{datetime.now().isoformat()}] {message}"
        if data:
            line += f" | {json.dumps(data, default=str)}"
        return line

    def log(self, message: str, data: Optional[dict] = None):
        """Record one event with optional structured data"""
        line = self.format_line(message, data)
        if self.echo:
            print(line)
        if self.file:
            self.file.write(line + "\n")
            self.file.flush()
        if self.callback:
            self.callback(message, data)

    def close(self):
        if self.file:
            self.file.close()
            self.file = None
