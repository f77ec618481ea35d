"""Layout definition loading."""

import json
from pathlib import Path
from typing import Union

from .config import CONFIG

DATA_DIR = Path(__file__).parent / "data"


class LayoutError(ValueError):
    """Layout file could not be read or is not a layout definition"""


def parse_layout(data: object) -> dict:
    """Check the top-level shape of a layout definition.

    Individual node and edge records are validated by LayoutGraph, which
    drops bad ones instead of failing.
    """
    if not isinstance(data, dict):
        raise LayoutError("Layout must be a JSON object with 'nodes' and 'edges'")
    nodes = data.get("nodes", [])
    edges = data.get("edges", [])
    if not isinstance(nodes, list) or not isinstance(edges, list):
        raise LayoutError("Layout 'nodes' and 'edges' must be lists")
    return {"nodes": nodes, "edges": edges}


def load_layout(path: Union[str, Path]) -> dict:
    """Load a layout definition from a JSON file"""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise LayoutError(f"Cannot read layout file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise LayoutError(f"Layout file {path} is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise LayoutError(f"Invalid layout JSON in {path}: {e}") from e
    return parse_layout(data)


def demo_layout_path() -> Path:
    return DATA_DIR / CONFIG["demo_layout"]


def load_demo_layout() -> dict:
    """Load the bundled parking-structure layout"""
    return load_layout(demo_layout_path())
