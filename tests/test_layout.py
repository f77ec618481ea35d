import json

import pytest

from wayfinder.layout import LayoutError, demo_layout_path, load_demo_layout, load_layout, parse_layout


def test_load_layout_from_file(tmp_path, abc_layout):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps(abc_layout))
    layout = load_layout(path)
    assert [n["id"] for n in layout["nodes"]] == ["A", "B", "C", "D"]
    assert len(layout["edges"]) == 2


def test_missing_file_raises_layout_error(tmp_path):
    with pytest.raises(LayoutError):
        load_layout(tmp_path / "missing.json")


def test_invalid_json_raises_layout_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{nodes: ")
    with pytest.raises(LayoutError):
        load_layout(path)


@pytest.mark.parametrize("data", [[], "nodes", {"nodes": {}}, {"edges": 3}])
def test_wrong_shape_raises_layout_error(data):
    with pytest.raises(LayoutError):
        parse_layout(data)


def test_missing_sections_default_to_empty():
    assert parse_layout({}) == {"nodes": [], "edges": []}


def test_demo_layout_is_bundled():
    assert demo_layout_path().exists()
    layout = load_demo_layout()
    ids = {n["id"] for n in layout["nodes"]}
    assert {"P4", "P15", "E1", "E2"} <= ids


def test_non_utf8_file_raises_layout_error(tmp_path):
    path = tmp_path / "latin.json"
    path.write_bytes(b'{"nodes": [{"id": "\xff\xfe", "x": 0, "y": 0}], "edges": []}')
    with pytest.raises(LayoutError, match="not UTF-8"):
        load_layout(path)
