import json

from wayfinder.logger import Logger


def test_format_line_falls_back_to_str():
    line = Logger.format_line("Dropped node record", {"node": {"x": {1}}, "at": (1.0, 2.0)})
    payload = json.loads(line.split(" | ", 1)[1])
    assert payload == {"node": {"x": "{1}"}, "at": [1.0, 2.0]}


def test_format_line_without_data():
    assert Logger.format_line("Route cleared").endswith("] Route cleared")


def test_log_writes_file_and_calls_back(tmp_path, capsys):
    events = []
    log_path = tmp_path / "session.log"
    with Logger(str(log_path), callback=lambda m, d: events.append((m, d)), echo=False) as logger:
        logger.log("Left the path", {"deviation": 4.2})
    assert logger.file is None
    assert events == [("Left the path", {"deviation": 4.2})]
    assert capsys.readouterr().out == ""

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("--- Wayfinder session ")
    assert lines[1].endswith('Left the path | {"deviation": 4.2}')


def test_echo_and_close_without_file(capsys):
    logger = Logger()
    logger.log("Back on path")
    logger.close()
    assert "Back on path" in capsys.readouterr().out
