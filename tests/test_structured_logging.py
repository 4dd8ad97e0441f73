import json

import pytest

from exporter.errors import ConfigLoadError
from exporter.structured_logging import open_event_log


def test_open_event_log_disabled_without_path():
    assert open_event_log("run-1", None) is None


def test_open_event_log_creates_parent_directories(tmp_path):
    path = tmp_path / "nested" / "events.jsonl"
    events = open_event_log("run-1", path)
    events.log_event(name="go", action={"type": "navigate", "url": "https://example.com"}, ok=True)
    events.close()
    entry = json.loads(path.read_text(encoding="utf-8"))
    assert entry["name"] == "go"
    assert entry["step"] == 1


def test_open_event_log_on_directory_is_config_error(tmp_path):
    with pytest.raises(ConfigLoadError, match="Cannot open event log"):
        open_event_log("run-1", tmp_path)
