"""pytest configuration and shared fixtures."""

import pytest

from gott import build_default_renderer


@pytest.fixture
def renderer():
    """Renderer with default helpers."""
    return build_default_renderer()


@pytest.fixture
def json_config_file(tmp_path):
    """UTF-8 file holding a small JSON document."""
    path = tmp_path / "config.json"
    path.write_text('{"x": 1, "servers": [{"name": "a", "enabled": true}, {"name": "b", "enabled": false}]}', encoding="utf-8")
    return path


@pytest.fixture
def latin1_file(tmp_path):
    """File whose bytes are not valid UTF-8."""
    path = tmp_path / "latin1.txt"
    path.write_bytes("café".encode("latin-1"))
    return path
