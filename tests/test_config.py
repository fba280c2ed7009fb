from __future__ import annotations

import logging
from pathlib import Path

import pytest

from config import DEFAULT_CONFIG, default_labels, load_config, parse_config
from errors import ConfigError


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "instance.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_bundled_instance_loads() -> None:
    config = load_config(DEFAULT_CONFIG)

    assert config.vertex_count == 8
    assert len(config.edges) == 11
    assert config.destination == 7
    assert config.default_source == 0
    assert config.label(7) == "College"
    assert config.positions is not None and config.positions[0] == (100.0, 100.0)

    graph = config.build_graph()
    assert graph.edge_weight(5, 7) == 7


def test_defaults_when_routing_section_missing() -> None:
    config = parse_config({"network": {"vertex_count": 3, "edges": [[0, 1, 2]]}})

    assert config.destination == 2
    assert config.default_source == 0
    assert config.labels == ("Stop 1", "Stop 2", "College")
    assert config.positions is None


def test_default_labels_mark_destination() -> None:
    assert default_labels(3, 0) == ["College", "Stop 2", "Stop 3"]


def test_resolve_vertex_by_label_or_index() -> None:
    config = load_config(DEFAULT_CONFIG)

    assert config.resolve_vertex("Stop 3") == 2
    assert config.resolve_vertex("College") == 7
    assert config.resolve_vertex("4") == 4
    assert config.resolve_vertex(5) == 5


@pytest.mark.parametrize("value", ["Nowhere", "8", -1, True])
def test_resolve_vertex_rejects_unknown(value) -> None:
    config = load_config(DEFAULT_CONFIG)

    with pytest.raises(ConfigError):
        config.resolve_vertex(value)


@pytest.mark.parametrize(
    "data",
    [
        None,
        {"graph": {}},
        {"network": {"vertex_count": "eight"}},
        {"network": {"vertex_count": -2}},
        {"network": {"vertex_count": 2, "edges": [[0, 1]]}},
        {"network": {"vertex_count": 2, "edges": [[0, 2, 1]]}},
        {"network": {"vertex_count": 2, "edges": [[0, 1, -3]]}},
        {"network": {"vertex_count": 2, "labels": ["only one"]}},
        {"network": {"vertex_count": 2, "positions": [[0, 0]]}},
        {"network": {"vertex_count": 2}, "routing": {"destination": 5}},
        {"network": {"vertex_count": 2}, "routing": {"default_source": -1}},
        {"network": {"vertex_count": 2}, "routing": "fast"},
        {"network": {"vertex_count": 2, "edges": 5}},
        {"network": {"vertex_count": 2, "edges": "0 1 3"}},
        {"network": {"vertex_count": 2, "labels": 5}},
        {"network": {"vertex_count": 2, "labels": "ab"}},
        {"network": {"vertex_count": 2, "positions": 5}},
        {"network": {"vertex_count": 2, "positions": [[0, 0], "xy"]}},
    ],
)
def test_malformed_documents_raise_config_error(data) -> None:
    with pytest.raises(ConfigError):
        parse_config(data)


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    path = _write(tmp_path, "network: [unclosed\n")

    with pytest.raises(ConfigError):
        load_config(path)


def test_duplicate_edges_are_kept_with_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = _write(
        tmp_path,
        "network:\n  vertex_count: 2\n  edges:\n    - [0, 1, 9]\n    - [1, 0, 4]\n",
    )

    with caplog.at_level(logging.WARNING, logger="config"):
        config = load_config(path)

    assert "Duplicate edge 0-1" in caplog.text
    assert config.build_graph().edge_weight(0, 1) == 9


def test_non_utf8_file_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "instance.yaml"
    path.write_bytes(b"\xff\xfenetwork: {}\n")

    with pytest.raises(ConfigError):
        load_config(path)
