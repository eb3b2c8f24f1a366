import json

from config import EditorConfig, load_config


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "missing.json", environ={}) == EditorConfig()


def test_file_and_env_overrides(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"node_radius": 30, "history_capacity": "12", "unknown": 1}))
    config = load_config(path, environ={"TINYGRAPH_NODE_RADIUS": "25.5"})
    assert config.node_radius == 25.5
    assert config.history_capacity == 12
    assert config.max_zoom == EditorConfig().max_zoom


def test_bad_values_fall_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{broken")
    assert load_config(path, environ={"TINYGRAPH_MAX_ZOOM": "lots"}) == EditorConfig()
