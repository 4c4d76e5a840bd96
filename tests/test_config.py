from pathlib import Path

import pytest

from othello import ConfigurationError, EngineConfig, config_from_dict, load_config

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"


def test_default_yaml_matches_builtin_defaults():
    assert load_config(DEFAULT_CONFIG).to_dict() == EngineConfig.default().to_dict()


def test_partial_override(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("search:\n  depth: 4\nweights:\n  mobility: 3\n")

    config = load_config(path)

    assert config.search.depth == 4
    assert config.search.weights.mobility == 3.0
    assert config.search.weights.corner == 100.0


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert load_config(path).to_dict() == EngineConfig.default().to_dict()


@pytest.mark.parametrize(
    "raw",
    [
        {"search": {"depth": 0}},
        {"search": {"breadth": 3}},
        {"weights": {"corner": 1}},
        {"weights": {"corners": 100}},
        {"ordering": {"edge": 5000}},
        {"training": {}},
        {"search": ["depth", 6]},
        {"weights": {"edge": "wide"}},
    ],
)
def test_invalid_config_rejected(raw):
    with pytest.raises(ConfigurationError):
        config_from_dict(raw)


def test_missing_or_malformed_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.yaml")

    broken = tmp_path / "broken.yaml"
    broken.write_text("search: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_config(broken)

    listing = tmp_path / "list.yaml"
    listing.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigurationError):
        load_config(listing)
