import json
import logging
import pytest
from hausmatch.config import MatchConfig

def test_defaults_search_translation_only():
    cfg = MatchConfig()
    assert cfg.initial_step == 4
    assert (cfg.low_threshold, cfg.high_threshold) == (30, 90)
    assert not cfg.searches_pose

def test_from_json_and_round_trip(tmp_path):
    path = tmp_path / "match.json"
    path.write_text(json.dumps({"initial_step": 8, "rotation_range": [-10, 10],
                                "rotation_step": 5}))
    cfg = MatchConfig.from_json(path)
    assert cfg.initial_step == 8
    assert cfg.rotation_range == (-10, 10)
    assert cfg.searches_pose
    assert MatchConfig.from_dict(cfg.to_dict()) == cfg

def test_unknown_keys_are_ignored(caplog):
    with caplog.at_level(logging.WARNING, logger="hausmatch.config"):
        cfg = MatchConfig.from_dict({"initial_step": 16, "colour": "red"})
    assert cfg.initial_step == 16
    assert "colour" in caplog.text

def test_invalid_values_raise():
    with pytest.raises(ValueError):
        MatchConfig(initial_step=0)
    with pytest.raises(ValueError):
        MatchConfig(scale_step=0)
