import json

import pytest
from pydantic import ValidationError

from eights.config import GameConfig


def test_defaults():
    config = GameConfig()
    assert config.opponent_delay == 1.0
    assert config.seed is None
    assert config.log_level == "INFO"


def test_log_level_is_normalized_and_validated():
    assert GameConfig(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        GameConfig(log_level="chatty")


def test_negative_delay_rejected():
    with pytest.raises(ValidationError):
        GameConfig(opponent_delay=-0.5)


def test_from_file(tmp_path):
    path = tmp_path / "game.json"
    path.write_text(json.dumps({"seed": 4, "opponent_delay": 0.25}), encoding="utf-8")
    config = GameConfig.from_file(path)
    assert config.seed == 4
    assert config.opponent_delay == 0.25
