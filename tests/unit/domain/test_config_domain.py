from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Resilience against corrupted config files.
3. Persistence (Save/Load) without touching real user data.
"""

import json
import os
from unittest.mock import patch

import pytest

from vmdep.domain import config as config_module
from vmdep.domain.config import get_config_path, get_default_config, load_config, save_config
from vmdep.domain.constants import CURRENT_CONFIG_VERSION


@pytest.fixture
def mock_user_data_dir(tmp_path):
    """
    Fixture to mock the user data directory.
    Prevents tests from reading/writing to the real OS user folder.
    """
    config_dir = tmp_path / "vmdep"
    config_dir.mkdir()
    with patch("vmdep.domain.config.get_user_data_dir", return_value=str(config_dir)):
        yield config_dir


def test_default_config_shape() -> None:
    cfg = get_default_config()
    assert cfg["roots"] == [os.getcwd()]
    assert cfg["directives"] == ["parse", "include"]
    assert cfg["extension"] == ".vm"
    assert cfg["reverse"] is False and cfg["recursive"] is False and cfg["variable"] is False


def test_load_without_file_returns_defaults(mock_user_data_dir) -> None:
    assert not (mock_user_data_dir / "config.json").exists()
    assert load_config() == get_default_config()


def test_load_corrupted_file_returns_defaults(mock_user_data_dir) -> None:
    (mock_user_data_dir / "config.json").write_text("{ incomplete json ", encoding="utf-8")
    assert load_config() == get_default_config()


def test_load_non_dict_returns_defaults(mock_user_data_dir) -> None:
    (mock_user_data_dir / "config.json").write_text("[1, 2]", encoding="utf-8")
    assert load_config() == get_default_config()


def test_load_merges_known_keys_only(tmp_path) -> None:
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({
        "version": "0.0.1",
        "directives": ["cmsparse"],
        "unknown_key": 1,
    }), encoding="utf-8")

    cfg = load_config(str(path))

    assert cfg["directives"] == ["cmsparse"]
    assert "unknown_key" not in cfg
    assert "version" not in cfg


def test_save_then_load_round_trip(mock_user_data_dir) -> None:
    cfg = get_default_config()
    cfg["roots"] = ["/templates"]
    save_config(cfg)

    stored = json.loads((mock_user_data_dir / "config.json").read_text(encoding="utf-8"))
    assert stored["version"] == CURRENT_CONFIG_VERSION
    assert load_config()["roots"] == ["/templates"]


def test_explicit_config_file_override(tmp_path) -> None:
    target = str(tmp_path / "pinned.json")
    with patch.object(config_module, "CONFIG_FILE", target):
        assert get_config_path() == target
