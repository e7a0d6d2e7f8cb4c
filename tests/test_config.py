"""
Unit tests for YAML configuration loading.
"""

import pytest
import yaml
from pathlib import Path

from trust_injector.cli.config import (
    create_default_config,
    installer_options,
    layouts_from_config,
    load_config,
    validate_config,
)
from trust_injector.exceptions import ValidationError
from trust_injector.trust_store import TrustStoreLayout


def test_default_config_round_trips(tmp_path):
    path = tmp_path / "trust-injector.yaml"
    create_default_config(str(path))

    config = load_config(str(path))
    assert validate_config(config)
    assert config["nss"]["tool"] == "certutil"
    assert installer_options(config) == {
        "nss": True,
        "extra_nss_databases": [],
        "nss_tool": "certutil",
    }


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_load_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("nss: [unclosed\n")
    with pytest.raises(ValidationError):
        load_config(str(path))


def test_load_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValidationError):
        load_config(str(path))


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == {}


def test_layouts_from_config_keeps_order():
    config = {
        "trust_store": {
            "layouts": [
                {"anchor_dir": "/opt/anchors", "rebuild_binary": "rebuild-a", "rebuild_args": ["go"]},
                {
                    "anchor_dir": "/srv/anchors",
                    "rebuild_binary": "rebuild-b",
                    "registry_path": "/srv/ca.conf",
                    "extension": ".pem",
                },
            ]
        }
    }
    validate_config(config)

    assert layouts_from_config(config) == [
        TrustStoreLayout(Path("/opt/anchors"), "rebuild-a", ("go",)),
        TrustStoreLayout(Path("/srv/anchors"), "rebuild-b", (), Path("/srv/ca.conf"), ".pem"),
    ]
    assert installer_options(config)["candidates"] == layouts_from_config(config)


def test_installer_options_without_layouts_uses_builtin_table():
    assert "candidates" not in installer_options({})


def test_installer_options_nss_settings():
    config = {"nss": {"enabled": False, "tool": "/opt/nss/bin/certutil", "databases": ["/srv/nssdb"]}}
    validate_config(config)
    assert installer_options(config) == {
        "nss": False,
        "extra_nss_databases": ["/srv/nssdb"],
        "nss_tool": "/opt/nss/bin/certutil",
    }


@pytest.mark.parametrize(
    "config",
    [
        {"nss": []},
        {"nss": {"enabled": "yes"}},
        {"nss": {"databases": "/srv/nssdb"}},
        {"nss": {"tool": 3}},
        {"trust_store": {"layouts": {}}},
        {"trust_store": {"layouts": [{"anchor_dir": "/a"}]}},
        {"trust_store": {"layouts": [{"anchor_dir": "/a", "rebuild_binary": "b", "extension": "crt"}]}},
        {"trust_store": {"layouts": [{"anchor_dir": "/a", "rebuild_binary": "b", "rebuild_args": "x"}]}},
        {"logging": {"level": "LOUD"}},
    ],
)
def test_validate_rejects(config):
    with pytest.raises(ValidationError):
        validate_config(config)


def test_default_config_is_plain_yaml(tmp_path):
    path = tmp_path / "cfg.yaml"
    create_default_config(str(path))
    data = yaml.safe_load(path.read_text())
    assert list(data) == ["trust_store", "nss", "logging"]
