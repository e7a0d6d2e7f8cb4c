"""
Unit tests for trust-store detection, anchor naming and rebuild.
"""

import pytest
from pathlib import Path

from trust_injector import trust_store
from trust_injector.trust_store import TrustStoreLayout, anchor_filename, anchor_path, rebuild, resolve
from trust_injector.exceptions import RebuildFailedError, ToolNotFoundError, UnsupportedPlatformError


def _layouts(root):
    return [
        TrustStoreLayout(root / "pki/anchors", "update-ca-trust", ("extract",)),
        TrustStoreLayout(root / "share/ca-certificates", "update-ca-certificates", (), root / "ca.conf"),
        TrustStoreLayout(root / "local/ca-certificates", "update-ca-certificates", (), root / "ca.conf"),
        TrustStoreLayout(root / "trust-source/anchors", "trust", ("extract-compat",)),
    ]


def test_resolve_picks_earliest_existing_candidate(tmp_path):
    layouts = _layouts(tmp_path)
    for layout in layouts[1:]:
        layout.anchor_dir.mkdir(parents=True)

    assert resolve(layouts) is layouts[1]

    layouts[0].anchor_dir.mkdir(parents=True)
    assert resolve(layouts) is layouts[0]


def test_resolve_falls_through_to_last_candidate(tmp_path):
    layouts = _layouts(tmp_path)
    layouts[-1].anchor_dir.mkdir(parents=True)
    assert resolve(layouts) is layouts[-1]


def test_resolve_ignores_plain_files(tmp_path):
    layouts = _layouts(tmp_path)
    layouts[0].anchor_dir.parent.mkdir(parents=True)
    layouts[0].anchor_dir.write_text("not a directory")
    layouts[2].anchor_dir.mkdir(parents=True)
    assert resolve(layouts) is layouts[2]


def test_resolve_without_candidates_is_unsupported(tmp_path):
    with pytest.raises(UnsupportedPlatformError):
        resolve(_layouts(tmp_path))
    with pytest.raises(UnsupportedPlatformError):
        resolve([])


def test_default_layouts_probe_order():
    dirs = [str(layout.anchor_dir) for layout in trust_store.DEFAULT_LAYOUTS]
    assert dirs == [
        "/etc/pki/ca-trust/source/anchors",
        "/usr/share/ca-certificates",
        "/usr/local/share/ca-certificates",
        "/etc/ca-certificates/trust-source/anchors",
        "/usr/share/pki/trust/anchors",
    ]
    registries = [layout.registry_path for layout in trust_store.DEFAULT_LAYOUTS]
    assert registries[1] == registries[2] == Path("/etc/ca-certificates.conf")
    assert registries[0] is None and registries[3] is None and registries[4] is None


@pytest.mark.parametrize(
    "source, expected",
    [
        ("file with spaces.pem", "file_with_spaces.crt"),
        ("/tmp/dir with space/test.pem", "test.crt"),
        ("certificate.crt", "certificate.crt"),
        ("this_other_thing.crt", "this_other_thing.crt"),
        ("ROOT.PEM", "ROOT.crt"),
        ("windows.cer", "windows.crt"),
        ("no-extension", "no-extension.crt"),
    ],
)
def test_anchor_filename(source, expected):
    layout = TrustStoreLayout(Path("/anchors"), "rebuild")
    assert anchor_filename(source, layout) == expected


def test_anchor_filename_is_idempotent():
    for ext in (".crt", ".pem"):
        layout = TrustStoreLayout(Path("/anchors"), "rebuild", extension=ext)
        for source in ("file with spaces.pem", "a.b.crt", "plain", ".hidden"):
            once = anchor_filename(source, layout)
            assert anchor_filename(once, layout) == once


def test_anchor_filename_uses_layout_extension():
    layout = TrustStoreLayout(Path("/anchors"), "rebuild", extension=".pem")
    assert anchor_filename("mitmproxy-ca-cert.crt", layout) == "mitmproxy-ca-cert.pem"


def test_anchor_path_joins_anchor_dir(tmp_path):
    layout = TrustStoreLayout(tmp_path, "rebuild")
    assert anchor_path("/x/my ca.pem", layout) == tmp_path / "my_ca.crt"


def test_rebuild_runs_tool_with_args(make_tool, tmp_path):
    tool, log = make_tool("update-ca-trust")
    rebuild(TrustStoreLayout(tmp_path, str(tool), ("extract",)))
    assert log.read_text() == "extract\n"


def test_rebuild_runs_with_empty_environment(tmp_path, monkeypatch):
    tool = tmp_path / "env-dump"
    log = tmp_path / "env.log"
    tool.write_text(f'#!/bin/sh\nexport -p > "{log}"\n')
    tool.chmod(0o755)
    monkeypatch.setenv("TRUST_INJECTOR_LEAK", "1")

    rebuild(TrustStoreLayout(tmp_path, str(tool)))
    assert "TRUST_INJECTOR_LEAK" not in log.read_text()


def test_rebuild_nonzero_exit_raises(make_tool, tmp_path):
    tool, _ = make_tool("trust", exit_code=3)
    with pytest.raises(RebuildFailedError) as excinfo:
        rebuild(TrustStoreLayout(tmp_path, str(tool), ("extract-compat",)))
    assert excinfo.value.returncode == 3


def test_rebuild_missing_tool_raises(tmp_path):
    with pytest.raises(ToolNotFoundError):
        rebuild(TrustStoreLayout(tmp_path, str(tmp_path / "no-such-tool")))


def test_rebuild_tool_that_cannot_start_raises(tmp_path):
    tool = tmp_path / "no-shebang"
    tool.write_text("echo rebuilt\n")
    tool.chmod(0o755)
    with pytest.raises(RebuildFailedError) as excinfo:
        rebuild(TrustStoreLayout(tmp_path, str(tool)))
    assert isinstance(excinfo.value.__cause__, OSError)
    assert excinfo.value.returncode is None
