import stat
import pytest

from trust_injector.trust_store import TrustStoreLayout

TEST_PEM = """-----BEGIN CERTIFICATE-----
MIIBszCCAVmgAwIBAgIUTestTestTestTestTestTestTestTestwCgYIKoZIzj0E
AwIwFzEVMBMGA1UEAwwMVGVzdCBSb290IENBMB4XDTI1MDEwMTAwMDAwMFoXDTM1
-----END CERTIFICATE-----
"""


@pytest.fixture
def make_tool(tmp_path):
    """
    Create a fake executable that logs its arguments and exits with a given status.

    Returns a factory: make_tool(name, exit_code=0) -> (path, log_path)
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def factory(name, exit_code=0):
        tool = bin_dir / name
        log = tmp_path / f"{name}.log"
        tool.write_text(f'#!/bin/sh\necho "$@" >> "{log}"\nexit {exit_code}\n')
        tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return tool, log

    return factory


@pytest.fixture
def cert_file(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    cert = src / "file with spaces.pem"
    cert.write_text(TEST_PEM)
    return cert


@pytest.fixture
def debian_layout(tmp_path, make_tool):
    """A Debian-style layout rooted in tmp_path with a working rebuild tool."""
    anchors = tmp_path / "usr/share/ca-certificates"
    anchors.mkdir(parents=True)
    registry = tmp_path / "etc/ca-certificates.conf"
    registry.parent.mkdir(parents=True)
    registry.write_text("mozilla/Some_Root.crt\n")
    rebuild, _ = make_tool("update-ca-certificates")
    return TrustStoreLayout(
        anchor_dir=anchors,
        rebuild_binary=str(rebuild),
        registry_path=registry,
    )
