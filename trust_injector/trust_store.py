"""
trust_store.py

Detect which system trust-store flavor the host uses and rebuild its bundle.

Flavors are probed in a fixed order, most specific first. Several anchor
directories can coexist on one host (e.g. Fedora with Debian's
ca-certificates package installed), and only the first match pairs with a
rebuild command that actually reads it.

Functions:
 - resolve(candidates=None) -> TrustStoreLayout
 - anchor_filename(source, layout) -> str
 - anchor_path(source, layout) -> Path
 - rebuild(layout) -> None
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from .exceptions import RebuildFailedError, UnsupportedPlatformError
from .utils import find_tool, run_isolated

logger = logging.getLogger(__name__)

# Suffixes replaced by the layout's own extension
CERT_SUFFIXES = (".pem", ".crt", ".cer")


@dataclass(frozen=True)
class TrustStoreLayout:
    """Where anchors live for one trust-store flavor and how to rebuild it."""

    anchor_dir: Path
    rebuild_binary: str
    rebuild_args: Tuple[str, ...] = ()
    registry_path: Optional[Path] = None
    extension: str = ".crt"


DEFAULT_LAYOUTS = (
    # Fedora / RHEL (p11-kit)
    TrustStoreLayout(
        anchor_dir=Path("/etc/pki/ca-trust/source/anchors"),
        rebuild_binary="update-ca-trust",
        rebuild_args=("extract",),
    ),
    # Debian / Ubuntu
    TrustStoreLayout(
        anchor_dir=Path("/usr/share/ca-certificates"),
        rebuild_binary="/usr/sbin/update-ca-certificates",
        registry_path=Path("/etc/ca-certificates.conf"),
    ),
    TrustStoreLayout(
        anchor_dir=Path("/usr/local/share/ca-certificates"),
        rebuild_binary="/usr/sbin/update-ca-certificates",
        registry_path=Path("/etc/ca-certificates.conf"),
    ),
    # Arch
    TrustStoreLayout(
        anchor_dir=Path("/etc/ca-certificates/trust-source/anchors"),
        rebuild_binary="trust",
        rebuild_args=("extract-compat",),
    ),
    # openSUSE
    TrustStoreLayout(
        anchor_dir=Path("/usr/share/pki/trust/anchors"),
        rebuild_binary="update-ca-certificates",
    ),
)


def resolve(candidates: Optional[Iterable[TrustStoreLayout]] = None) -> TrustStoreLayout:
    """
    Return the first layout whose anchor directory exists.

    Args:
        candidates: Ordered layouts to probe (defaults to DEFAULT_LAYOUTS)

    Returns:
        TrustStoreLayout: The first match in probe order

    Raises:
        UnsupportedPlatformError: If no candidate directory exists
    """
    if candidates is None:
        candidates = DEFAULT_LAYOUTS

    for layout in candidates:
        if Path(layout.anchor_dir).is_dir():
            logger.debug("Using trust store at %s", layout.anchor_dir)
            return layout

    raise UnsupportedPlatformError("CA location could not be determined")


def anchor_filename(source: Union[str, Path], layout: TrustStoreLayout) -> str:
    """
    Name the anchor file for source under layout.

    Spaces become underscores and the extension is normalized to the one
    the layout expects. Applying it to its own output is a no-op.

    Example:
        >>> anchor_filename("/tmp/file with spaces.pem", layout)
        'file_with_spaces.crt'
    """
    name = Path(source).name.replace(" ", "_")
    stem, dot, suffix = name.rpartition(".")
    if dot and stem and f".{suffix.lower()}" in CERT_SUFFIXES:
        name = stem
    return name + layout.extension


def anchor_path(source: Union[str, Path], layout: TrustStoreLayout) -> Path:
    """Full path of the anchor file for source under layout."""
    return Path(layout.anchor_dir) / anchor_filename(source, layout)


def rebuild(layout: TrustStoreLayout) -> None:
    """
    Run the layout's rebuild command.

    Raises:
        ToolNotFoundError: If the rebuild binary is not on PATH
        RebuildFailedError: If it cannot be started or exits non-zero
    """
    binary = find_tool(layout.rebuild_binary)
    try:
        returncode = run_isolated([binary, *layout.rebuild_args])
    except OSError as e:
        raise RebuildFailedError(f"Unable to run {layout.rebuild_binary}: {e}") from e
    if returncode != 0:
        raise RebuildFailedError(
            f"{layout.rebuild_binary} exited with status {returncode}",
            returncode=returncode,
        )
