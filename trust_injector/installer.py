"""
installer.py

Install a CA certificate into the system trust store and the user's NSS
databases, or remove it again.

Steps run in order and the first failure aborts the rest. Nothing is rolled
back: a failed rebuild leaves the copied anchor file in place.

Run as root; the anchor directories and registry file belong to root.
"""

from __future__ import annotations
import shutil
import logging
import platform
from pathlib import Path
from typing import Iterable, List, Optional, Union

from . import registry
from .exceptions import CopyFailedError, FileRemoveFailedError, UnsupportedPlatformError
from .nss import DEFAULT_TOOL, NssOutcome, install_nss, uninstall_nss
from .nss import nss_databases as enumerate_nss_databases
from .trust_store import TrustStoreLayout, anchor_path, rebuild, resolve

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _check_platform(action: str, filename: PathLike) -> None:
    system = platform.system()
    if system != "Linux":
        raise UnsupportedPlatformError(
            f"Unable to {action} CA certificate '{filename}' on this platform ({system})"
        )


def _databases(nss_databases_override, extra_nss_databases):
    if nss_databases_override is not None:
        return list(nss_databases_override)
    return enumerate_nss_databases(extra=extra_nss_databases)


def install_ca(
    filename: PathLike,
    candidates: Optional[Iterable[TrustStoreLayout]] = None,
    nss: bool = True,
    nss_tool: str = DEFAULT_TOOL,
    nss_databases: Optional[Iterable[PathLike]] = None,
    extra_nss_databases: Iterable[PathLike] = (),
) -> List[NssOutcome]:
    """
    Trust the CA certificate at filename system-wide and in NSS databases.

    Args:
        filename: Existing certificate file (PEM)
        candidates: Trust-store layouts to probe (defaults to the built-in table)
        nss: Whether to propagate into NSS databases
        nss_tool: certutil executable name or path
        nss_databases: Databases to use instead of enumerating them
        extra_nss_databases: Databases appended to the enumerated ones

    Returns:
        List[NssOutcome]: Per-database certutil results

    Raises:
        UnsupportedPlatformError: No known trust store (nothing was changed)
        CopyFailedError: The anchor file could not be written
        RegistryIoError, RegistryWriteError: The registry update failed
        ToolNotFoundError: The rebuild tool or certutil is missing
        RebuildFailedError: The rebuild command exited non-zero
    """
    _check_platform("install", filename)
    layout = resolve(candidates)
    dest = anchor_path(filename, layout)

    logger.debug("copying cert from %s to %s", filename, dest)
    try:
        shutil.copyfile(filename, dest)
    except OSError as e:
        raise CopyFailedError(f"Unable to copy {filename} to {dest}: {e}") from e

    if layout.registry_path is not None:
        registry.append(layout.registry_path, dest.name)

    rebuild(layout)

    if not nss:
        return []
    return install_nss(filename, tool=nss_tool, databases=_databases(nss_databases, extra_nss_databases))


def uninstall_ca(
    filename: PathLike,
    candidates: Optional[Iterable[TrustStoreLayout]] = None,
    nss: bool = True,
    nss_tool: str = DEFAULT_TOOL,
    nss_databases: Optional[Iterable[PathLike]] = None,
    extra_nss_databases: Iterable[PathLike] = (),
) -> List[NssOutcome]:
    """
    Remove a certificate previously added with install_ca.

    filename must be the same path string that was given to install_ca; it
    determines both the anchor file name and the NSS nickname.

    Raises:
        UnsupportedPlatformError: No known trust store (nothing was changed)
        FileRemoveFailedError: The anchor file could not be removed
        RegistryIoError, RegistryWriteError: The registry update failed
        ToolNotFoundError: The rebuild tool or certutil is missing
        RebuildFailedError: The rebuild command exited non-zero
    """
    _check_platform("uninstall", filename)
    layout = resolve(candidates)
    dest = anchor_path(filename, layout)

    logger.debug("removing cert %s", dest)
    try:
        dest.unlink()
    except OSError as e:
        raise FileRemoveFailedError(f"Unable to remove {dest}: {e}") from e

    if layout.registry_path is not None:
        registry.redact(layout.registry_path, dest.name)

    rebuild(layout)

    if not nss:
        return []
    return uninstall_nss(filename, tool=nss_tool, databases=_databases(nss_databases, extra_nss_databases))
