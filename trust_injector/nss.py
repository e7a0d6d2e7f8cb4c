"""
nss.py

Find the NSS certificate databases of the current user and add or remove
a CA certificate in each of them with certutil.

Firefox profiles and Chromium's ~/.pki/nssdb keep their own trust
databases and ignore the system bundle. Most candidate paths will not
exist on a given host; those are skipped quietly. A failed certutil run
against one database is logged and the remaining databases are still
processed.
"""

from __future__ import annotations
import os
import glob
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .utils import find_tool, run_isolated

logger = logging.getLogger(__name__)

DEFAULT_TOOL = "certutil"

# Profile roots whose every entry may be an NSS database
PROFILE_GLOBS = [
    ".mozilla/firefox/*",
    "snap/firefox/common/.mozilla/firefox/*",
]

# Per-user databases relative to $HOME
HOME_DATABASES = [
    ".pki/nssdb",
    "snap/chromium/current/.pki/nssdb",
]

SYSTEM_DATABASES = [
    Path("/etc/pki/nssdb"),
]


@dataclass
class NssOutcome:
    """Result of one certutil run against one database."""

    database: Path
    returncode: Optional[int]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def nss_databases(home: Optional[Union[str, Path]] = None, extra: Iterable[Union[str, Path]] = ()) -> List[Path]:
    """
    List candidate NSS database directories for the current user.

    Args:
        home: Home directory (defaults to $HOME, or / when unset)
        extra: Additional database paths appended at the end

    Returns:
        List[Path]: Candidates in probe order, neither deduplicated nor
        checked for existence
    """
    if home is None:
        home = os.environ.get("HOME", "/")
    home = Path(home)

    paths: List[Path] = []
    for pattern in PROFILE_GLOBS:
        paths.extend(Path(p) for p in sorted(glob.glob(str(home / pattern))))

    paths.extend(home / rel for rel in HOME_DATABASES)
    paths.extend(SYSTEM_DATABASES)
    paths.extend(Path(p) for p in extra)
    return paths


def find_certutil(tool: str = DEFAULT_TOOL) -> str:
    """Locate certutil, raising ToolNotFoundError if it is missing."""
    return find_tool(tool)


def _run_each(certutil: str, databases: Iterable[Path], build_args, action: str) -> List[NssOutcome]:
    outcomes = []
    for db in databases:
        db = Path(db)
        try:
            if not db.is_dir():
                continue
        except OSError as e:
            logger.debug("Skipping %s: %s", db, e)
            continue

        logger.debug("Running certutil for %s to %s the cert", db, action)
        try:
            returncode = run_isolated([certutil, *build_args(db)])
        except OSError as e:
            logger.warning("certutil could not be started for %s: %s", db, e)
            outcomes.append(NssOutcome(db, None, str(e)))
            continue

        if returncode != 0:
            logger.warning("certutil failed to %s the cert in %s (status %d)", action, db, returncode)
        outcomes.append(NssOutcome(db, returncode))
    return outcomes


def install_nss(
    filename: Union[str, Path],
    tool: str = DEFAULT_TOOL,
    databases: Optional[Iterable[Union[str, Path]]] = None,
) -> List[NssOutcome]:
    """
    Add filename as a trusted CA to every existing NSS database.

    The certificate nickname is filename itself, exactly as given.

    Args:
        filename: Certificate file to import
        tool: certutil executable name or path
        databases: Databases to use instead of nss_databases()

    Returns:
        List[NssOutcome]: One entry per database certutil was run against

    Raises:
        ToolNotFoundError: If certutil is not on PATH
    """
    certutil = find_certutil(tool)
    filename = str(filename)
    if databases is None:
        databases = nss_databases()

    return _run_each(
        certutil,
        databases,
        lambda db: ["-A", "-d", str(db), "-t", "C,,", "-n", filename, "-i", filename],
        "install",
    )


def uninstall_nss(
    filename: Union[str, Path],
    tool: str = DEFAULT_TOOL,
    databases: Optional[Iterable[Union[str, Path]]] = None,
) -> List[NssOutcome]:
    """Delete the certificate nicknamed filename from every existing NSS database."""
    certutil = find_certutil(tool)
    filename = str(filename)
    if databases is None:
        databases = nss_databases()

    return _run_each(
        certutil,
        databases,
        lambda db: ["-D", "-d", str(db), "-n", filename],
        "uninstall",
    )
