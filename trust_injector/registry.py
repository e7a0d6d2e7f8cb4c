"""
registry.py

Line-based editing of the flat registry file some trust-store flavors use
to list the anchor files that belong in the rebuilt bundle
(e.g. /etc/ca-certificates.conf on Debian).

Each rewrite goes to a temporary file in the same directory which is then
renamed over the original, so readers only ever see the old or the new
content.
"""

from __future__ import annotations
import os
import shutil
import logging
import tempfile
from pathlib import Path
from typing import Union

from .exceptions import RegistryIoError, RegistryWriteError

logger = logging.getLogger(__name__)


def _read_contents(registry_path: Path) -> str:
    try:
        with open(registry_path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise RegistryIoError(f"Unable to read registry file {registry_path}: {e}") from e


def _entry(line: str) -> str:
    # CRLF files keep their line endings; compare without the "\r"
    return line[:-1] if line.endswith("\r") else line


def _replace_contents(registry_path: Path, content: str) -> None:
    """Write content to a sibling temp file and rename it over registry_path."""
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=registry_path.parent,
            prefix=f".{registry_path.name}.",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        shutil.copymode(registry_path, tmp_name)
        os.replace(tmp_name, registry_path)
    except (OSError, UnicodeError) as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise RegistryWriteError(f"Unable to rewrite registry file {registry_path}: {e}") from e


def append(registry_path: Union[str, Path], basename: str) -> None:
    """
    Add basename as a line of the registry file unless it is already listed.

    Args:
        registry_path: Path to the registry file
        basename: Anchor file name to register

    Raises:
        RegistryIoError: If the registry cannot be read
        RegistryWriteError: If the rewrite fails
    """
    registry_path = Path(registry_path)
    content = _read_contents(registry_path)

    if basename in (_entry(line) for line in content.split("\n")):
        logger.debug("%s already lists %s", registry_path, basename)
        return

    newline = "\r\n" if "\r\n" in content else "\n"
    if content and not content.endswith("\n"):
        content += newline
    content += basename + newline

    logger.debug("Appending %s with CA %s added", registry_path, basename)
    _replace_contents(registry_path, content)


def redact(registry_path: Union[str, Path], basename: str) -> None:
    """
    Remove every line equal to basename from the registry file.

    The file is rewritten even when basename is not listed.

    Raises:
        RegistryIoError: If the registry cannot be read
        RegistryWriteError: If the rewrite fails
    """
    registry_path = Path(registry_path)
    content = _read_contents(registry_path)

    logger.debug("Redacting from %s for CA %s (removed)", registry_path, basename)
    kept = [line for line in content.split("\n") if _entry(line) != basename]
    _replace_contents(registry_path, "\n".join(kept))
