"""
Process helpers shared by the trust-store and NSS steps.

External tools run with an empty environment, the null device on all three
standard streams and inherited file descriptors closed, so they behave the
same whatever shell state the caller has.
"""

import shutil
import logging
import subprocess
from typing import Sequence

from .exceptions import ToolNotFoundError

logger = logging.getLogger(__name__)


def find_tool(name: str) -> str:
    """
    Locate an executable on the search path.

    Args:
        name: Executable name or path

    Returns:
        str: Resolved path of the executable

    Raises:
        ToolNotFoundError: If the executable cannot be found
    """
    path = shutil.which(name)
    if path is None:
        raise ToolNotFoundError(f"Required tool '{name}' not found on PATH")
    return path


def run_isolated(argv: Sequence[str]) -> int:
    """Run argv to completion in isolation and return its exit status."""
    logger.debug("Executing %s", " ".join(argv))
    res = subprocess.run(
        list(argv),
        env={},
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        close_fds=True,
    )
    return res.returncode
