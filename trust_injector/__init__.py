"""
Trust Injector - install a local CA certificate into the trust stores of a Linux host.

This library provides:
- Detection of the system trust-store flavor (p11-kit, Debian, Arch, openSUSE)
- Installation and removal of anchor files with the matching rebuild command
- Atomic editing of the ca-certificates registry file
- Propagation into Firefox and Chromium NSS databases via certutil

Quick Start:
    >>> from trust_injector import install_ca, uninstall_ca
    >>>
    >>> install_ca("/home/me/.mitmproxy/mitmproxy-ca-cert.pem")
    >>> uninstall_ca("/home/me/.mitmproxy/mitmproxy-ca-cert.pem")

For CLI usage:
    $ sudo trust-injector install ./ca.pem
    $ sudo trust-injector uninstall ./ca.pem
"""

from .__version__ import (
    __version__,
    __version_info__,
    __title__,
    __description__,
    __author__,
    __license__,
)

from .installer import install_ca, uninstall_ca
from .trust_store import TrustStoreLayout, DEFAULT_LAYOUTS, resolve, anchor_filename, anchor_path, rebuild
from .registry import append, redact
from .nss import NssOutcome, nss_databases, install_nss, uninstall_nss, find_certutil

from .exceptions import (
    TrustInjectorError,
    UnsupportedPlatformError,
    ToolNotFoundError,
    CopyFailedError,
    FileRemoveFailedError,
    RegistryIoError,
    RegistryWriteError,
    RebuildFailedError,
    ValidationError,
)

# Public API
__all__ = [
    # Version
    "__version__",

    # Entry points
    "install_ca",
    "uninstall_ca",

    # Trust store
    "TrustStoreLayout",
    "DEFAULT_LAYOUTS",
    "resolve",
    "anchor_filename",
    "anchor_path",
    "rebuild",

    # Registry
    "append",
    "redact",

    # NSS
    "NssOutcome",
    "nss_databases",
    "install_nss",
    "uninstall_nss",
    "find_certutil",

    # Exceptions
    "TrustInjectorError",
    "UnsupportedPlatformError",
    "ToolNotFoundError",
    "CopyFailedError",
    "FileRemoveFailedError",
    "RegistryIoError",
    "RegistryWriteError",
    "RebuildFailedError",
    "ValidationError",
]
