"""Version information for trust-injector."""

__version__ = "0.1.0"
__version_info__ = tuple(int(i) for i in __version__.split("."))

__title__ = "trust-injector"
__description__ = "Install and remove a local CA certificate in the system and NSS trust stores"
__author__ = "Trust Injector Team"
__license__ = "MIT"
