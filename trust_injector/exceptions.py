"""
Custom exceptions for the trust-injector library.
"""


class TrustInjectorError(Exception):
    """Base exception for all library errors."""
    pass


class UnsupportedPlatformError(TrustInjectorError):
    """Raised when no known trust-store layout is present on the host."""
    pass


class ToolNotFoundError(TrustInjectorError):
    """Raised when a required external tool is missing from the search path."""
    pass


class CopyFailedError(TrustInjectorError):
    """Raised when the certificate cannot be copied into the anchor directory."""
    pass


class FileRemoveFailedError(TrustInjectorError):
    """Raised when the installed anchor file cannot be removed."""
    pass


class RegistryIoError(TrustInjectorError):
    """Raised when the registry file cannot be read."""
    pass


class RegistryWriteError(TrustInjectorError):
    """Raised when the registry file cannot be rewritten."""
    pass


class RebuildFailedError(TrustInjectorError):
    """Raised when the trust-store rebuild command exits non-zero."""

    def __init__(self, message, returncode=None):
        super().__init__(message)
        self.returncode = returncode


class ValidationError(TrustInjectorError):
    """Raised when input validation fails."""
    pass
