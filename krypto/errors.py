"""Exception hierarchy shared by the client, the config loader and the CLI.

Everything raised on purpose by :mod:`krypto` derives from :class:`KryptoError`
so callers can catch a single type.  Lower level failures are chained with
``raise ... from exc`` and never retried.
"""
from typing import Optional


class KryptoError(Exception):
    """Base class for all errors raised by this package."""


class InvalidInputError(KryptoError, ValueError):
    """A required argument (signing input, product id, ...) was empty."""


class DecodeError(KryptoError, ValueError):
    """The API secret is not base64, or a response body does not match its shape."""


class NotConfiguredError(KryptoError):
    """The client was used without an HTTP executor."""


class TransportError(KryptoError):
    """The request could not be performed or the API answered with an error status.

    ``status_code`` is ``None`` when no HTTP response was received at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigError(KryptoError):
    """Credentials are missing, unreadable, or still set to their placeholders."""
