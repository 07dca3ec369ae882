"""HMAC-SHA256 request signing for the Coinbase Pro REST API.

The API authenticates a request by recomputing ``CB-ACCESS-SIGN`` from the
``CB-ACCESS-TIMESTAMP`` header, the HTTP method and the request path.  The
prehash is the plain concatenation of those three values; the query string
and the body are not part of it.
"""
import base64
import binascii
import hashlib
import hmac

from .errors import DecodeError, InvalidInputError


def sign(secret: str, timestamp: str, method: str, path: str) -> str:
    """Return the base64 ``CB-ACCESS-SIGN`` value for one request.

    ``secret`` is the base64 API secret exactly as issued by Coinbase.
    Raises :class:`InvalidInputError` if any signing argument is empty and
    :class:`DecodeError` if the secret is not valid base64.
    """
    if not timestamp or not method or not path:
        raise InvalidInputError("arguments to sign cannot be empty")
    try:
        key = base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"error decoding secret: {e}") from e

    prehash = timestamp + method + path
    mac = hmac.new(key, prehash.encode("utf-8"), hashlib.sha256)
    return base64.b64encode(mac.digest()).decode("ascii")


class Signer:
    """Binds :func:`sign` to one API secret."""

    def __init__(self, secret: str):
        self._secret = secret

    def sign(self, timestamp: str, method: str, path: str) -> str:
        return sign(self._secret, timestamp, method, path)
