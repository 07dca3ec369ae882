"""Client for the Coinbase Pro REST API.

Every request is signed with the account's API secret (see
:mod:`krypto.signer`) and handed to an :class:`~krypto.exchange.HttpExecutor`
for transport.  The executor is injected so tests can replace the network
with a stub; the client itself never retries and imposes no timeout.

Only the read-only product endpoints are wrapped:

- ``GET /products``
- ``GET /products/{id}``
- ``GET /products/{id}/stats``
"""
import json
import posixpath
import time
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from .errors import DecodeError, InvalidInputError, KryptoError, NotConfiguredError, TransportError
from .exchange import HttpExecutor, HttpRequest, HttpResponse
from .models import Credentials, Product, Stats
from .signer import Signer
from .utils import logger, timestamp

API_URL = "https://api.pro.coinbase.com/"

KEY_HEADER = "CB-ACCESS-KEY"
SIGN_HEADER = "CB-ACCESS-SIGN"
PASSPHRASE_HEADER = "CB-ACCESS-PASSPHRASE"
TIMESTAMP_HEADER = "CB-ACCESS-TIMESTAMP"
CONTENT_TYPE = "application/json"

Query = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def resolve_url(path: str, query: Optional[Query] = None, base_url: str = API_URL) -> Tuple[str, str]:
    """Join ``path`` onto ``base_url`` and append the encoded ``query``.

    Paths are joined segment-wise, so stray or doubled slashes collapse:
    ``/products//abc/stats`` resolves to ``<base>/products/abc/stats``.
    Characters outside a path segment are percent-escaped, so ``?`` or ``#``
    can never start a query string or fragment.
    Returns ``(url, request_path)`` where ``request_path`` is the escaped path
    the server will see, without the query string.
    """
    parts = urlsplit(base_url)
    request_path = posixpath.normpath(posixpath.join(parts.path or "/", path.lstrip("/")))
    request_path = quote(request_path, safe="/%")
    qs = urlencode(query, doseq=True) if query else ""
    return urlunsplit((parts.scheme, parts.netloc, request_path, qs, "")), request_path


def decode_response(stream, shape):
    """Decode the JSON document in ``stream`` into ``shape``.

    ``shape`` is a record class (:class:`Product`, :class:`Stats`) or a
    one-element list such as ``[Product]`` for a JSON array of records.
    The stream is read by the JSON parser directly; malformed JSON or a
    document of the wrong shape raises :class:`DecodeError`; a failure while
    reading the stream raises :class:`TransportError`.
    """
    try:
        data = json.load(stream)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"error decoding json: {e}") from e
    except Exception as e:
        # connection reset or read timeout while the body was still streaming
        raise TransportError(f"error reading response body: {e}") from e

    if isinstance(shape, list):
        (item,) = shape
        if not isinstance(data, list):
            raise DecodeError(f"cannot decode {type(data).__name__} into list of {item.__name__}")
        return [item.from_dict(obj) for obj in data]
    return shape.from_dict(data)


def _error_message(resp: HttpResponse) -> str:
    """Best effort extraction of the API's ``{"message": ...}`` error body."""
    try:
        data = json.load(resp.body)
    except Exception:
        return ""
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return ""


class CoinbaseClient:
    """Signs and dispatches Coinbase Pro REST requests.

    ``credentials`` are fixed for the life of the client. ``executor`` performs
    the HTTP calls; without one every request fails with
    :class:`NotConfiguredError`. ``clock`` returns Unix time in seconds and is
    only overridden by tests.
    """

    def __init__(
        self,
        credentials: Credentials,
        executor: Optional[HttpExecutor] = None,
        api_url: str = API_URL,
        clock: Callable[[], float] = time.time,
    ):
        self.credentials = credentials
        self.executor = executor
        self.api_url = api_url
        self._signer = Signer(credentials.secret)
        self._clock = clock

    # --- dispatch ---------------------------------------------------------
    def request(
        self,
        method: str,
        path: str,
        query: Optional[Query] = None,
        body: Any = None,
    ) -> HttpResponse:
        """Sign and perform one request, returning the unread response.

        The caller owns the response and must close it.  HTTP error statuses
        and executor failures are raised as :class:`TransportError`.
        """
        if self.executor is None:
            raise NotConfiguredError("client has no HTTP executor")
        if not method or not path:
            raise InvalidInputError("method and path cannot be empty")

        url, request_path = resolve_url(path, query, self.api_url)
        # one timestamp for both the signature and its header, or the API rejects the request
        ts = timestamp(self._clock)
        headers = {
            KEY_HEADER: self.credentials.key,
            SIGN_HEADER: self._signer.sign(ts, method, request_path),
            PASSPHRASE_HEADER: self.credentials.passphrase,
            TIMESTAMP_HEADER: ts,
            "Content-Type": CONTENT_TYPE,
        }
        if body is not None and not isinstance(body, (str, bytes)):
            body = json.dumps(body)

        req = HttpRequest(method=method, url=url, headers=headers, body=body)
        try:
            resp = self.executor.execute(req)
        except KryptoError:
            raise
        except Exception as e:
            raise TransportError(f"error performing request {method} {request_path}: {e}") from e

        logger.debug(f"{method} {url} -> {resp.status_code}")
        if resp.status_code >= 400:
            try:
                message = _error_message(resp)
            finally:
                resp.close()
            detail = f": {message}" if message else ""
            raise TransportError(
                f"{method} {request_path} failed with status {resp.status_code}{detail}",
                status_code=resp.status_code,
            )
        return resp

    def _get(self, path: str, shape):
        with self.request("GET", path) as resp:
            return decode_response(resp.body, shape)

    # --- endpoints --------------------------------------------------------
    def get_products(self) -> List[Product]:
        """Return every currency pair available on the exchange."""
        return self._get("/products", [Product])

    def get_product(self, product_id: str) -> Product:
        """Return one currency pair, e.g. ``"BTC-USD"``."""
        if not product_id:
            raise InvalidInputError("product id cannot be empty")
        return self._get(f"/products/{quote(product_id, safe='')}", Product)

    def get_product_stats(self, product_id: str) -> Stats:
        """Return the 24 hour stats of one currency pair."""
        if not product_id:
            raise InvalidInputError("product id cannot be empty")
        return self._get(f"/products/{quote(product_id, safe='')}/stats", Stats)
