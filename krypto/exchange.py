import abc
from dataclasses import dataclass, field
from typing import IO, Dict, Optional, Union

import requests


@dataclass
class HttpRequest:
    """A fully signed request, ready to be put on the wire."""
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[Union[str, bytes]] = None


@dataclass
class HttpResponse:
    """Status, headers and an unread body stream.

    The body is consumed by the decoder straight from the stream; call
    :meth:`close` (or use the response as a context manager) when done.
    """
    status_code: int
    body: IO
    headers: Dict[str, str] = field(default_factory=dict)

    def close(self) -> None:
        close = getattr(self.body, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "HttpResponse":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class HttpExecutor(abc.ABC):
    """Performs HTTP requests on behalf of the client.

    The client signs and builds requests; an executor only moves bytes.
    Swap in a stub to test without a network.
    """

    @abc.abstractmethod
    def execute(self, request: HttpRequest) -> HttpResponse:
        """Perform ``request`` and return the response.

        Should raise on network failure; HTTP error statuses are returned,
        not raised, so the client can report the API's own message.
        """
        raise NotImplementedError


class RequestsExecutor(HttpExecutor):
    """Default executor backed by a :class:`requests.Session`.

    ``timeout`` (seconds) is enforced here, never by the client. Responses are
    streamed so the body is decoded straight off the connection.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = 10.0):
        self.session = session or requests.Session()
        self.timeout = timeout

    def execute(self, request: HttpRequest) -> HttpResponse:
        resp = self.session.request(
            request.method,
            request.url,
            headers=request.headers,
            data=request.body,
            timeout=self.timeout,
            stream=True,
        )
        # let urllib3 undo gzip/deflate while we read the raw stream
        resp.raw.decode_content = True
        return HttpResponse(
            status_code=resp.status_code,
            body=resp.raw,
            headers=dict(resp.headers),
        )

    def close(self) -> None:
        self.session.close()
