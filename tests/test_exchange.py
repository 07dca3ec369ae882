import io

import requests

from krypto.exchange import HttpRequest, HttpResponse, RequestsExecutor


class FakeRaw(io.BytesIO):
    decode_content = False


class FakeSession:
    def __init__(self):
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        resp = requests.Response()
        resp.status_code = 200
        resp.headers["Content-Type"] = "application/json"
        resp.raw = FakeRaw(b"[]")
        return resp

    def close(self):
        self.closed = True


def test_requests_executor_streams_body():
    session = FakeSession()
    ex = RequestsExecutor(session=session, timeout=3.5)
    req = HttpRequest(method="GET", url="https://api.pro.coinbase.com/products", headers={"CB-ACCESS-KEY": "k"})

    resp = ex.execute(req)

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "https://api.pro.coinbase.com/products")
    assert kwargs["headers"] == {"CB-ACCESS-KEY": "k"}
    assert kwargs["timeout"] == 3.5
    assert kwargs["stream"] is True
    assert resp.status_code == 200
    assert resp.body.decode_content is True
    assert resp.body.read() == b"[]"
    assert resp.headers["Content-Type"] == "application/json"


def test_requests_executor_close_closes_session():
    session = FakeSession()
    RequestsExecutor(session=session).close()
    assert session.closed


def test_response_context_manager_closes_body():
    body = io.BytesIO(b"{}")
    with HttpResponse(status_code=200, body=body):
        pass
    assert body.closed
