import io
import json
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlsplit

from .exchange import HttpExecutor, HttpRequest, HttpResponse
from .models import Product, Stats


class SimExecutor(HttpExecutor):
    """A deterministic stand-in for the Coinbase Pro REST API.

    - Serves ``/products``, ``/products/{id}`` and ``/products/{id}/stats``
      from in-memory records; unknown ids answer 404 like the real API.
    - Records every request it sees in ``requests`` for later inspection.
    - Useful to unit test the client and CLI without a live venue.
    """

    def __init__(self, products: Iterable[Product] = (), stats: Optional[Dict[str, Stats]] = None):
        self._products: Dict[str, Product] = {p.id: p for p in products}
        self._stats: Dict[str, Stats] = dict(stats or {})
        self.requests: List[HttpRequest] = []

    # --- helper ---
    @staticmethod
    def _respond(status: int, payload) -> HttpResponse:
        body = io.BytesIO(json.dumps(payload).encode("utf-8"))
        return HttpResponse(status_code=status, body=body, headers={"Content-Type": "application/json"})

    def execute(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if request.method != "GET":
            return self._respond(405, {"message": "Method Not Allowed"})

        parts = urlsplit(request.url).path.strip("/").split("/")
        if parts == ["products"]:
            return self._respond(200, [p.to_dict() for p in self._products.values()])
        if len(parts) == 2 and parts[0] == "products" and parts[1] in self._products:
            return self._respond(200, self._products[parts[1]].to_dict())
        if len(parts) == 3 and parts[0] == "products" and parts[2] == "stats" and parts[1] in self._products:
            return self._respond(200, self._stats.get(parts[1], Stats()).to_dict())
        return self._respond(404, {"message": "NotFound"})
