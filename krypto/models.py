from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from .errors import DecodeError


@dataclass(frozen=True)
class Credentials:
    """API credentials handed to :class:`~krypto.coinbase_client.CoinbaseClient`.

    key:
        Opaque API key, sent as ``CB-ACCESS-KEY``.
    secret:
        Base64 shared secret used to sign requests. Never sent.
    passphrase:
        Opaque passphrase chosen when the key was created.
    """
    key: str
    secret: str
    passphrase: str

    def __repr__(self) -> str:
        return f"Credentials(key={self.key!r}, secret='***', passphrase='***')"


class _Record:
    """Mapping between a dataclass and its JSON object.

    JSON names equal attribute names. Missing keys keep the field default,
    unknown keys are ignored and a value of the wrong JSON type is rejected.
    """

    @classmethod
    def from_dict(cls, data: Any):
        if not isinstance(data, Mapping):
            raise DecodeError(f"cannot decode {type(data).__name__} into {cls.__name__}")
        kwargs: Dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            if f.name not in data or data[f.name] is None:
                continue
            value = data[f.name]
            expected = bool if f.type == "bool" else str
            if type(value) is not expected:
                raise DecodeError(
                    f"cannot decode {type(value).__name__} into {cls.__name__}.{f.name}"
                )
            kwargs[f.name] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class Product(_Record):
    """A tradable currency pair as returned by ``GET /products``.

    Sizes, increments and funds stay decimal strings; converting them to
    float would lose precision.
    """
    id: str = ""
    display_name: str = ""
    base_currency: str = ""
    quote_currency: str = ""
    base_increment: str = ""
    quote_increment: str = ""
    base_min_size: str = ""
    base_max_size: str = ""
    min_market_funds: str = ""
    max_market_funds: str = ""
    status: str = ""
    status_message: str = ""
    cancel_only: bool = False
    limit_only: bool = False
    post_only: bool = False
    trading_disabled: bool = False

    @property
    def is_tradable(self) -> bool:
        """True if the book is online and trading is not disabled."""
        return self.status == "online" and not self.trading_disabled


@dataclass(frozen=True)
class Stats(_Record):
    """24 hour statistics for one product (``GET /products/{id}/stats``)."""
    open: str = ""
    high: str = ""
    low: str = ""
    last: str = ""
    volume: str = ""
    volume_30day: str = ""
