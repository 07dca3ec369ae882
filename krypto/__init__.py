from .coinbase_client import API_URL, CoinbaseClient
from .errors import (
    ConfigError,
    DecodeError,
    InvalidInputError,
    KryptoError,
    NotConfiguredError,
    TransportError,
)
from .exchange import HttpExecutor, HttpRequest, HttpResponse, RequestsExecutor
from .models import Credentials, Product, Stats
from .signer import Signer, sign
