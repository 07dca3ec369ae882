import os
import sys

import pytest

# Ensure the project root (containing the ``krypto`` package) is on the import
# path when the tests run from a plain checkout.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from krypto.models import Credentials, Product, Stats

SECRET = "dGVzdHNlY3JldA=="  # base64("testsecret")


@pytest.fixture
def credentials():
    return Credentials(key="test-key", secret=SECRET, passphrase="test-pass")


@pytest.fixture
def btc_usd():
    return Product(
        id="BTC-USD",
        display_name="BTC/USD",
        base_currency="BTC",
        quote_currency="USD",
        base_increment="0.00000001",
        quote_increment="0.01",
        base_min_size="0.00100000",
        base_max_size="280.00000000",
        min_market_funds="5",
        max_market_funds="1000000",
        status="online",
        status_message="",
        cancel_only=False,
        limit_only=False,
        post_only=False,
        trading_disabled=False,
    )


@pytest.fixture
def btc_stats():
    return Stats(
        open="28650.01",
        high="29120.55",
        low="28400.00",
        last="28999.99",
        volume="10234.12345678",
        volume_30day="312345.87654321",
    )
