import argparse
import json
import sys
from typing import Callable, List, Optional, Sequence, TextIO

from .coinbase_client import CoinbaseClient
from .config import load_config
from .errors import KryptoError
from .exchange import HttpExecutor, RequestsExecutor
from .models import Product
from .utils import configure_logging, logger

LIST_LENGTH = 10
LIST_TEMPLATE = "{:<10}{:<10}{:<10}"


def ask_to_continue(read: Optional[Callable[[str], str]] = None) -> bool:
    """Prompt until the user answers y/n. Empty input means yes, EOF means no."""
    read = read or input
    while True:
        try:
            answer = read("Continue? (y/n) ")
        except EOFError:
            return False
        answer = answer.strip().lower()
        if answer in ("y", ""):
            return True
        if answer == "n":
            return False


def render_products(
    products: Sequence[Product],
    out: Optional[TextIO] = None,
    ask: Callable[[], bool] = ask_to_continue,
    page_size: int = LIST_LENGTH,
) -> int:
    """Print the product table, pausing for confirmation every ``page_size`` rows.

    Returns the number of rows printed.
    """
    out = out or sys.stdout
    title = LIST_TEMPLATE.format("ID", "Base", "Quote")
    header = f"{title}\n{'=' * len(title)}"
    print(header, file=out)

    shown = 0
    for p in products:
        print(LIST_TEMPLATE.format(p.id, p.base_currency, p.quote_currency), file=out)
        shown += 1
        if shown % page_size == 0:
            print(file=out)
            if not ask():
                break
            print(file=out)
            print(header, file=out)
    return shown


def _print_record(record, out: TextIO) -> None:
    print(json.dumps(record.to_dict(), indent=2), file=out)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="krypto", description="Coinbase Pro product browser")
    sub = ap.add_subparsers(dest="command", metavar="command")
    sub.required = True
    sub.add_parser("list", help="List tradable currency pairs")
    p = sub.add_parser("product", help="Show one currency pair")
    p.add_argument("product_id", help="e.g. BTC-USD")
    s = sub.add_parser("stats", help="Show 24 hour stats for a currency pair")
    s.add_argument("product_id", help="e.g. BTC-USD")
    return ap


def main(argv: Optional[List[str]] = None, executor: Optional[HttpExecutor] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        credentials = load_config()
    except KryptoError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    owned = executor is None
    if owned:
        executor = RequestsExecutor()
    client = CoinbaseClient(credentials, executor)
    try:
        if args.command == "list":
            products = client.get_products()
            logger.info(f"fetched {len(products)} products")
            render_products(products)
        elif args.command == "product":
            _print_record(client.get_product(args.product_id), sys.stdout)
        elif args.command == "stats":
            _print_record(client.get_product_stats(args.product_id), sys.stdout)
    except KryptoError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        if owned:
            executor.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
