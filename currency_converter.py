# currency_converter.py — command-line currency converter.
#
# Usage:
#   currency FROM TO amount
#   currency USD EUR 123.45
#
# Rates come from Open Exchange Rates and are cached in ~/.cache/currency.db
# for one hour. If a refresh fails the previous cache is used. See
# fx_config.py for the environment variables that override the defaults.

import logging
import os
import sys
from typing import List, Mapping, Optional

from fx_config import load_config
from fx_errors import CurrencyError
from fx_rates import convert, format_conversion, lookup_rate, parse_rate_table
from rates_cache import ensure_fresh_cache, read_cache

log = logging.getLogger(__name__)

USAGE = (
    "currency -- Currency converter.\n"
    "Usage:   currency FROM TO amount\n"
    "Example: currency USD EUR 123.45"
)


# --- Helpers ---
def usage() -> str:
    return USAGE


def parse_amount(text: str) -> float:
    # float() also takes "1_000" and padded input; those count as malformed here.
    if "_" in text or text != text.strip():
        log.debug("amount %r is not a number, using 0.0", text)
        return 0.0
    try:
        return float(text)
    except ValueError:
        log.debug("amount %r is not a number, using 0.0", text)
        return 0.0


def _setup_logging(environ: Mapping[str, str]):
    """Attach a stderr handler; returns (handler, previous root level) for teardown."""
    name = (environ.get("CURRENCY_LOG_LEVEL") or "WARNING").upper()
    level = getattr(logging, name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger()
    previous = root.level
    root.addHandler(handler)
    root.setLevel(level)
    return handler, previous


def run(from_code: str, to_code: str, amount: float, environ: Mapping[str, str]) -> str:
    config = load_config(environ)
    ensure_fresh_cache(config)
    rates = parse_rate_table(read_cache(config.cache_file))
    rate_from = lookup_rate(rates, from_code)
    rate_to = lookup_rate(rates, to_code)
    return format_conversion(from_code, amount, to_code, convert(amount, rate_from, rate_to))


def main(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    env = os.environ if environ is None else environ

    # No argparse: any arity other than three prints usage and exits 0, not 2.
    if len(args) != 3:
        print(usage(), file=sys.stderr)
        return 0

    handler, previous_level = _setup_logging(env)
    from_code = args[0].upper()
    to_code = args[1].upper()
    amount = parse_amount(args[2])

    try:
        print(run(from_code, to_code, amount, env))
    except CurrencyError as e:
        print(e, file=sys.stderr)
        return 1
    finally:
        root = logging.getLogger()
        root.removeHandler(handler)
        root.setLevel(previous_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())
