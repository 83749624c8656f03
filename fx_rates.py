# fx_rates.py — rate table parsing and the conversion itself
#
# Rates are relative to the service's base currency (USD for Open Exchange
# Rates). Convert FROM -> base -> TO.

import json
import logging
import math
from typing import Any, Dict

from fx_errors import MalformedRatesError, UnknownCurrencyError

log = logging.getLogger(__name__)


def parse_rate_table(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError:
        raise MalformedRatesError("Could not parse JSON from the currency file")
    rates = data.get("rates") if isinstance(data, dict) else None
    if not isinstance(rates, dict):
        raise MalformedRatesError("Error: No 'rates' field found in the JSON data.")
    return rates


def coerce_rate(value: Any) -> float:
    # bool is an int subclass but not a JSON number
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return float(value)
        except OverflowError:
            # JSON integers are unbounded in Python
            return math.copysign(math.inf, value)
    log.debug("non-numeric rate %r treated as 0.0", value)
    return 0.0


def lookup_rate(rates: Dict[str, Any], code: str) -> float:
    if code not in rates:
        raise UnknownCurrencyError(code)
    return coerce_rate(rates[code])


def _divide(a: float, b: float) -> float:
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def convert(amount: float, rate_from: float, rate_to: float) -> float:
    """(amount / rate_from) * rate_to with IEEE semantics for a zero rate."""
    return _divide(amount, rate_from) * rate_to


def format_conversion(from_code: str, amount: float, to_code: str, converted: float) -> str:
    return f"{from_code} {amount:.4f} = {to_code} {converted:.4f}"
