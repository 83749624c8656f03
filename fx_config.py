# fx_config.py — runtime settings for the currency CLI
#
# Every knob is read from the environment with a documented default:
#
#   CURRENCY_API_URL       endpoint   (default: Open Exchange Rates latest.json)
#   CURRENCY_API_KEY       app_id     (default: empty, get one at
#                                      https://openexchangerates.org/signup/free)
#   CURRENCY_CACHE_FILE    cache path (default: $HOME/.cache/currency.db)
#   CURRENCY_TIMEOUT       seconds per HTTP attempt (default: 10)
#   CURRENCY_MAX_ATTEMPTS  HTTP attempts per refresh (default: 2)
#   CURRENCY_LOG_LEVEL     logging level for stderr (default: WARNING)

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
from urllib.parse import urlencode

from fx_errors import ConfigError

# --- Defaults ---
DEFAULT_API_URL = "https://openexchangerates.org/api/latest.json"
CACHE_RELATIVE_PATH = ".cache/currency.db"
CACHE_TTL_SECONDS = 3600  # 1 hour, fixed
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_ATTEMPTS = 2
USER_AGENT = "currency-cli/1.0"


@dataclass(frozen=True)
class FxConfig:
    cache_file: Path
    api_url: str = DEFAULT_API_URL
    api_key: str = ""
    timeout: float = DEFAULT_TIMEOUT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS


def _number(environ: Mapping[str, str], name: str, default, cast):
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"Error: {name} must be a number, got {raw!r}.")


def default_cache_file(environ: Mapping[str, str]) -> Path:
    home = environ.get("HOME")
    if not home:
        raise ConfigError("Could not find $HOME environment variable")
    return Path(home) / CACHE_RELATIVE_PATH


def load_config(environ: Optional[Mapping[str, str]] = None) -> FxConfig:
    env = os.environ if environ is None else environ

    timeout = _number(env, "CURRENCY_TIMEOUT", DEFAULT_TIMEOUT, float)
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"Error: CURRENCY_TIMEOUT must be a positive number of seconds, got {timeout!r}.")

    override = (env.get("CURRENCY_CACHE_FILE") or "").strip()
    cache_file = Path(override).expanduser() if override else default_cache_file(env)

    return FxConfig(
        cache_file=cache_file,
        api_url=(env.get("CURRENCY_API_URL") or DEFAULT_API_URL).strip(),
        api_key=env.get("CURRENCY_API_KEY", ""),
        timeout=timeout,
        max_attempts=max(1, _number(env, "CURRENCY_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS, int)),
    )


def build_request_url(config: FxConfig) -> str:
    return f"{config.api_url}?{urlencode({'app_id': config.api_key})}"
