# rates_cache.py — on-disk cache of the latest rates document
#
# The cache is one file holding the raw JSON body of the last successful
# fetch. Its mtime is the only freshness signal: missing, unreadable, stale
# and "modified in the future" all collapse to "needs refresh".

import logging
import time
from pathlib import Path
from typing import Optional

import requests

from fx_config import CACHE_TTL_SECONDS, USER_AGENT, FxConfig, build_request_url
from fx_errors import CacheReadError, FetchError

log = logging.getLogger(__name__)

RETRY_DELAY_SECONDS = 1.0
_RETRYABLE = (requests.ConnectionError, requests.Timeout)


# --- Freshness ---
def cache_age(path: Path, now: Optional[float] = None) -> Optional[float]:
    try:
        mtime = path.stat().st_mtime
    except OSError:
        return None
    now = time.time() if now is None else now
    return now - mtime


def is_fresh(path: Path, now: Optional[float] = None) -> bool:
    age = cache_age(path, now)
    if age is None:
        log.debug("cache %s missing or unreadable", path)
        return False
    log.debug("cache %s age=%.1fs", path, age)
    return 0 <= age < CACHE_TTL_SECONDS


# --- Remote fetch ---
def fetch_rates(config: FxConfig, session=None) -> bytes:
    """GET the rates document, retrying connection failures up to max_attempts."""
    http = session or requests
    url = build_request_url(config)
    last_err = None
    for attempt in range(1, config.max_attempts + 1):
        try:
            log.debug("fetching %s (attempt %d/%d)", config.api_url, attempt, config.max_attempts)
            resp = http.get(url, headers={"User-Agent": USER_AGENT}, timeout=config.timeout)
            if not 200 <= resp.status_code < 300:
                raise FetchError(f"HTTP request failed with status: {resp.status_code}")
            return resp.content
        except _RETRYABLE as e:
            last_err = e
            if attempt < config.max_attempts:
                time.sleep(RETRY_DELAY_SECONDS)
        except requests.RequestException as e:
            raise FetchError(str(e)) from e
    raise FetchError(str(last_err)) from last_err


def refresh_cache(config: FxConfig, session=None) -> None:
    path = config.cache_file
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        body = fetch_rates(config, session=session)
        # Plain overwrite; a torn write is repaired by the next refresh.
        path.write_bytes(body)
    except OSError as e:
        raise FetchError(str(e)) from e
    log.debug("cache %s refreshed (%d bytes)", path, len(body))


def ensure_fresh_cache(config: FxConfig, session=None, now: Optional[float] = None) -> bool:
    """Refresh the cache when stale. Returns True only if a refresh succeeded."""
    if is_fresh(config.cache_file, now):
        return False
    try:
        refresh_cache(config, session=session)
    except FetchError as e:
        log.warning(
            "Warning: unable to refresh currency rates (%s). Trying to use previous data.", e
        )
        return False
    return True


# --- Read ---
def read_cache(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        raise CacheReadError(
            f"Error: unable to read currency rates from {path}. "
            "Verify the file exists and permissions."
        )
