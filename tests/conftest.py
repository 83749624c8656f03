import json
import os
import time

import pytest
import requests


SAMPLE_RATES = {"base": "USD", "rates": {"USD": 1.0, "EUR": 0.9}}


@pytest.fixture
def rates_body():
    return json.dumps(SAMPLE_RATES).encode("utf-8")


@pytest.fixture
def home(tmp_path):
    return tmp_path


@pytest.fixture
def env(home):
    return {"HOME": str(home), "CURRENCY_API_KEY": "test-key"}


@pytest.fixture
def cache_file(home):
    return home / ".cache" / "currency.db"


@pytest.fixture
def write_cache(cache_file):
    def _write(payload, age=0.0):
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(payload, (dict, list)):
            payload = json.dumps(payload)
        cache_file.write_text(payload, encoding="utf-8")
        mtime = int(time.time() - age)
        os.utime(cache_file, (mtime, mtime))
        return cache_file

    return _write


@pytest.fixture
def no_sleep(monkeypatch):
    monkeypatch.setattr("rates_cache.time.sleep", lambda s: None)


@pytest.fixture
def offline(monkeypatch, no_sleep):
    """Make every HTTP call through the requests module fail to connect."""
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append(url)
        raise requests.ConnectionError("network unreachable")

    monkeypatch.setattr("rates_cache.requests.get", fake_get)
    return calls
