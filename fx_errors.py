# fx_errors.py — exceptions raised by the converter pipeline.
#
# Library modules raise these; only currency_converter.main() turns them
# into exit codes.


class CurrencyError(Exception):
    """Base class for every failure the CLI reports."""


class ConfigError(CurrencyError):
    pass


class FetchError(CurrencyError):
    """Refreshing the cache failed. Recovered by falling back to old data."""


class CacheReadError(CurrencyError):
    pass


class MalformedRatesError(CurrencyError):
    pass


class UnknownCurrencyError(CurrencyError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Error: '{code}' is not recognized as a currency.")
