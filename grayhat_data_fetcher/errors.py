"""Exceptions raised while talking to the search API or writing results.

Every one of these is fatal for the current run; the CLI logs the message
and exits non-zero.
"""


class FetcherError(Exception):
    """Base exception for all fetcher errors."""


class ConfigurationError(FetcherError):
    """Missing credentials, unknown command or a malformed base URL."""


class TransportError(FetcherError):
    """Network, DNS or timeout failure before a response arrived."""


class StatusError(FetcherError):
    """The API answered with something other than 200."""

    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"request error: http {status_code}")


class DecodeError(FetcherError):
    """A response body did not decode as the expected envelope."""


class OutputError(FetcherError):
    """The output file could not be created or written."""
