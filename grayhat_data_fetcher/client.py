"""Authenticated client for the bucket search REST API using httpx."""

import logging
import time

import httpx

from .errors import ConfigurationError, StatusError, TransportError
from .models import API_BASE, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


def build_url(path: str, params: dict | None = None, base_url: str = API_BASE) -> str:
    """Build a full request URL, leaving out empty query parameters.

    Values are percent-encoded; parameter order is not significant.
    """
    query = {k: str(v) for k, v in (params or {}).items() if v is not None and v != ""}
    ep = path if path.startswith("/") else f"/{path}"
    try:
        url = httpx.URL(base_url.rstrip("/") + ep)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"invalid base url {base_url!r}: {e}") from e
    if not url.scheme or not url.host:
        raise ConfigurationError(f"invalid base url {base_url!r}")
    if query:
        url = url.copy_merge_params(query)
    return str(url)


def _check_deadline(deadline: float):
    if time.monotonic() > deadline:
        raise TransportError("request error: timeout")


class GrayhatClient:
    """Thin client for the search API: one bearer-authenticated GET at a time.

    No retries, no throttling, no caching. Transport failures, including
    running past the total timeout, raise TransportError; non-200 responses
    raise StatusError.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        if not api_key:
            raise ConfigurationError("missing api key")
        self.base_url = base_url
        self.timeout = timeout
        self._client = httpx.Client(
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    def get(self, path: str, params: dict | None = None) -> bytes:
        """GET an endpoint and return the raw response body.

        The whole request, body included, must finish within self.timeout
        seconds. The deadline is checked as each body chunk arrives, so a
        server trickling bytes cannot hold the request open.

        Args:
            path: API path relative to the base, e.g. "/files"
            params: Query parameters; empty values are dropped

        Returns:
            The body bytes of a 200 response.
        """
        url = build_url(path, params, self.base_url)
        logger.debug("GET %s", url)
        deadline = time.monotonic() + self.timeout
        try:
            with self._client.stream("GET", url) as resp:
                if resp.status_code != httpx.codes.OK:
                    raise StatusError(resp.status_code, url)
                chunks = []
                for chunk in resp.iter_bytes():
                    chunks.append(chunk)
                    _check_deadline(deadline)
                _check_deadline(deadline)
        except httpx.TransportError as e:
            raise TransportError(f"request error: {e}") from e
        return b"".join(chunks)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
