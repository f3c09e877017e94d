"""Fake search API for integration tests.

Real httpx client and real files on disk; only the network is replaced with
an httpx.MockTransport serving in-memory records.
"""

import functools

import httpx
import pytest

from grayhat_data_fetcher.client import GrayhatClient


def make_file(i, **overrides):
    f = {
        "id": i,
        "bucket": f"bucket{i % 3}",
        "bucketId": f"b{i % 3}",
        "name": f"file{i}.pdf",
        "url": f"https://bucket{i % 3}.s3.amazonaws.com/file{i}.pdf",
        "size": 1000 + i,
        "type": "pdf",
        "lastModified": 1700000000 + i,
    }
    f.update(overrides)
    return f


def make_bucket(i, cloud_type="aws", **overrides):
    b = {"id": i, "bucket": f"{cloud_type}-bucket{i}", "fileCount": 10 * i, "type": cloud_type}
    b.update(overrides)
    return b


class FakeApi:
    """Serves /files, /buckets and /stats and records every request.

    total: reported meta.results; None means len(records).
    fail_from: offset at and after which list endpoints answer fail_status.
    """

    def __init__(self):
        self.files = []
        self.buckets = []
        self.stats = b'{"stats": {"filesCount": 0}}'
        self.stats_status = 200
        self.total = None
        self.fail_from = None
        self.fail_status = 500
        self.requests = []

    def _page(self, key, records, request):
        start = int(request.url.params.get("start", "0"))
        limit = int(request.url.params.get("limit", "1000"))
        if self.fail_from is not None and start >= self.fail_from:
            return httpx.Response(self.fail_status, json={"error": "nope"})
        total = len(records) if self.total is None else self.total
        return httpx.Response(
            200, json={key: records[start:start + limit], "meta": {"results": total}}
        )

    def __call__(self, request):
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/v2")
        if path == "/files":
            return self._page("files", self.files, request)
        if path == "/buckets":
            return self._page("buckets", self.buckets, request)
        if path == "/stats":
            return httpx.Response(self.stats_status, content=self.stats)
        return httpx.Response(404)

    @property
    def offsets(self):
        return [int(r.url.params["start"]) for r in self.requests]

    @property
    def transport(self):
        return httpx.MockTransport(self)

    def client(self, api_key="test-key"):
        return GrayhatClient(api_key, transport=self.transport)


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def client(api):
    c = api.client()
    yield c
    c.close()


@pytest.fixture
def patch_client(api, monkeypatch):
    """Route the CLI's GrayhatClient through the fake API."""
    factory = functools.partial(GrayhatClient, transport=api.transport)
    monkeypatch.setattr("grayhat_data_fetcher.cli.GrayhatClient", factory)
    return api
