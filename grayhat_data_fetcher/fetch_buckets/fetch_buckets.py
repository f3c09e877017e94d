"""Fetch bucket search results from /buckets."""

import sys
from pathlib import Path

from pydantic import ValidationError

from ..errors import DecodeError
from ..models import MAX_PAGE_SIZE, BucketRecord, BucketsEnvelope, Page
from ..paginate import paginate
from ..sinks import open_sink, render_json

CSV_HEADER = ["id", "bucket", "fileCount", "type"]
CSV_HEADER_NAMES_ONLY = ["bucket"]


def bucket_row(b: BucketRecord) -> list[str]:
    return ["" if b.id is None else str(b.id), b.bucket, str(b.file_count), b.type]


def bucket_name_row(b: BucketRecord) -> list[str]:
    return [b.bucket]


def decode_buckets_page(data: bytes) -> Page:
    try:
        envelope = BucketsEnvelope.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(f"decode: {e}") from e
    return Page(records=list(envelope.buckets), total=envelope.meta.results or None)


def type_filter(cloud_type: str):
    """Case-insensitive exact match on the bucket's cloud type."""
    wanted = cloud_type.casefold()

    def keep(b: BucketRecord) -> bool:
        return b.type.casefold() == wanted

    return keep


def fetch_buckets(
    client,
    keywords: str = "",
    cloud_type: str = "",
    limit: int = MAX_PAGE_SIZE,
    start: int = 0,
    output: Path | str | None = None,
    only_bucket: bool = False,
) -> list[BucketRecord] | int:
    """Fetch every bucket matching the filters, page by page.

    The type filter is sent to the API and also re-applied to each page
    here, since the server does not always honour it.
    """
    filters = {"keywords": keywords, "type": cloud_type}

    def fetch_page(offset: int, page_size: int) -> Page:
        data = client.get("/buckets", {**filters, "limit": page_size, "start": offset})
        return decode_buckets_page(data)

    if only_bucket:
        header, to_row = CSV_HEADER_NAMES_ONLY, bucket_name_row
    else:
        header, to_row = CSV_HEADER, bucket_row
    keep = type_filter(cloud_type) if cloud_type else None

    with open_sink(output, header, to_row) as sink:
        fetched = paginate(fetch_page, sink, limit=limit, start=start, keep=keep)

    if output:
        print(f"completed, saved to {output}", flush=True)
        return fetched

    if only_bucket:
        for b in sink.records:
            sys.stdout.write(f"{b.bucket}\n")
    else:
        sys.stdout.write(render_json(sink.records))
        sys.stdout.write("\n")
    sys.stdout.flush()
    return sink.records
