"""Fetch file search results from /files."""

import sys
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from ..errors import DecodeError
from ..models import MAX_PAGE_SIZE, FileRecord, FilesEnvelope, Page
from ..paginate import paginate
from ..sinks import open_sink, render_json

CSV_HEADER = ["id", "bucket", "bucketId", "name", "url", "size", "type", "lastModified"]


def format_timestamp(epoch: int) -> str:
    """RFC 3339 rendering of an epoch-seconds timestamp, in UTC.

    Epochs outside the representable date range are returned as the raw number.
    """
    try:
        return datetime.fromtimestamp(epoch, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    except (ValueError, OverflowError, OSError):
        return str(epoch)


def _opaque(value) -> str:
    return "" if value is None else str(value)


def file_row(f: FileRecord) -> list[str]:
    return [
        _opaque(f.id),
        f.bucket,
        _opaque(f.bucket_id),
        f.name,
        f.url,
        str(f.size),
        f.type,
        format_timestamp(f.last_modified),
    ]


def decode_files_page(data: bytes) -> Page:
    try:
        envelope = FilesEnvelope.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(f"decode: {e}") from e
    return Page(records=list(envelope.files), total=envelope.meta.results or None)


def fetch_files(
    client,
    keywords: str = "",
    bucket: str = "",
    extensions: str = "",
    stop_extensions: str = "",
    limit: int = MAX_PAGE_SIZE,
    start: int = 0,
    output: Path | str | None = None,
) -> list[FileRecord] | int:
    """Fetch every file matching the filters, page by page.

    With an output path, rows are streamed to CSV and the row count is
    returned. Without one, the records are printed as a JSON array and
    returned.
    """
    filters = {
        "keywords": keywords,
        "bucket": bucket,
        "extensions": extensions,
        "stopextensions": stop_extensions,
    }

    def fetch_page(offset: int, page_size: int) -> Page:
        data = client.get("/files", {**filters, "limit": page_size, "start": offset})
        return decode_files_page(data)

    with open_sink(output, CSV_HEADER, file_row) as sink:
        fetched = paginate(fetch_page, sink, limit=limit, start=start)

    if output:
        print(f"completed, saved to {output}", flush=True)
        return fetched

    sys.stdout.write(render_json(sink.records))
    sys.stdout.write("\n")
    sys.stdout.flush()
    return sink.records
