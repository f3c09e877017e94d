"""Fetch the aggregate statistics document from /stats."""

import sys
from pathlib import Path

from ..errors import OutputError


def fetch_stats(client, output: Path | str | None = None) -> bytes:
    """Fetch /stats and pass the body through untouched.

    The bytes go to stdout, or to output verbatim when a path is given.
    """
    data = client.get("/stats")
    if not output:
        sys.stdout.flush()
        sys.stdout.buffer.write(data)
        sys.stdout.flush()
        return data

    try:
        Path(output).write_bytes(data)
    except OSError as e:
        raise OutputError(f"write file: {e}") from e
    print(f"stats saved to {output}", flush=True)
    return data
