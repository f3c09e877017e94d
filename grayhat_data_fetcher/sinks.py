"""Destinations for fetched records: a streaming CSV file or an in-memory list."""

import csv
import json
from pathlib import Path
from typing import Callable, Sequence

from .errors import OutputError


class MemorySink:
    """Collects records in arrival order for rendering once the run finishes."""

    def __init__(self):
        self.records = []

    def write(self, records: Sequence):
        self.records.extend(records)

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class CsvSink:
    """Writes one CSV row per record, flushing after every page.

    The file is created (or truncated) and the header written on construction,
    so rows from pages already fetched survive a failure later in the run.
    """

    def __init__(self, path: Path, header: Sequence[str], to_row: Callable[[object], list]):
        self.path = Path(path)
        self._to_row = to_row
        self.rows = 0
        try:
            self._fh = open(self.path, "w", newline="", encoding="utf-8")
        except OSError as e:
            raise OutputError(f"create csv: {e}") from e
        self._writer = csv.writer(self._fh, lineterminator="\n")
        self._write_rows([list(header)])

    def _write_rows(self, rows):
        try:
            self._writer.writerows(rows)
            self._fh.flush()
        except OSError as e:
            raise OutputError(f"write csv: {e}") from e

    def write(self, records: Sequence):
        self._write_rows([self._to_row(r) for r in records])
        self.rows += len(records)

    def close(self):
        if not self._fh.closed:
            self._fh.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def open_sink(output: Path | str | None, header: Sequence[str], to_row: Callable[[object], list]):
    """CsvSink when an output path is given, MemorySink otherwise."""
    if output:
        return CsvSink(Path(output), header, to_row)
    return MemorySink()


def render_json(records: Sequence) -> str:
    """Pretty-printed JSON array of records with the API's field names."""
    return json.dumps([r.to_json() for r in records], indent=2, ensure_ascii=False)
