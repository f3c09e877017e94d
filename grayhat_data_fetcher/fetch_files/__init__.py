from .fetch_files import CSV_HEADER, fetch_files, file_row, format_timestamp

__all__ = ["CSV_HEADER", "fetch_files", "file_row", "format_timestamp"]
