from .fetch_buckets import CSV_HEADER, CSV_HEADER_NAMES_ONLY, fetch_buckets, type_filter

__all__ = ["CSV_HEADER", "CSV_HEADER_NAMES_ONLY", "fetch_buckets", "type_filter"]
