"""Search exposed cloud storage files and buckets and export the results.

Pages through the bucket search API with a bearer token and writes the
records as JSON or CSV.
"""

from .cli import main
from .client import GrayhatClient, build_url
from .models import BucketRecord, FileRecord

__all__ = ["main", "GrayhatClient", "build_url", "BucketRecord", "FileRecord"]

if __name__ == "__main__":
    main()
