"""Command-line entry point for bucket search exports."""

import argparse
import logging
import sys

from pydantic import ValidationError

from .client import GrayhatClient
from .errors import ConfigurationError, FetcherError
from .models import CLOUD_TYPES, MAX_PAGE_SIZE
from .settings import get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(message)s"

COMMANDS = ("files", "buckets", "stats")

_TRUE = {"1", "t", "true", "yes", "y"}
_FALSE = {"0", "f", "false", "no", "n"}


def _parse_bool(value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value {value!r}")


def build_parser(default_api_key: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grayhat-fetch",
        description="Search files and buckets and export the results as JSON or CSV",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-apikey",
        "--apikey",
        default=default_api_key,
        help="API key (or set env GHW_API_KEY)",
    )
    parser.add_argument(
        "-cmd",
        "--cmd",
        default="files",
        help="Command: files|buckets|stats (default: files)",
    )
    parser.add_argument("-keywords", "--keywords", default="", help="Search keywords")
    parser.add_argument(
        "-ext",
        "--ext",
        default="",
        help="Comma separated extensions filter, e.g. pdf,docx",
    )
    parser.add_argument(
        "-noext",
        "--noext",
        default="",
        help="Comma separated extensions to exclude",
    )
    parser.add_argument("-bucket", "--bucket", default="", help="Bucket id or url")
    parser.add_argument(
        "-limit",
        "--limit",
        type=int,
        default=MAX_PAGE_SIZE,
        help=f"Page size (1-{MAX_PAGE_SIZE}). All pages are fetched until results are exhausted",
    )
    parser.add_argument(
        "-start",
        "--start",
        type=int,
        default=0,
        help="Start offset (files/buckets)",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output",
        default="",
        help="Output file path (CSV, or raw body for stats). If empty, print to stdout",
    )
    parser.add_argument(
        "-type",
        "--type",
        dest="cloud_type",
        default="",
        help=f"Bucket cloud type filter: {'|'.join(CLOUD_TYPES)}",
    )
    parser.add_argument(
        "-onlybucket",
        "--onlybucket",
        type=_parse_bool,
        nargs="?",
        const=True,
        default=False,
        metavar="BOOL",
        help="Output only bucket names (one per line, or a single CSV column)",
    )
    return parser


def _setup_logging(level: str):
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def run(args: argparse.Namespace, settings) -> None:
    """Validate the parsed arguments and dispatch to the selected command."""
    if not args.apikey:
        raise ConfigurationError("missing api key")
    cmd = args.cmd.lower()
    if cmd not in COMMANDS:
        raise ConfigurationError(f"unknown cmd {args.cmd}")

    with GrayhatClient(
        args.apikey,
        base_url=settings.ghw_base_url,
        timeout=settings.ghw_timeout,
    ) as client:
        if cmd == "files":
            from .fetch_files import fetch_files

            fetch_files(
                client,
                keywords=args.keywords,
                bucket=args.bucket,
                extensions=args.ext,
                stop_extensions=args.noext,
                limit=args.limit,
                start=args.start,
                output=args.output,
            )
        elif cmd == "buckets":
            from .fetch_buckets import fetch_buckets

            fetch_buckets(
                client,
                keywords=args.keywords,
                cloud_type=args.cloud_type,
                limit=args.limit,
                start=args.start,
                output=args.output,
                only_bucket=args.onlybucket,
            )
        else:
            from .fetch_stats import fetch_stats

            fetch_stats(client, output=args.output)


def _load_settings():
    try:
        return get_settings()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"invalid settings: {problems}") from e


def main(argv=None):
    try:
        settings = _load_settings()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)
    parser = build_parser(default_api_key=settings.ghw_api_key)
    args = parser.parse_args(argv)
    _setup_logging(settings.ghw_log_level)

    try:
        run(args, settings)
    except FetcherError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
