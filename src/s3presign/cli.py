"""CLI entry point for s3presign."""

import argparse
import json
import logging
import sys
from pathlib import Path

from s3presign import metrics
from s3presign.client import S3Client
from s3presign.config import load_config
from s3presign.errors import S3SignerError, TransportError
from s3presign.logging_config import configure_logging

logger = logging.getLogger("s3presign")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list to parse. Defaults to sys.argv[1:].

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        prog="s3presign",
        description="s3presign - SigV4 signed requests and presigned URLs for S3",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("s3presign.yaml"),
        help="Path to YAML configuration file (default: s3presign.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config, default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        default=None,
        choices=["text", "json"],
        help="Log format: 'text' (human-readable) or 'json' (structured)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    get_p = sub.add_parser("presign-get", help="Print a presigned download URL")
    get_p.add_argument("key", help="Object key")
    get_p.add_argument(
        "--expires", type=int, default=3600, help="URL lifetime in seconds (default: 3600)"
    )

    post_p = sub.add_parser("presign-post", help="Print a presigned POST form as JSON")
    post_p.add_argument("key", help="Object key")
    post_p.add_argument("--content-type", required=True, help="Content-Type of the upload")
    post_p.add_argument(
        "--max-size",
        type=int,
        default=10485760,
        help="Maximum upload size in bytes (default: 10485760)",
    )
    post_p.add_argument(
        "--expires", type=int, default=3600, help="Policy lifetime in seconds (default: 3600)"
    )
    post_p.add_argument("--acl", default=None, help="Canned ACL, e.g. public-read")

    head_p = sub.add_parser("head", help="Send a signed HEAD request for an object")
    head_p.add_argument("key", help="Object key")

    delete_p = sub.add_parser("delete", help="Send a signed DELETE request for an object")
    delete_p.add_argument("key", help="Object key")

    return parser.parse_args(argv)


def _print_response(response) -> int:
    print(
        json.dumps(
            {"status": response.status_code, "headers": dict(response.headers)},
            indent=2,
        )
    )
    return 1 if response.status_code >= 400 else 0


def run(args: argparse.Namespace, client: S3Client) -> int:
    """Execute one CLI command against a client.

    Returns:
        Process exit code.
    """
    if args.command == "presign-get":
        print(client.generate_presigned_get(args.key, args.expires))
        return 0

    if args.command == "presign-post":
        info = client.generate_presigned_post(
            args.key,
            args.content_type,
            args.max_size,
            args.expires,
            acl=args.acl,
        )
        print(json.dumps(info.to_dict(), indent=2))
        return 0

    try:
        if args.command == "head":
            response = client.head_object(args.key)
        else:
            response = client.delete_object(args.key)
    except TransportError as exc:
        logger.error("Request failed: %s", exc)
        return 1
    return _print_response(response)


def _export_metrics(path: str) -> None:
    try:
        metrics.write_textfile(path)
    except OSError as exc:
        logger.error("Failed to write metrics to %s: %s", path, exc)
    else:
        logger.debug("Wrote metrics to %s", path)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the s3presign CLI.

    Loads configuration, applies CLI overrides, configures logging and
    metrics, then runs the requested command. With metrics enabled and
    observability.textfile set, the counters are written there on exit.

    Args:
        argv: Argument list to parse. Defaults to sys.argv[1:].

    Returns:
        Process exit code.
    """
    args = parse_args(argv)

    # Basic stderr logger for config-loading errors
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    try:
        config = load_config(args.config)
    except FileNotFoundError:
        logger.error("Config file not found: %s", args.config)
        return 1
    except Exception as exc:
        logger.error("Failed to load config: %s", exc)
        return 1

    if args.log_level is not None:
        config.logging.level = args.log_level
    if args.log_format is not None:
        config.logging.format = args.log_format

    configure_logging(
        level=config.logging.level,
        fmt=config.logging.format,
        secrets=[config.s3.secret_key],
    )
    observability = config.observability
    if observability.metrics:
        metrics.init_metrics()
        if observability.textfile is None:
            logger.warning(
                "Metrics enabled but observability.textfile is not set; "
                "counters will not be exported"
            )

    try:
        with S3Client.from_config(config) as client:
            return run(args, client)
    except S3SignerError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        if observability.metrics and observability.textfile:
            _export_metrics(observability.textfile)


if __name__ == "__main__":
    sys.exit(main())
