"""Command-line interface for Textract text detection.

Provides subcommands for running text detection on an S3 document and
for printing the lines of a previously saved response.
"""

import argparse
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from textract_ocr.ocr.credentials import DefaultCredentialProvider
from textract_ocr.ocr.errors import (
    PersistenceError,
    RemoteServiceError,
    ResponseFormatError,
)
from textract_ocr.ocr.models import DocumentReference, OcrResult
from textract_ocr.ocr.report import print_lines, report, write_response
from textract_ocr.ocr.textract_client import TextractClient
from textract_ocr.utils.config import AppConfig, load_config
from textract_ocr.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def _given(**values: str | None) -> dict[str, str]:
    return {k: v for k, v in values.items() if v is not None}


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Merge command-line values over the loaded configuration.

    Args:
        config: Configuration loaded from YAML.
        args: Parsed ``detect`` arguments.

    Returns:
        A new configuration with the overrides applied.
    """
    aws = config.aws.model_copy(
        update=_given(
            region=args.region,
            profile_name=args.profile,
            endpoint_url=args.endpoint_url,
        )
    )
    document = config.document.model_copy(
        update=_given(bucket=args.bucket, key=args.key, version=args.version)
    )
    output = config.output
    if args.output is not None:
        output = output.model_copy(update={"path": str(args.output)})
    return config.model_copy(
        update={"aws": aws, "document": document, "output": output}
    )


def detect(config: AppConfig) -> None:
    """Run text detection for the configured document and report it.

    Args:
        config: Fully resolved configuration.

    Raises:
        ValueError: If the bucket, key or region is empty.
        RemoteServiceError: If the Textract call fails.
        ResponseFormatError: If the response cannot be interpreted. The
            raw response is still written to the output path.
        PersistenceError: If the response cannot be written.
    """
    document = DocumentReference(
        bucket=config.document.bucket,
        key=config.document.key,
        version=config.document.version,
    )
    client = TextractClient(
        config.aws.region,
        DefaultCredentialProvider(config.aws.profile_name),
        endpoint_url=config.aws.endpoint_url,
    )
    try:
        result = client.extract_text(document)
    except ResponseFormatError as exc:
        if isinstance(exc.response, dict):
            write_response(
                exc.response, Path(config.output.path), indent=config.output.indent
            )
        raise
    report(result, Path(config.output.path), indent=config.output.indent)


def show(path: Path) -> None:
    """Print the LINE text of a saved Textract response.

    Args:
        path: Path to a JSON file written by ``detect``.
    """
    print_lines(OcrResult.from_file(path))


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Detect text in S3 documents with AWS Textract",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    detect_parser = subparsers.add_parser(
        "detect", help="Detect text in a document stored in S3"
    )
    detect_parser.add_argument("--bucket", help="S3 bucket holding the document")
    detect_parser.add_argument("--key", help="Object key of the document")
    detect_parser.add_argument("--version", help="Object version id")
    detect_parser.add_argument("--region", help="AWS region of the Textract endpoint")
    detect_parser.add_argument("--profile", help="AWS profile to take credentials from")
    detect_parser.add_argument("--endpoint-url", help="Override the Textract endpoint")
    detect_parser.add_argument(
        "-o", "--output", type=Path, help="File to write the raw response to"
    )
    detect_parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (default: configs/config.yaml)",
    )

    show_parser = subparsers.add_parser(
        "show", help="Print the lines of a saved response"
    )
    show_parser.add_argument("file", type=Path, help="Saved response JSON file")

    args = parser.parse_args(argv)

    if args.command == "detect":
        try:
            config = _apply_overrides(load_config(args.config), args)
        except (ValidationError, yaml.YAMLError) as exc:
            print(f"Error: invalid config: {exc}", file=sys.stderr)
            sys.exit(1)
        setup_logging(config.log_level)
        try:
            detect(config)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        except RemoteServiceError as exc:
            logger.debug("Textract call failed", exc_info=exc)
            print(f"Error: text detection failed: {exc}", file=sys.stderr)
            sys.exit(1)
        except ResponseFormatError as exc:
            logger.debug("Unreadable Textract response", exc_info=exc)
            saved = (
                f" (raw response saved to {config.output.path})"
                if isinstance(exc.response, dict)
                else ""
            )
            print(
                "Error: text detection succeeded but the response could not be "
                f"read: {exc}{saved}",
                file=sys.stderr,
            )
            sys.exit(1)
        except PersistenceError as exc:
            logger.debug("Writing the response failed", exc_info=exc)
            print(
                "Error: text detection succeeded but the response was not saved: "
                f"{exc}",
                file=sys.stderr,
            )
            sys.exit(1)
    elif args.command == "show":
        setup_logging()
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        try:
            show(args.file)
        except OSError as exc:
            print(f"Error: cannot read {args.file}: {exc}", file=sys.stderr)
            sys.exit(1)
        except ResponseFormatError as exc:
            print(f"Error: {args.file} is not a valid response: {exc}", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
