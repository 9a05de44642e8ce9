"""Console output and persistence of Textract results.

Lines are printed before the response is written, so a failed write
still leaves the extracted text on the console.
"""

import json
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any, TextIO

from textract_ocr.utils.logger import get_logger

from .errors import PersistenceError
from .models import OcrResult

logger = get_logger(__name__)


def iter_display_lines(result: OcrResult) -> Iterator[str]:
    """Yield the text of each LINE block in service order."""
    yield from result.lines()


def print_lines(result: OcrResult, stream: TextIO | None = None) -> int:
    """Write one LINE block per output line.

    Args:
        result: Textract result to print.
        stream: Output stream. Defaults to ``sys.stdout``.

    Returns:
        Number of lines written.
    """
    if stream is None:
        stream = sys.stdout
    count = 0
    for line in iter_display_lines(result):
        stream.write(f"{line}\n")
        count += 1
    stream.flush()
    return count


def _to_json(response: dict[str, Any], indent: int) -> str:
    return json.dumps(response, ensure_ascii=False, indent=indent) + "\n"


def serialize_result(result: OcrResult, indent: int = 2) -> str:
    """Serialize the complete response as JSON."""
    return _to_json(result.to_response(), indent)


def write_response(
    response: dict[str, Any], destination: Path, indent: int = 2
) -> None:
    """Write a response dict to ``destination`` as JSON.

    Parent directories are created as needed and an existing file is
    overwritten.

    Raises:
        PersistenceError: If the file cannot be created or written.
    """
    payload = _to_json(response, indent)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(exc.strerror or str(exc), destination) from exc
    logger.info("Response written to %s", destination)


def write_result(result: OcrResult, destination: Path, indent: int = 2) -> None:
    """Write the complete response of ``result`` to ``destination``.

    Raises:
        PersistenceError: If the file cannot be created or written.
    """
    write_response(result.to_response(), destination, indent=indent)


def report(
    result: OcrResult,
    destination: Path,
    stream: TextIO | None = None,
    indent: int = 2,
) -> None:
    """Print the LINE text of a result, then persist the full response.

    Args:
        result: Textract result to report.
        destination: File to write the raw response to.
        stream: Output stream for the lines. Defaults to ``sys.stdout``.
        indent: JSON indentation of the persisted file.

    Raises:
        PersistenceError: If the response cannot be written.
    """
    count = print_lines(result, stream)
    logger.debug("Printed %d lines", count)
    write_result(result, destination, indent=indent)
