"""FastAPI application exposing Textract text detection over HTTP.

A failed Textract call maps to 502, a failed write of the response
artifact to 500. Responses are only written inside the configured output
directory; any other output path is rejected with 422.
"""

import time
from pathlib import Path

from fastapi import FastAPI, HTTPException

from textract_ocr import __version__
from textract_ocr.ocr.credentials import DefaultCredentialProvider
from textract_ocr.ocr.errors import (
    PersistenceError,
    RemoteServiceError,
    ResponseFormatError,
)
from textract_ocr.ocr.models import DocumentReference
from textract_ocr.ocr.report import iter_display_lines, write_result
from textract_ocr.ocr.textract_client import TextractClient
from textract_ocr.utils.config import AppConfig, load_config
from textract_ocr.utils.logger import get_logger

from .schemas import ExtractRequest, ExtractResponse, HealthResponse

logger = get_logger(__name__)

app = FastAPI(
    title="Textract OCR API",
    description="Detect text in documents stored in S3",
    version=__version__,
)


def _get_config() -> AppConfig:
    return load_config()


def _get_client(config: AppConfig, region: str) -> TextractClient:
    """Build a Textract client for a request.

    Args:
        config: Application configuration.
        region: Region requested by the caller.

    Returns:
        Client bound to ``region``.
    """
    return TextractClient(
        region,
        DefaultCredentialProvider(config.aws.profile_name),
        endpoint_url=config.aws.endpoint_url,
    )


def _resolve_output(config: AppConfig, output_path: str) -> Path:
    """Resolve a requested output path inside the output directory.

    Raises:
        HTTPException: 422 if the path would land outside the directory.
    """
    directory = Path(config.output.directory).resolve()
    destination = (directory / output_path).resolve()
    if not destination.is_relative_to(directory):
        raise HTTPException(
            status_code=422,
            detail=f"output_path must stay inside {config.output.directory}",
        )
    return destination


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return service health status."""
    config = _get_config()
    return HealthResponse(
        status="healthy",
        version=__version__,
        region=config.aws.region,
    )


@app.post("/extract", response_model=ExtractResponse)
def extract(request: ExtractRequest) -> ExtractResponse:
    """Detect text in an S3 document and optionally save the response.

    Args:
        request: Document location, region and output path.

    Returns:
        Detected lines and block statistics.
    """
    start_time = time.time()
    config = _get_config()
    document = DocumentReference(request.bucket, request.key, request.version)

    destination = None
    if request.output_path:
        destination = _resolve_output(config, request.output_path)

    try:
        client = _get_client(config, request.region or config.aws.region)
        result = client.extract_text(document)
    except (RemoteServiceError, ResponseFormatError) as exc:
        logger.error("Text detection failed for %s: %s", document, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    if destination is not None:
        try:
            write_result(result, destination, indent=config.output.indent)
        except PersistenceError as exc:
            logger.error("Saving response for %s failed: %s", document, exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    return ExtractResponse(
        success=True,
        request_id=result.request_id,
        document=str(document),
        lines=list(iter_display_lines(result)),
        block_count=len(result.blocks),
        blocks_by_type=result.count_by_type(),
        page_count=result.page_count,
        output_path=request.output_path,
        processing_time_ms=(time.time() - start_time) * 1000,
    )
