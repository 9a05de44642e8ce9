"""Application entry point for the Textract OCR API server."""

import uvicorn

from textract_ocr.api.app import app
from textract_ocr.utils.config import load_config
from textract_ocr.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    """Start the FastAPI application server on the configured address."""
    config = load_config()
    setup_logging(config.log_level)
    logger.info(
        "Serving Textract OCR API on %s:%d (region %s, output directory %s)",
        config.server.host,
        config.server.port,
        config.aws.region,
        config.output.directory,
    )
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
