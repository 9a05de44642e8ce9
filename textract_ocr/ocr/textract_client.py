"""AWS Textract client for synchronous text detection.

Wraps a single ``DetectDocumentText`` call. The response is returned
as-is inside an :class:`OcrResult`; every failure of the call is
reported as a :class:`RemoteServiceError`.
"""

from typing import Any

from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from textract_ocr.utils.logger import get_logger

from .credentials import CredentialProvider, DefaultCredentialProvider
from .errors import RemoteServiceError
from .models import DocumentReference, OcrResult

logger = get_logger(__name__)

# One attempt only; failures are reported to the caller, not retried.
_CLIENT_CONFIG = Config(retries={"max_attempts": 1, "mode": "standard"})


class TextractClient:
    """Textract client bound to a single region.

    Args:
        region: AWS region of the Textract endpoint.
        credentials: Source of credentials. Defaults to the standard
            AWS credential chain.
        endpoint_url: Optional endpoint override, e.g. a local emulator.
    """

    def __init__(
        self,
        region: str,
        credentials: CredentialProvider | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        if not region:
            raise ValueError("Region must not be empty")
        self.region = region
        credentials = credentials or DefaultCredentialProvider()
        try:
            session = credentials.create_session(region)
            self.client = session.client(
                "textract",
                region_name=region,
                endpoint_url=endpoint_url,
                config=_CLIENT_CONFIG,
            )
        except BotoCoreError as exc:
            raise RemoteServiceError(str(exc)) from exc

    def extract_text(self, document: DocumentReference) -> OcrResult:
        """Detect text in a document stored in S3.

        Args:
            document: Location of the document.

        Returns:
            The complete Textract result.

        Raises:
            RemoteServiceError: If the call fails for any reason.
            ResponseFormatError: If the call succeeded but the response
                cannot be interpreted. The raw response is attached.
        """
        logger.info("Detecting text in %s (region %s)", document, self.region)
        try:
            response = self.client.detect_document_text(
                Document=document.to_request()
            )
        except ClientError as exc:
            error = exc.response.get("Error", {})
            raise RemoteServiceError(
                error.get("Message") or str(exc),
                error_code=error.get("Code"),
                request_id=_request_id(exc.response),
            ) from exc
        except BotoCoreError as exc:
            raise RemoteServiceError(str(exc)) from exc

        result = OcrResult.from_response(response)
        logger.info(
            "Textract returned %d blocks for %s (request id %s)",
            len(result.blocks),
            document,
            result.request_id,
        )
        return result


def _request_id(response: dict[str, Any]) -> str | None:
    return response.get("ResponseMetadata", {}).get("RequestId")


def extract_text(
    document: DocumentReference,
    region: str,
    credentials: CredentialProvider | None = None,
) -> OcrResult:
    """Run one text detection call against a fresh client.

    Args:
        document: Location of the document.
        region: AWS region of the Textract endpoint.
        credentials: Source of credentials. Defaults to the standard
            AWS credential chain.

    Returns:
        The complete Textract result.
    """
    return TextractClient(region, credentials).extract_text(document)
