"""Tests for the Textract client wrapper (stubbed, no network)."""

from typing import Any
from unittest.mock import MagicMock, patch

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError, ProfileNotFound
from botocore.stub import Stubber

from textract_ocr.ocr.credentials import StaticCredentialProvider
from textract_ocr.ocr.errors import RemoteServiceError, ResponseFormatError
from textract_ocr.ocr.models import BlockType, DocumentReference
from textract_ocr.ocr.textract_client import TextractClient, extract_text

_DOCUMENT = DocumentReference(bucket="invoices", key="scan.png")
_EXPECTED_PARAMS = {
    "Document": {"S3Object": {"Bucket": "invoices", "Name": "scan.png"}}
}


class _MissingProfileProvider:
    """Credential provider whose profile does not exist."""

    def create_session(self, region: str) -> boto3.session.Session:
        raise ProfileNotFound(profile="missing")


class TestTextractClient:
    """Tests for TextractClient.extract_text."""

    def test_empty_region_rejected(self, credentials: StaticCredentialProvider) -> None:
        with pytest.raises(ValueError, match="Region"):
            TextractClient("", credentials)

    def test_client_bound_to_region(self, textract: TextractClient) -> None:
        assert textract.region == "us-east-1"
        assert textract.client.meta.region_name == "us-east-1"

    def test_extract_text_success(
        self,
        textract: TextractClient,
        stubber: Stubber,
        invoice_response: dict[str, Any],
    ) -> None:
        stubber.add_response("detect_document_text", invoice_response, _EXPECTED_PARAMS)

        result = textract.extract_text(_DOCUMENT)

        assert len(result.blocks) == 3
        assert result.blocks[0].kind is BlockType.PAGE
        assert list(result.lines()) == ["Invoice #1234", "Total: $50.00"]
        assert result.request_id == "req-0001"
        assert result.raw["Blocks"] == invoice_response["Blocks"]

    def test_extract_text_passes_version(
        self,
        textract: TextractClient,
        stubber: Stubber,
        invoice_response: dict[str, Any],
    ) -> None:
        stubber.add_response(
            "detect_document_text",
            invoice_response,
            {
                "Document": {
                    "S3Object": {
                        "Bucket": "invoices",
                        "Name": "scan.png",
                        "Version": "v7",
                    }
                }
            },
        )
        document = DocumentReference(bucket="invoices", key="scan.png", version="v7")
        result = textract.extract_text(document)
        assert len(result.blocks) == 3

    def test_missing_object(self, textract: TextractClient, stubber: Stubber) -> None:
        stubber.add_client_error(
            "detect_document_text",
            service_error_code="InvalidS3ObjectException",
            service_message="Unable to get object metadata from S3. Check object key.",
            http_status_code=400,
            expected_params=_EXPECTED_PARAMS,
        )

        with pytest.raises(RemoteServiceError) as exc_info:
            textract.extract_text(_DOCUMENT)

        assert exc_info.value.error_code == "InvalidS3ObjectException"
        assert "Unable to get object metadata" in exc_info.value.message
        assert "InvalidS3ObjectException" in str(exc_info.value)

    def test_access_denied(self, textract: TextractClient, stubber: Stubber) -> None:
        stubber.add_client_error(
            "detect_document_text",
            service_error_code="AccessDeniedException",
            service_message="User is not authorized to perform this action",
            http_status_code=400,
            response_meta={"RequestId": "req-denied"},
        )

        with pytest.raises(RemoteServiceError) as exc_info:
            textract.extract_text(_DOCUMENT)

        assert exc_info.value.error_code == "AccessDeniedException"
        assert exc_info.value.request_id == "req-denied"

    def test_throttling_is_not_retried(
        self, textract: TextractClient, stubber: Stubber
    ) -> None:
        stubber.add_client_error(
            "detect_document_text",
            service_error_code="ProvisionedThroughputExceededException",
            service_message="Rate exceeded",
            http_status_code=400,
        )

        with pytest.raises(RemoteServiceError, match="Rate exceeded"):
            textract.extract_text(_DOCUMENT)

    def test_network_failure(self, textract: TextractClient) -> None:
        textract.client = MagicMock()
        textract.client.detect_document_text.side_effect = EndpointConnectionError(
            endpoint_url="https://textract.us-east-1.amazonaws.com/"
        )

        with pytest.raises(RemoteServiceError, match="Could not connect") as exc_info:
            textract.extract_text(_DOCUMENT)

        assert exc_info.value.error_code is None
        assert isinstance(exc_info.value.__cause__, EndpointConnectionError)

    def test_credential_failure(self) -> None:
        with pytest.raises(RemoteServiceError, match="missing"):
            TextractClient("us-east-1", _MissingProfileProvider())

    def test_unrecognized_block_type(
        self, textract: TextractClient, invoice_response: dict[str, Any]
    ) -> None:
        invoice_response["Blocks"].append({"BlockType": "HOLOGRAM", "Id": "x"})
        textract.client = MagicMock()
        textract.client.detect_document_text.return_value = invoice_response

        with pytest.raises(ResponseFormatError, match="HOLOGRAM") as exc_info:
            textract.extract_text(_DOCUMENT)

        assert not isinstance(exc_info.value, RemoteServiceError)
        assert exc_info.value.response is invoice_response


class TestExtractTextFunction:
    """Tests for the module-level extract_text helper."""

    def test_empty_region_rejected(self, credentials: StaticCredentialProvider) -> None:
        with pytest.raises(ValueError):
            extract_text(_DOCUMENT, "", credentials)

    @patch("textract_ocr.ocr.textract_client.TextractClient")
    def test_delegates_to_client(
        self, mock_client_cls: MagicMock, credentials: StaticCredentialProvider
    ) -> None:
        sentinel = MagicMock()
        mock_client_cls.return_value.extract_text.return_value = sentinel

        result = extract_text(_DOCUMENT, "eu-west-1", credentials)

        assert result is sentinel
        mock_client_cls.assert_called_once_with("eu-west-1", credentials)
        mock_client_cls.return_value.extract_text.assert_called_once_with(_DOCUMENT)
