"""Shared test fixtures for the Textract OCR test suite."""

import copy
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from botocore.stub import Stubber

from textract_ocr.ocr.credentials import StaticCredentialProvider
from textract_ocr.ocr.models import OcrResult
from textract_ocr.ocr.textract_client import TextractClient

_INVOICE_RESPONSE: dict[str, Any] = {
    "DocumentMetadata": {"Pages": 1},
    "Blocks": [
        {
            "BlockType": "PAGE",
            "Id": "page-1",
            "Geometry": {
                "BoundingBox": {"Width": 1.0, "Height": 1.0, "Left": 0.0, "Top": 0.0},
                "Polygon": [
                    {"X": 0.0, "Y": 0.0},
                    {"X": 1.0, "Y": 0.0},
                    {"X": 1.0, "Y": 1.0},
                    {"X": 0.0, "Y": 1.0},
                ],
            },
            "Relationships": [{"Type": "CHILD", "Ids": ["line-1", "line-2"]}],
        },
        {
            "BlockType": "LINE",
            "Id": "line-1",
            "Text": "Invoice #1234",
            "Confidence": 99.5,
            "Geometry": {
                "BoundingBox": {
                    "Width": 0.3,
                    "Height": 0.05,
                    "Left": 0.1,
                    "Top": 0.1,
                },
            },
        },
        {
            "BlockType": "LINE",
            "Id": "line-2",
            "Text": "Total: $50.00",
            "Confidence": 98.25,
            "Geometry": {
                "BoundingBox": {
                    "Width": 0.3,
                    "Height": 0.05,
                    "Left": 0.1,
                    "Top": 0.8,
                },
            },
        },
    ],
    "DetectDocumentTextModelVersion": "1.0",
    "ResponseMetadata": {"RequestId": "req-0001", "HTTPStatusCode": 200},
}


@pytest.fixture
def invoice_response() -> dict[str, Any]:
    """Textract response with a PAGE block and two LINE blocks."""
    return copy.deepcopy(_INVOICE_RESPONSE)


@pytest.fixture
def invoice_result(invoice_response: dict[str, Any]) -> OcrResult:
    """Parsed result of the invoice response."""
    return OcrResult.from_response(invoice_response)


@pytest.fixture
def credentials() -> StaticCredentialProvider:
    """Fixed, fake credentials that never reach AWS."""
    return StaticCredentialProvider("testing", "testing")


@pytest.fixture
def textract(credentials: StaticCredentialProvider) -> TextractClient:
    """Textract client bound to us-east-1 with fake credentials."""
    return TextractClient("us-east-1", credentials)


@pytest.fixture
def stubber(textract: TextractClient) -> Iterator[Stubber]:
    """Stubber attached to the fixture client."""
    with Stubber(textract.client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent
