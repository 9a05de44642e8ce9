"""Data model for Textract text detection requests and results.

Textract returns a flat list of blocks. Each block has a type from a
fixed vocabulary; only LINE and WORD blocks carry text that is meant to
be displayed.
"""

import json
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, assert_never

from .errors import ResponseFormatError


class BlockType(StrEnum):
    """Block types defined by the Textract API."""

    PAGE = "PAGE"
    LINE = "LINE"
    WORD = "WORD"
    KEY_VALUE_SET = "KEY_VALUE_SET"
    TABLE = "TABLE"
    CELL = "CELL"
    MERGED_CELL = "MERGED_CELL"
    SELECTION_ELEMENT = "SELECTION_ELEMENT"
    TITLE = "TITLE"
    QUERY = "QUERY"
    QUERY_RESULT = "QUERY_RESULT"
    SIGNATURE = "SIGNATURE"
    TABLE_TITLE = "TABLE_TITLE"
    TABLE_FOOTER = "TABLE_FOOTER"
    LAYOUT_TEXT = "LAYOUT_TEXT"
    LAYOUT_TITLE = "LAYOUT_TITLE"
    LAYOUT_HEADER = "LAYOUT_HEADER"
    LAYOUT_FOOTER = "LAYOUT_FOOTER"
    LAYOUT_SECTION_HEADER = "LAYOUT_SECTION_HEADER"
    LAYOUT_PAGE_NUMBER = "LAYOUT_PAGE_NUMBER"
    LAYOUT_LIST = "LAYOUT_LIST"
    LAYOUT_FIGURE = "LAYOUT_FIGURE"
    LAYOUT_TABLE = "LAYOUT_TABLE"
    LAYOUT_KEY_VALUE = "LAYOUT_KEY_VALUE"


@dataclass(frozen=True)
class DocumentReference:
    """Location of a document in S3.

    Args:
        bucket: Name of the S3 bucket.
        key: Object key within the bucket.
        version: Optional object version id.
    """

    bucket: str
    key: str
    version: str | None = None

    def __post_init__(self) -> None:
        if not self.bucket:
            raise ValueError("Document bucket must not be empty")
        if not self.key:
            raise ValueError("Document key must not be empty")

    def to_request(self) -> dict[str, Any]:
        """Build the ``Document`` parameter of a Textract request."""
        s3_object: dict[str, str] = {"Bucket": self.bucket, "Name": self.key}
        if self.version:
            s3_object["Version"] = self.version
        return {"S3Object": s3_object}

    def __str__(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


@dataclass(frozen=True)
class BoundingBox:
    """Block position as ratios of the page width and height."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class Block:
    """A single block from a Textract response."""

    block_id: str
    kind: BlockType
    text: str | None = None
    confidence: float | None = None
    bbox: BoundingBox | None = None
    page: int | None = None
    text_type: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Block":
        """Build a block from its Textract JSON representation.

        Raises:
            ResponseFormatError: If the block is not an object, has a
                type outside the Textract vocabulary or a malformed
                bounding box.
        """
        if not isinstance(data, dict):
            raise ResponseFormatError(f"Block is not an object: {data!r}")

        raw_type = data.get("BlockType")
        try:
            kind = BlockType(raw_type)
        except ValueError as exc:
            raise ResponseFormatError(
                f"Unrecognized block type in response: {raw_type!r}"
            ) from exc

        block_id = data.get("Id", "")
        geometry = data.get("Geometry") or {}
        if not isinstance(geometry, dict):
            raise ResponseFormatError(f"Malformed geometry in block {block_id!r}")

        bbox = None
        box = geometry.get("BoundingBox")
        if box:
            try:
                bbox = BoundingBox(
                    left=box["Left"],
                    top=box["Top"],
                    width=box["Width"],
                    height=box["Height"],
                )
            except (KeyError, TypeError) as exc:
                raise ResponseFormatError(
                    f"Malformed bounding box in block {block_id!r}"
                ) from exc

        return cls(
            block_id=block_id,
            kind=kind,
            text=data.get("Text"),
            confidence=data.get("Confidence"),
            bbox=bbox,
            page=data.get("Page"),
            text_type=data.get("TextType"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the Textract JSON representation of the block."""
        data: dict[str, Any] = {"BlockType": self.kind.value, "Id": self.block_id}
        if self.text is not None:
            data["Text"] = self.text
        if self.text_type is not None:
            data["TextType"] = self.text_type
        if self.confidence is not None:
            data["Confidence"] = self.confidence
        if self.page is not None:
            data["Page"] = self.page
        if self.bbox is not None:
            data["Geometry"] = {
                "BoundingBox": {
                    "Width": self.bbox.width,
                    "Height": self.bbox.height,
                    "Left": self.bbox.left,
                    "Top": self.bbox.top,
                }
            }
        return data


@dataclass(frozen=True)
class OcrResult:
    """Complete result of one text detection call.

    ``raw`` holds the response exactly as returned by the service and is
    what gets persisted. A result built directly from blocks has no raw
    response; its persisted form is rebuilt from the blocks and metadata.
    """

    blocks: tuple[Block, ...]
    request_id: str | None = None
    page_count: int | None = None
    model_version: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, response: Any) -> "OcrResult":
        """Build a result from a ``DetectDocumentText`` response.

        Raises:
            ResponseFormatError: If the response does not have the shape
                of a Textract response.
        """
        if not isinstance(response, dict):
            raise ResponseFormatError(
                f"Response is not an object but {type(response).__name__}",
                response,
            )
        raw_blocks = response.get("Blocks", [])
        metadata = response.get("ResponseMetadata") or {}
        document_metadata = response.get("DocumentMetadata") or {}
        if not isinstance(raw_blocks, list):
            raise ResponseFormatError("Response 'Blocks' is not a list", response)
        if not (isinstance(metadata, dict) and isinstance(document_metadata, dict)):
            raise ResponseFormatError("Response metadata is not an object", response)

        try:
            blocks = tuple(Block.from_dict(b) for b in raw_blocks)
        except ResponseFormatError as exc:
            raise ResponseFormatError(exc.message, response) from exc

        return cls(
            blocks=blocks,
            request_id=metadata.get("RequestId"),
            page_count=document_metadata.get("Pages"),
            model_version=response.get("DetectDocumentTextModelVersion"),
            raw=response,
        )

    @classmethod
    def from_file(cls, path: Path) -> "OcrResult":
        """Load a result from a previously persisted response file.

        Raises:
            ResponseFormatError: If the file is not valid JSON or not a
                Textract response.
        """
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise ResponseFormatError(f"Invalid JSON: {exc}") from exc
        return cls.from_response(data)

    def to_response(self) -> dict[str, Any]:
        """Return the response to persist.

        The raw service response when there is one, otherwise a response
        of the same shape rebuilt from the blocks and metadata.
        """
        if self.raw:
            return self.raw
        response: dict[str, Any] = {}
        if self.page_count is not None:
            response["DocumentMetadata"] = {"Pages": self.page_count}
        response["Blocks"] = [block.to_dict() for block in self.blocks]
        if self.model_version is not None:
            response["DetectDocumentTextModelVersion"] = self.model_version
        if self.request_id is not None:
            response["ResponseMetadata"] = {"RequestId": self.request_id}
        return response

    def lines(self) -> Iterator[str]:
        """Yield the text of LINE blocks in service order."""
        for block in self.blocks:
            text = display_text(block)
            if text is not None:
                yield text

    def words(self) -> Iterator[str]:
        """Yield the text of WORD blocks in service order."""
        for block in self.blocks:
            if block.kind is BlockType.WORD and block.text is not None:
                yield block.text

    def count_by_type(self) -> dict[str, int]:
        """Count blocks per block type."""
        return dict(Counter(block.kind.value for block in self.blocks))




def display_text(block: Block) -> str | None:
    """Return the text to print for a block, or ``None`` to skip it.

    Only LINE blocks are printed. WORD blocks carry text too, but it is
    already part of the enclosing line.
    """
    match block.kind:
        case BlockType.LINE:
            return block.text
        case (
            BlockType.WORD
            | BlockType.PAGE
            | BlockType.KEY_VALUE_SET
            | BlockType.TABLE
            | BlockType.CELL
            | BlockType.MERGED_CELL
            | BlockType.SELECTION_ELEMENT
            | BlockType.TITLE
            | BlockType.QUERY
            | BlockType.QUERY_RESULT
            | BlockType.SIGNATURE
            | BlockType.TABLE_TITLE
            | BlockType.TABLE_FOOTER
            | BlockType.LAYOUT_TEXT
            | BlockType.LAYOUT_TITLE
            | BlockType.LAYOUT_HEADER
            | BlockType.LAYOUT_FOOTER
            | BlockType.LAYOUT_SECTION_HEADER
            | BlockType.LAYOUT_PAGE_NUMBER
            | BlockType.LAYOUT_LIST
            | BlockType.LAYOUT_FIGURE
            | BlockType.LAYOUT_TABLE
            | BlockType.LAYOUT_KEY_VALUE
        ):
            return None
        case _:
            assert_never(block.kind)
