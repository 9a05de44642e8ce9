"""Textract text detection utility.

Submits a document stored in S3 to AWS Textract, prints the detected
text lines and keeps the raw response as a JSON audit artifact.
"""

__version__ = "1.0.0"
