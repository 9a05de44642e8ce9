"""Credential providers for the Textract client.

Credentials are never resolved by this package itself. A provider hands
out a boto3 session for a region, and the client is built from that
session, so tests can pass fixed credentials instead of touching the
process environment.
"""

from typing import Protocol

import boto3

from textract_ocr.utils.logger import get_logger

logger = get_logger(__name__)


class CredentialProvider(Protocol):
    """Anything that can produce a boto3 session for a region."""

    def create_session(self, region: str) -> boto3.session.Session:
        """Return a session bound to ``region``."""
        ...


class DefaultCredentialProvider:
    """Use the standard AWS credential chain.

    The chain checks environment variables, the shared credentials and
    config files, and finally the instance or container role.

    Args:
        profile_name: Named profile to use instead of the default one.
    """

    def __init__(self, profile_name: str | None = None) -> None:
        self.profile_name = profile_name

    def create_session(self, region: str) -> boto3.session.Session:
        logger.debug(
            "Creating session for region %s (profile: %s)",
            region,
            self.profile_name or "default",
        )
        return boto3.session.Session(
            profile_name=self.profile_name, region_name=region
        )


class StaticCredentialProvider:
    """Use a fixed set of credentials.

    Args:
        access_key_id: AWS access key id.
        secret_access_key: AWS secret access key.
        session_token: Optional session token for temporary credentials.
    """

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        session_token: str | None = None,
    ) -> None:
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.session_token = session_token

    def create_session(self, region: str) -> boto3.session.Session:
        return boto3.session.Session(
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            aws_session_token=self.session_token,
            region_name=region,
        )
