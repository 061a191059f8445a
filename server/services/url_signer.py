"""
Signed access URLs for stored clips.

A storage locator is the full URL of an object in S3-compatible storage, e.g.
https://s3.wasabisys.com/<bucket>/<key>. The bucket is the fourth
"/"-separated segment; the key is everything after "<bucket>/".
"""

import logging
from typing import Optional, Protocol, Tuple

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import SigningFailure

logger = logging.getLogger(__name__)


def parse_storage_locator(locator: str) -> Tuple[str, str]:
    """
    Split a storage locator into (bucket, key).

    Raises SigningFailure when the locator has no bucket segment or no key.
    """
    if not locator or not isinstance(locator, str):
        raise SigningFailure("empty storage locator")
    parts = locator.split("/")
    if len(parts) < 4 or not parts[3]:
        raise SigningFailure(f"no bucket in storage locator: {locator!r}")
    bucket = parts[3]
    _, sep, key = locator.partition(f"{bucket}/")
    if not sep or not key:
        raise SigningFailure(f"no object key in storage locator: {locator!r}")
    return bucket, key


class UrlSigner(Protocol):
    """Issue a time-boxed read URL for a storage locator."""

    def sign(self, locator: str) -> str:
        ...


class S3UrlSigner:
    """Presigned GET URLs from an S3-compatible backend (Wasabi, R2, MinIO, AWS)."""

    def __init__(
        self,
        access_key: Optional[str],
        secret_key: Optional[str],
        endpoint_url: Optional[str] = None,
        region_name: str = "us-east-1",
        expires_in: int = 3600,
        client=None,
    ):
        self.expires_in = expires_in
        if client is None:
            client_kwargs = {
                "aws_access_key_id": access_key,
                "aws_secret_access_key": secret_key,
                "region_name": region_name,
                "config": Config(
                    signature_version="s3v4",
                    s3={"addressing_style": "path"},
                ),
            }
            if endpoint_url:
                client_kwargs["endpoint_url"] = endpoint_url
            client = boto3.client("s3", **client_kwargs)
        self._client = client

    def sign(self, locator: str) -> str:
        bucket, key = parse_storage_locator(locator)
        try:
            url = self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": bucket, "Key": key},
                ExpiresIn=self.expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Presign failed for bucket=%r key=%r: %s", bucket, key, e)
            raise SigningFailure(f"presign failed for {bucket}/{key}") from e
        if not url:
            raise SigningFailure(f"empty presigned URL for {bucket}/{key}")
        return url
