"""S3-compatible object storage adapter for menu images.

Wraps a boto3 client configured from ``S3Config``. The module keeps a single
``S3Storage`` instance created by ``connect()`` during application startup.
"""

import io
import json
import logging
from typing import BinaryIO, Optional, Union
from urllib.parse import quote, urlparse

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.config import S3Config, settings
from app.exceptions import StorageError

logger = logging.getLogger("jinaq.s3")

# Rendering these inline would let an uploaded file run script in the browser.
DANGEROUS_CONTENT_TYPES = frozenset(
    {
        "text/html",
        "application/xhtml+xml",
        "image/svg+xml",
        "text/xml",
        "application/xml",
    }
)
SAFE_CONTENT_TYPE = "text/plain"

Body = Union[bytes, bytearray, BinaryIO]


def build_public_url(config: S3Config, key: str) -> str:
    """URL browsers use to fetch ``key`` through the response endpoint.

    Needs only configuration, so menu reads never touch the S3 client.
    """
    endpoint = config.response_endpoint.rstrip("/")
    quoted_key = quote(key)
    if config.use_path_style:
        return f"{endpoint}/{config.bucket}/{quoted_key}"
    parsed = urlparse(endpoint)
    return f"{parsed.scheme}://{config.bucket}.{parsed.netloc}{parsed.path}/{quoted_key}"


class S3Storage:
    """Bucket bootstrap plus upload/delete helpers over a boto3 S3 client."""

    def __init__(self, config: S3Config, client=None):
        self.config = config
        if client is not None:
            self.client = client
            return
        try:
            self.client = boto3.client(
                "s3",
                endpoint_url=config.access_endpoint,
                region_name=config.region,
                aws_access_key_id=config.access_key_id,
                aws_secret_access_key=config.secret_access_key,
                config=Config(
                    s3={"addressing_style": "path" if config.use_path_style else "auto"}
                ),
            )
        except Exception:
            logger.exception("Failed to create S3 client")
            raise

    # ------------------ Bootstrap ------------------

    def bootstrap(self) -> None:
        """Ensure the bucket, its public-read policy and the image prefix exist."""
        self.ensure_bucket_exists(self.config.bucket)
        self.ensure_bucket_policy(self.config.bucket)
        self.ensure_prefix_object(self.config.image_prefix)

    def ensure_bucket_exists(self, bucket: str) -> None:
        try:
            self.client.head_bucket(Bucket=bucket)
            logger.info('Bucket "%s" already exists', bucket)
            return
        except ClientError:
            logger.info('Bucket "%s" not found, creating...', bucket)

        params = {"Bucket": bucket}
        if self.config.region and self.config.region != "us-east-1":
            params["CreateBucketConfiguration"] = {
                "LocationConstraint": self.config.region
            }
        self.client.create_bucket(**params)
        logger.info('Bucket "%s" created', bucket)

    def ensure_bucket_policy(self, bucket: str) -> None:
        """Grant anonymous GetObject on the bucket. Failures are logged only."""
        policy = {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": {"AWS": ["*"]},
                    "Action": ["s3:GetObject"],
                    "Resource": [f"arn:aws:s3:::{bucket}/*"],
                }
            ],
        }
        try:
            self.client.put_bucket_policy(Bucket=bucket, Policy=json.dumps(policy))
            logger.info(
                'Bucket policy set for "%s" - public read access enabled', bucket
            )
        except (ClientError, BotoCoreError):
            logger.exception('Failed to set bucket policy for "%s"', bucket)

    def ensure_prefix_object(self, prefix: str) -> None:
        key = prefix if prefix.endswith("/") else f"{prefix}/"
        try:
            self.client.put_object(Bucket=self.config.bucket, Key=key, Body=b"")
            logger.info('Ensured prefix object "%s"', key)
        except (ClientError, BotoCoreError):
            logger.exception('Failed to ensure prefix "%s"', key)

    # ------------------ Objects ------------------

    @staticmethod
    def sanitize_content_type(content_type: str) -> str:
        """
        Sanitize content type to prevent XSS attacks.
        HTML, SVG, and XML files are forced to text/plain.
        """
        normalized = (content_type or "").lower().split(";")[0].strip()
        if normalized in DANGEROUS_CONTENT_TYPES:
            logger.warning(
                'Sanitized dangerous content type "%s" to "%s" for security',
                content_type,
                SAFE_CONTENT_TYPE,
            )
            return SAFE_CONTENT_TYPE
        return content_type

    def upload_object(self, key: str, body: Body, content_type: str) -> str:
        """Upload ``body`` under ``key`` as a public, inline object and return the key."""
        fileobj = io.BytesIO(bytes(body)) if isinstance(body, (bytes, bytearray)) else body
        extra_args = {
            "ContentType": self.sanitize_content_type(content_type),
            "ContentDisposition": "inline",
            "ACL": "public-read",
        }
        try:
            self.client.upload_fileobj(
                fileobj, self.config.bucket, key, ExtraArgs=extra_args
            )
        except (ClientError, BotoCoreError, S3UploadFailedError) as exc:
            logger.error("Upload of %s/%s failed: %s", self.config.bucket, key, exc)
            raise StorageError(
                f"Failed to upload {key}", details={"key": key}
            ) from exc

        logger.debug("Uploaded %s/%s", self.config.bucket, key)
        return key

    def upload_image(self, filename: str, body: Body, content_type: str) -> str:
        key = f"{self.config.image_prefix.rstrip('/')}/{filename}"
        return self.upload_object(key, body, content_type)

    def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.config.bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            logger.error("Delete of %s/%s failed: %s", self.config.bucket, key, exc)
            raise StorageError(
                f"Failed to delete {key}", details={"key": key}
            ) from exc
        logger.debug("Deleted %s/%s", self.config.bucket, key)

    def public_url(self, key: str) -> str:
        return build_public_url(self.config, key)

    def close(self) -> None:
        self.client.close()


# ------------------ Module lifecycle ------------------

_storage: Optional[S3Storage] = None


def connect(config: S3Config) -> S3Storage:
    """Create the process-wide storage adapter."""
    global _storage
    _storage = S3Storage(config)
    logger.info(
        "Object storage configured endpoint=%s bucket=%s",
        config.access_endpoint,
        config.bucket,
    )
    return _storage


def get_storage() -> S3Storage:
    """Return the storage adapter, creating it from settings on first use."""
    if _storage is None:
        return connect(settings.s3)
    return _storage


def close() -> None:
    """Close the storage client."""
    global _storage
    try:
        if _storage is not None:
            _storage.close()
            logger.info("Object storage client closed")
    except Exception:
        logger.exception("Error closing object storage client")
    finally:
        _storage = None
