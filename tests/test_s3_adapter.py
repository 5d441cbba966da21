"""
Tests for the S3 object storage adapter.

The boto3 client is replaced by a Mock so every test checks which SDK calls
the adapter makes and how it reacts to SDK failures.
"""

import io
import json
from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from adapters import s3_adapter
from adapters.s3_adapter import S3Storage
from app.config import S3Config
from app.exceptions import StorageError


def make_config(**overrides) -> S3Config:
    values = dict(
        access_endpoint="http://minio:9000",
        response_endpoint="https://media.jinaq.kr",
        region="ap-northeast-2",
        access_key_id="minio",
        secret_access_key="minio123",
        bucket="jinaq-media",
        image_prefix="images",
        use_path_style=True,
    )
    values.update(overrides)
    return S3Config(**values)


def client_error(code: str = "404", operation: str = "HeadBucket") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture
def sdk():
    return Mock()


@pytest.fixture
def storage(sdk):
    return S3Storage(make_config(), client=sdk)


# =============================================================================
# CLIENT CONSTRUCTION
# =============================================================================


def test_client_is_built_from_config():
    with patch("adapters.s3_adapter.boto3.client") as factory:
        S3Storage(make_config())

    args, kwargs = factory.call_args
    assert args == ("s3",)
    assert kwargs["endpoint_url"] == "http://minio:9000"
    assert kwargs["region_name"] == "ap-northeast-2"
    assert kwargs["aws_access_key_id"] == "minio"
    assert kwargs["aws_secret_access_key"] == "minio123"
    assert kwargs["config"].s3 == {"addressing_style": "path"}


def test_client_construction_failure_is_reraised():
    with patch("adapters.s3_adapter.boto3.client", side_effect=ValueError("bad")):
        with pytest.raises(ValueError):
            S3Storage(make_config())


# =============================================================================
# BOOTSTRAP
# =============================================================================


def test_bootstrap_existing_bucket(storage, sdk):
    storage.bootstrap()

    sdk.head_bucket.assert_called_once_with(Bucket="jinaq-media")
    sdk.create_bucket.assert_not_called()
    sdk.put_bucket_policy.assert_called_once()
    sdk.put_object.assert_called_once_with(
        Bucket="jinaq-media", Key="images/", Body=b""
    )


def test_missing_bucket_is_created_in_region(storage, sdk):
    sdk.head_bucket.side_effect = client_error("404")

    storage.ensure_bucket_exists("jinaq-media")

    sdk.create_bucket.assert_called_once_with(
        Bucket="jinaq-media",
        CreateBucketConfiguration={"LocationConstraint": "ap-northeast-2"},
    )


def test_missing_bucket_in_us_east_1_has_no_location(sdk):
    storage = S3Storage(make_config(region="us-east-1"), client=sdk)
    sdk.head_bucket.side_effect = client_error("404")

    storage.ensure_bucket_exists("jinaq-media")

    sdk.create_bucket.assert_called_once_with(Bucket="jinaq-media")


def test_bucket_creation_failure_is_fatal(storage, sdk):
    sdk.head_bucket.side_effect = client_error("404")
    sdk.create_bucket.side_effect = client_error("AccessDenied", "CreateBucket")

    with pytest.raises(ClientError):
        storage.bootstrap()

    sdk.put_bucket_policy.assert_not_called()


def test_bucket_policy_grants_public_read(storage, sdk):
    storage.ensure_bucket_policy("jinaq-media")

    kwargs = sdk.put_bucket_policy.call_args.kwargs
    assert kwargs["Bucket"] == "jinaq-media"
    policy = json.loads(kwargs["Policy"])
    assert policy["Version"] == "2012-10-17"
    statement = policy["Statement"][0]
    assert statement["Effect"] == "Allow"
    assert statement["Principal"] == {"AWS": ["*"]}
    assert statement["Action"] == ["s3:GetObject"]
    assert statement["Resource"] == ["arn:aws:s3:::jinaq-media/*"]


def test_bucket_policy_failure_does_not_stop_bootstrap(storage, sdk):
    sdk.put_bucket_policy.side_effect = client_error("NotImplemented", "PutBucketPolicy")

    storage.bootstrap()

    sdk.put_object.assert_called_once()


def test_prefix_failure_is_logged_not_raised(storage, sdk):
    sdk.put_object.side_effect = EndpointConnectionError(endpoint_url="http://minio:9000")

    storage.ensure_prefix_object("images")


def test_prefix_with_trailing_slash_is_not_doubled(storage, sdk):
    storage.ensure_prefix_object("images/")

    assert sdk.put_object.call_args.kwargs["Key"] == "images/"


# =============================================================================
# CONTENT TYPE SANITIZATION
# =============================================================================


@pytest.mark.parametrize(
    "content_type",
    [
        "text/html",
        "text/html; charset=utf-8",
        "IMAGE/SVG+XML",
        "application/xhtml+xml",
        "text/xml",
        " application/xml ",
    ],
)
def test_dangerous_content_types_become_plain_text(content_type):
    assert S3Storage.sanitize_content_type(content_type) == "text/plain"


@pytest.mark.parametrize("content_type", ["image/png", "Image/JPEG", "image/webp"])
def test_safe_content_types_are_unchanged(content_type):
    assert S3Storage.sanitize_content_type(content_type) == content_type


# =============================================================================
# UPLOAD / DELETE
# =============================================================================


def test_upload_object_sends_public_inline_object(storage, sdk):
    key = storage.upload_object("images/a.png", b"\x89PNG", "image/png")

    assert key == "images/a.png"
    args, kwargs = sdk.upload_fileobj.call_args
    fileobj, bucket, sent_key = args
    assert fileobj.read() == b"\x89PNG"
    assert bucket == "jinaq-media"
    assert sent_key == "images/a.png"
    assert kwargs["ExtraArgs"] == {
        "ContentType": "image/png",
        "ContentDisposition": "inline",
        "ACL": "public-read",
    }


def test_upload_object_accepts_file_objects(storage, sdk):
    body = io.BytesIO(b"data")

    storage.upload_object("images/b.jpg", body, "image/jpeg")

    assert sdk.upload_fileobj.call_args.args[0] is body


def test_upload_object_sanitizes_content_type(storage, sdk):
    storage.upload_object("images/x.svg", b"<svg/>", "image/svg+xml")

    extra = sdk.upload_fileobj.call_args.kwargs["ExtraArgs"]
    assert extra["ContentType"] == "text/plain"


def test_upload_image_uses_prefix(storage, sdk):
    key = storage.upload_image("dish.png", b"img", "image/png")

    assert key == "images/dish.png"
    assert sdk.upload_fileobj.call_args.args[2] == "images/dish.png"


def test_upload_failure_raises_storage_error(storage, sdk):
    sdk.upload_fileobj.side_effect = client_error("AccessDenied", "PutObject")

    with pytest.raises(StorageError) as exc_info:
        storage.upload_object("images/a.png", b"x", "image/png")

    assert exc_info.value.http_status == 502
    assert exc_info.value.details == {"key": "images/a.png"}


def test_delete_removes_object(storage, sdk):
    storage.delete("images/a.png")

    sdk.delete_object.assert_called_once_with(Bucket="jinaq-media", Key="images/a.png")


def test_delete_failure_raises_storage_error(storage, sdk):
    sdk.delete_object.side_effect = client_error("AccessDenied", "DeleteObject")

    with pytest.raises(StorageError):
        storage.delete("images/a.png")


# =============================================================================
# PUBLIC URLS
# =============================================================================


def test_public_url_path_style(storage):
    assert (
        storage.public_url("images/a b.png")
        == "https://media.jinaq.kr/jinaq-media/images/a%20b.png"
    )


def test_build_public_url_needs_no_client():
    assert (
        s3_adapter.build_public_url(make_config(), "images/x.png")
        == "https://media.jinaq.kr/jinaq-media/images/x.png"
    )


def test_public_url_virtual_host_style(sdk):
    storage = S3Storage(
        make_config(use_path_style=False, response_endpoint="https://s3.example.com/"),
        client=sdk,
    )
    assert (
        storage.public_url("images/a.png")
        == "https://jinaq-media.s3.example.com/images/a.png"
    )


# =============================================================================
# MODULE LIFECYCLE
# =============================================================================


def test_connect_get_and_close(monkeypatch):
    sdk = Mock()
    monkeypatch.setattr(s3_adapter.boto3, "client", lambda *a, **k: sdk)

    storage = s3_adapter.connect(make_config())
    assert s3_adapter.get_storage() is storage

    s3_adapter.close()
    sdk.close.assert_called_once()
    assert s3_adapter._storage is None


def test_get_storage_connects_lazily(monkeypatch):
    monkeypatch.setattr(s3_adapter, "_storage", None)
    monkeypatch.setattr(s3_adapter.boto3, "client", lambda *a, **k: Mock())

    storage = s3_adapter.get_storage()

    assert isinstance(storage, S3Storage)
    assert storage.config.bucket == s3_adapter.settings.s3.bucket
    s3_adapter.close()
