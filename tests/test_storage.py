"""Unit tests for blob sinks and upload validation"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from backend.app.core.config import Settings
from backend.app.core.errors import StorageError, ValidationError
from backend.app.storage import (
    LocalBlobSink,
    S3BlobSink,
    UploadPayload,
    build_blob_sink,
    generate_key,
    validate_upload,
)
from tests.helpers import make_png

ALLOWED = ["image/jpeg", "image/pjpeg", "image/png", "image/gif"]
TWO_MIB = 2 * 1024 * 1024


class TestKeys:
    """Storage key generation"""

    def test_key_is_random_prefix_plus_filename(self):
        key = generate_key("photo.png")
        prefix, _, rest = key.partition("-")

        assert rest == "photo.png"
        assert len(prefix) == 32
        int(prefix, 16)

    def test_keys_do_not_repeat(self):
        assert generate_key("a.png") != generate_key("a.png")

    def test_directory_parts_are_dropped(self):
        assert generate_key("../../etc/passwd").endswith("-passwd")
        assert generate_key("C:\\Users\\ann\\photo.png").endswith("-photo.png")


class TestValidation:
    """Size cap and MIME allow-list"""

    def test_png_under_limit_passes(self):
        validate_upload(make_png(size=500_000), TWO_MIB, ALLOWED)

    def test_exactly_at_limit_passes(self):
        validate_upload(make_png(size=TWO_MIB), TWO_MIB, ALLOWED)

    def test_over_limit_fails(self):
        with pytest.raises(ValidationError):
            validate_upload(make_png(size=TWO_MIB + 1), TWO_MIB, ALLOWED)

    @pytest.mark.parametrize("content_type", ["application/pdf", "text/plain", None, "image/svg+xml"])
    def test_disallowed_types_fail(self, content_type):
        payload = UploadPayload(filename="x.bin", content_type=content_type, data=b"x")

        with pytest.raises(ValidationError) as exc_info:
            validate_upload(payload, TWO_MIB, ALLOWED)
        assert exc_info.value.message == "Invalid file type"

    def test_mime_check_ignores_case(self):
        payload = UploadPayload(filename="x.gif", content_type="IMAGE/GIF", data=b"GIF89a")

        validate_upload(payload, TWO_MIB, ALLOWED)


class TestLocalBlobSink:
    """Filesystem sink"""

    @pytest.mark.asyncio
    async def test_put_writes_file_and_leaves_url_empty(self, tmp_path):
        sink = LocalBlobSink(str(tmp_path / "uploads"))
        payload = make_png(size=2048)

        blob = await sink.put(payload)

        assert (tmp_path / "uploads" / blob.key).read_bytes() == payload.data
        assert blob.size == 2048
        assert blob.name == "photo.png"
        assert blob.url == ""

    @pytest.mark.asyncio
    async def test_delete_removes_file(self, tmp_path):
        sink = LocalBlobSink(str(tmp_path))
        blob = await sink.put(make_png())

        await sink.delete(blob.key)

        assert not (tmp_path / blob.key).exists()

    @pytest.mark.asyncio
    async def test_delete_of_missing_key_is_not_an_error(self, tmp_path):
        sink = LocalBlobSink(str(tmp_path))

        await sink.delete("0" * 32 + "-gone.png")

    @pytest.mark.asyncio
    async def test_key_outside_directory_is_refused(self, tmp_path):
        sink = LocalBlobSink(str(tmp_path / "uploads"))

        with pytest.raises(StorageError):
            await sink.delete("../escape.png")


class TestS3BlobSink:
    """S3 sink against a mocked boto3 client"""

    @pytest.mark.asyncio
    async def test_put_uploads_public_object(self):
        client = MagicMock()
        sink = S3BlobSink(bucket="uploads", region="sa-east-1", client=client)

        blob = await sink.put(make_png(size=100))

        client.put_object.assert_called_once()
        kwargs = client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "uploads"
        assert kwargs["Key"] == blob.key
        assert kwargs["ACL"] == "public-read"
        assert kwargs["ContentType"] == "image/png"
        assert blob.url == f"https://uploads.s3.sa-east-1.amazonaws.com/{blob.key}"
        assert blob.size == 100

    @pytest.mark.asyncio
    async def test_delete_calls_delete_object(self):
        client = MagicMock()
        sink = S3BlobSink(bucket="uploads", region="us-east-1", client=client)

        await sink.delete("abc-photo.png")

        client.delete_object.assert_called_once_with(Bucket="uploads", Key="abc-photo.png")

    @pytest.mark.asyncio
    async def test_client_errors_become_storage_errors(self):
        client = MagicMock()
        error = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject")
        client.put_object.side_effect = error
        client.delete_object.side_effect = error
        sink = S3BlobSink(bucket="uploads", region="us-east-1", client=client)

        with pytest.raises(StorageError):
            await sink.put(make_png())
        with pytest.raises(StorageError):
            await sink.delete("abc-photo.png")


class TestSinkSelection:
    """STORAGE_TYPE picks the implementation"""

    def test_local_selected(self, tmp_path):
        config = Settings(_env_file=None, STORAGE_TYPE="local", UPLOAD_DIR=str(tmp_path))

        sink = build_blob_sink(config)

        assert isinstance(sink, LocalBlobSink)
        assert sink.upload_dir == tmp_path

    def test_s3_selected(self):
        config = Settings(
            _env_file=None,
            STORAGE_TYPE="s3",
            BUCKET_NAME="uploads",
            AWS_DEFAULT_REGION="eu-west-1",
            AWS_ACCESS_KEY_ID="test",
            AWS_SECRET_ACCESS_KEY="test",
        )

        sink = build_blob_sink(config)

        assert isinstance(sink, S3BlobSink)
        assert sink.bucket == "uploads"
        assert sink.url_for("k") == "https://uploads.s3.eu-west-1.amazonaws.com/k"
