from urllib.parse import parse_qs, urlparse

import pytest
from botocore.exceptions import ClientError

from photos_api.s3.delete_objects import delete_s3_object
from photos_api.s3.read_objects import (
    generate_presigned_get_url,
    iter_objects,
    object_exists_in_s3,
)
from photos_api.s3.write_objects import upload_s3_object
from tests.consts import TEST_BUCKET_NAME

TEST_OBJECT_KEY = "b" * 64
TEST_OBJECT_CONTENT = b"\x89PNG fake"


def test_upload_s3_object(s3_client):
    upload_s3_object(s3_client, TEST_BUCKET_NAME, TEST_OBJECT_KEY, TEST_OBJECT_CONTENT, "image/png")

    obj = s3_client.get_object(Bucket=TEST_BUCKET_NAME, Key=TEST_OBJECT_KEY)
    assert obj["Body"].read() == TEST_OBJECT_CONTENT
    assert obj["ContentType"] == "image/png"


def test_upload_s3_object__default_content_type(s3_client):
    upload_s3_object(s3_client, TEST_BUCKET_NAME, TEST_OBJECT_KEY, TEST_OBJECT_CONTENT)

    obj = s3_client.head_object(Bucket=TEST_BUCKET_NAME, Key=TEST_OBJECT_KEY)
    assert obj["ContentType"] == "application/octet-stream"


def test_object_exists_in_s3(s3_client):
    assert not object_exists_in_s3(s3_client, TEST_BUCKET_NAME, TEST_OBJECT_KEY)

    upload_s3_object(s3_client, TEST_BUCKET_NAME, TEST_OBJECT_KEY, TEST_OBJECT_CONTENT)

    assert object_exists_in_s3(s3_client, TEST_BUCKET_NAME, TEST_OBJECT_KEY)


def test_delete_s3_object(s3_client):
    upload_s3_object(s3_client, TEST_BUCKET_NAME, TEST_OBJECT_KEY, TEST_OBJECT_CONTENT)

    delete_s3_object(s3_client, TEST_BUCKET_NAME, TEST_OBJECT_KEY)

    assert not object_exists_in_s3(s3_client, TEST_BUCKET_NAME, TEST_OBJECT_KEY)
    with pytest.raises(ClientError):
        s3_client.get_object(Bucket=TEST_BUCKET_NAME, Key=TEST_OBJECT_KEY)


def test_delete_s3_object__missing_key_is_not_an_error(s3_client):
    delete_s3_object(s3_client, TEST_BUCKET_NAME, TEST_OBJECT_KEY)


def test_generate_presigned_get_url(s3_client):
    url = generate_presigned_get_url(s3_client, TEST_BUCKET_NAME, TEST_OBJECT_KEY, expires_in=120)

    parsed = urlparse(url)
    assert parsed.path.endswith(f"/{TEST_OBJECT_KEY}")
    query = parse_qs(parsed.query)
    assert query["X-Amz-Expires"] == ["120"]
    assert query["X-Amz-Algorithm"] == ["AWS4-HMAC-SHA256"]


def test_iter_objects(s3_client):
    keys = [f"{i:064x}" for i in range(3)]
    for key in keys:
        upload_s3_object(s3_client, TEST_BUCKET_NAME, key, TEST_OBJECT_CONTENT)

    listed = dict(iter_objects(s3_client, TEST_BUCKET_NAME))

    assert sorted(listed) == keys
    assert all(last_modified.tzinfo is not None for last_modified in listed.values())
