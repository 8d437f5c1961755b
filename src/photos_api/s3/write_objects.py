"""Functions for writing objects to an S3 bucket--the "C" in CRUD."""

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def upload_s3_object(
    s3_client: "S3Client",
    bucket_name: str,
    object_key: str,
    file_content: bytes,
    content_type: Optional[str] = None,
) -> None:
    """
    Upload a file to an S3 bucket.

    :param s3_client: The boto3 S3 client to write with.
    :param bucket_name: The name of the S3 bucket.
    :param object_key: key of the object in the S3 bucket.
    :param file_content: The content of the file to upload.
    :param content_type: The MIME type of the file, e.g. "image/jpeg".
    """
    content_type = content_type or DEFAULT_CONTENT_TYPE
    s3_client.put_object(
        Bucket=bucket_name,
        Key=object_key,
        Body=file_content,
        ContentType=content_type,
    )
    logger.info(f"Uploaded {len(file_content)} bytes to s3://{bucket_name}/{object_key}")
