"""Functions for deleting objects from an S3 bucket--the "D" in CRUD."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


def delete_s3_object(s3_client: "S3Client", bucket_name: str, object_key: str) -> None:
    """
    Delete an object from an S3 bucket.

    S3 reports success for keys that do not exist, so a repeated delete of
    the same key is not an error.

    :param s3_client: The boto3 S3 client.
    :param bucket_name: The name of the S3 bucket.
    :param object_key: key of the object to delete.
    """
    s3_client.delete_object(Bucket=bucket_name, Key=object_key)
    logger.info(f"Deleted s3://{bucket_name}/{object_key}")
