"""Functions for reading objects from an S3 bucket--the "R" in CRUD."""

from datetime import datetime
from typing import TYPE_CHECKING, Iterator, Tuple

from botocore.exceptions import ClientError

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

NOT_FOUND_ERROR_CODES = {"404", "NoSuchKey", "NotFound"}


def object_exists_in_s3(s3_client: "S3Client", bucket_name: str, object_key: str) -> bool:
    """
    Check if an object exists in the S3 bucket using head_object.

    :param s3_client: The boto3 S3 client.
    :param bucket_name: Name of the S3 bucket.
    :param object_key: Key of the object to check.
    :return: True if the object exists, False otherwise.
    """
    try:
        s3_client.head_object(Bucket=bucket_name, Key=object_key)
        return True
    except ClientError as err:
        error_code = err.response.get("Error", {}).get("Code")
        if error_code in NOT_FOUND_ERROR_CODES:
            return False
        raise


def generate_presigned_get_url(
    s3_client: "S3Client",
    bucket_name: str,
    object_key: str,
    expires_in: int = 3600,
) -> str:
    """
    Mint a time-limited URL granting GET access to a single object.

    Signing is local to the client; no request is sent to S3 and the key is
    not checked for existence.

    :param expires_in: Lifetime of the URL in seconds.
    """
    return s3_client.generate_presigned_url(
        ClientMethod="get_object",
        Params={"Bucket": bucket_name, "Key": object_key},
        ExpiresIn=expires_in,
    )


def iter_objects(s3_client: "S3Client", bucket_name: str) -> Iterator[Tuple[str, datetime]]:
    """Yield `(key, last_modified)` for every object in the bucket, following continuation tokens."""
    paginator = s3_client.get_paginator("list_objects_v2")
    for page in paginator.paginate(Bucket=bucket_name):
        for obj in page.get("Contents", []):
            yield obj["Key"], obj["LastModified"]
