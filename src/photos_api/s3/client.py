"""Construction of the long-lived boto3 S3 client shared by all requests."""

import logging
from typing import TYPE_CHECKING

import boto3
from botocore.config import Config

from photos_api.config.settings import Settings

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


def build_s3_client(settings: Settings) -> "S3Client":
    """
    Create an S3 client from application settings.

    Credentials fall back to the default boto3 chain (env vars, profile,
    instance role) when ``access_key``/``secret_access_key`` are unset.
    SigV4 is forced so presigned URLs work in every region.
    """
    client_kwargs = {
        "region_name": settings.bucket_region,
        "config": Config(signature_version="s3v4"),
    }
    if settings.aws_endpoint_url:
        client_kwargs["endpoint_url"] = settings.aws_endpoint_url
    if settings.access_key and settings.secret_access_key:
        client_kwargs["aws_access_key_id"] = settings.access_key
        client_kwargs["aws_secret_access_key"] = settings.secret_access_key

    logger.info(f"Creating S3 client for bucket '{settings.bucket_name}'")
    logger.info(f"  Region: {settings.bucket_region}")
    logger.info(f"  Endpoint: {settings.aws_endpoint_url or 'default'}")
    return boto3.client("s3", **client_kwargs)
