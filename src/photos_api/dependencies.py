"""FastAPI dependencies exposing the handles built in ``create_app``."""

from fastapi import Request

from photos_api.config.settings import Settings
from photos_api.db_layer.post_service import PostService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_s3_client(request: Request):
    """The boto3 S3 client shared by every request."""
    return request.app.state.s3_client


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service
