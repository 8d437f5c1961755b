from textwrap import dedent
import logging
import pydantic
from fastapi import FastAPI
from fastapi.routing import APIRoute
from fastapi.middleware.cors import CORSMiddleware

from photos_api.config.settings import Settings, get_settings
from photos_api.db_layer.post_service import PostService
from photos_api.errors import (
    handle_broad_exceptions,
    handle_image_decode_errors,
    handle_pydantic_validation_errors,
)
from photos_api.images import ImageDecodeError
from photos_api.routers.health import router as health_router
from photos_api.routers.posts import router as posts_router
from photos_api.s3.client import build_s3_client

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def create_app(
    settings: Settings | None = None,
    s3_client=None,
    post_service: PostService | None = None,
) -> FastAPI:
    """
    Create a FastAPI application.

    The S3 client and post service are built here once and shared by every
    request through ``app.state``. Pass them in to substitute test doubles.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Photos API",
        summary="Post captioned photos",
        version="v1",
        description=dedent(
            """\
        Images are resized to fit 1080x1920 and stored in S3 under a random key;
        captions live in SQLite. `GET /api/posts` returns short-lived signed
        image URLs.

        | Helpful Links | Notes |
        | --- | --- |
        | [FastAPI Documentation](https://fastapi.tiangolo.com/) | |
        | [Presigned URLs](https://docs.aws.amazon.com/AmazonS3/latest/userguide/ShareObjectPreSignedURL.html) | expire after one hour by default |
        """
        ),
        docs_url="/",  # its easier to find the docs when they live on the base url
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if post_service is None:
        post_service = PostService(settings.database_path)
        logger.info(f"creating db at {settings.database_path}")
        post_service.init_schema()

    app.state.settings = settings
    app.state.s3_client = s3_client or build_s3_client(settings)
    app.state.post_service = post_service

    app.include_router(posts_router, prefix="/api", tags=["posts"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=ImageDecodeError,
        handler=handle_image_decode_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
