import logging
import secrets
from typing import List

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    Path,
    UploadFile,
    status
)
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from photos_api.config.settings import Settings
from photos_api.db_layer.post_service import PostService
from photos_api.dependencies import get_app_settings, get_post_service, get_s3_client
from photos_api.images import resize_image
from photos_api.s3.delete_objects import delete_s3_object
from photos_api.s3.read_objects import generate_presigned_get_url
from photos_api.s3.write_objects import upload_s3_object
from photos_api.schemas import (
    POST_NOT_FOUND_MESSAGE,
    DeletePostResponse,
    Post,
    PostWithImageUrl,
)
from photos_api.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)

IMAGE_NAME_BYTES = 32

router = APIRouter()


def random_image_name(num_bytes: int = IMAGE_NAME_BYTES) -> str:
    """Object key made of ``num_bytes`` of CSPRNG output, hex encoded."""
    return secrets.token_hex(num_bytes)


def _attach_image_urls(posts, s3_client, bucket_name: str, expires_in: int) -> List[PostWithImageUrl]:
    return [
        PostWithImageUrl(
            **post,
            image_url=generate_presigned_get_url(
                s3_client,
                bucket_name=bucket_name,
                object_key=post["imageName"],
                expires_in=expires_in,
            ),
        )
        for post in posts
    ]


@router.get("/posts", response_model=List[PostWithImageUrl])
@log_execution_time
async def list_posts(
    settings: Settings = Depends(get_app_settings),
    s3_client=Depends(get_s3_client),
    post_service: PostService = Depends(get_post_service),
) -> List[PostWithImageUrl]:
    """
    List every post, newest first.

    Each post carries a freshly signed `imageUrl` valid for
    `PRESIGNED_URL_EXPIRY_SECONDS` (one hour by default).
    """
    posts = await run_in_threadpool(post_service.list_posts)
    # Signing may resolve credentials over the network on first use
    return await run_in_threadpool(
        _attach_image_urls,
        posts,
        s3_client,
        settings.bucket_name,
        settings.presigned_url_expiry_seconds,
    )


@router.post("/posts", response_model=Post)
@log_execution_time
async def create_post(
    image: UploadFile = File(..., description="The image to post"),
    caption: str = Form("", description="Caption shown with the image, may be empty"),
    settings: Settings = Depends(get_app_settings),
    s3_client=Depends(get_s3_client),
    post_service: PostService = Depends(get_post_service),
) -> Post:
    """
    Resize an uploaded image, store it in the bucket and record the post.

    The object is written before the row. If the row insert fails the object
    stays in the bucket until `photos-api reconcile --apply` removes it.
    """
    file_bytes = await image.read()
    resized = await run_in_threadpool(
        resize_image,
        file_bytes,
        settings.max_image_width,
        settings.max_image_height,
    )

    image_name = random_image_name()
    await run_in_threadpool(
        upload_s3_object,
        s3_client,
        settings.bucket_name,
        image_name,
        resized,
        image.content_type,
    )

    post = await run_in_threadpool(post_service.create_post, caption, image_name)
    return Post(**post)


@router.delete(
    "/posts/{post_id}",
    response_model=DeletePostResponse,
    responses={
        status.HTTP_404_NOT_FOUND: {
            "description": "No post has this id",
            "content": {"text/plain": {"example": POST_NOT_FOUND_MESSAGE}},
        }
    },
)
@log_execution_time
async def delete_post(
    post_id: int = Path(..., description="Id of the post to delete"),
    settings: Settings = Depends(get_app_settings),
    s3_client=Depends(get_s3_client),
    post_service: PostService = Depends(get_post_service),
):
    """
    Delete a post's image from the bucket, then its row.

    Returns `{}` on success and a plain-text 404 when the id is unknown.
    """
    post = await run_in_threadpool(post_service.get_post, post_id)
    if post is None:
        return PlainTextResponse(POST_NOT_FOUND_MESSAGE, status_code=status.HTTP_404_NOT_FOUND)

    await run_in_threadpool(delete_s3_object, s3_client, settings.bucket_name, post["imageName"])
    await run_in_threadpool(post_service.delete_post, post_id)
    return DeletePostResponse()
