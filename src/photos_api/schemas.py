####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)

POST_NOT_FOUND_MESSAGE = "Post not found"


class Post(BaseModel):
    """A caption paired with the key of its stored image."""
    id: int = Field(description="Identifier assigned by the metadata store.")
    caption: str = Field(description="Caption supplied by the client.")
    image_name: str = Field(
        alias="imageName",
        description="Random hex key of the image in the bucket.",
        json_schema_extra={"example": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"},
    )
    created: datetime = Field(description="When the post was created (UTC).")

    model_config = ConfigDict(populate_by_name=True)


class PostWithImageUrl(Post):
    """Response item for `GET /api/posts`."""
    image_url: str = Field(
        alias="imageUrl",
        description="Signed, time-limited URL for downloading the image.",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "caption": "hello",
                "imageName": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08",
                "created": "2024-01-01T12:34:56.000000Z",
                "imageUrl": "https://photos-api-images.s3.amazonaws.com/9f86d0...?X-Amz-Expires=3600",
            }
        },
    )


class DeletePostResponse(BaseModel):
    """Response model for `DELETE /api/posts/:id`. Serializes to `{}`."""

    model_config = ConfigDict(extra="forbid")
