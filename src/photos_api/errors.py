"""Exception handlers registered on the FastAPI app."""

import logging

import pydantic
from fastapi import (
    Request,
    status,
)
from fastapi.responses import JSONResponse

from photos_api.images import ImageDecodeError

logger = logging.getLogger(__name__)


async def handle_image_decode_errors(request: Request, exc: ImageDecodeError) -> JSONResponse:
    """Uploads that are not decodable images are client errors."""
    logger.warning(f"Rejected upload on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)},
    )


# fastapi docs on middlewares: https://fastapi.tiangolo.com/tutorial/middleware/
async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that propagates during the request, logging it."""
    try:
        return await call_next(request)
    except Exception as e:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


# fastapi docs on error handlers: https://fastapi.tiangolo.com/tutorial/handling-errors/
async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    """Validation errors raised outside request parsing mean the server built a bad model."""
    errors = exc.errors()
    logger.error(f"Response validation failed on {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": [
                {
                    "msg": error["msg"],
                    "input": str(error.get("input")),
                }
                for error in errors
            ]
        },
    )
