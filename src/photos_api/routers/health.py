import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from photos_api.config.settings import Settings
from photos_api.db_layer.post_service import PostService
from photos_api.dependencies import get_app_settings, get_post_service, get_s3_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(
    settings: Settings = Depends(get_app_settings),
    s3_client=Depends(get_s3_client),
    post_service: PostService = Depends(get_post_service),
):
    """
    Health check endpoint for monitoring API status and component readiness.

    Returns status of the API, the metadata database and the image bucket.
    """
    health_status = {
        "status": "ok",
        "components": {
            "api": "ready",
            "database": "ready",
            "storage": "ready"
        },
        "ready": False
    }

    try:
        await run_in_threadpool(post_service.ping)
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        health_status["components"]["database"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    try:
        await run_in_threadpool(s3_client.head_bucket, Bucket=settings.bucket_name)
    except Exception as e:
        logger.warning(f"Storage health check failed: {e}")
        health_status["components"]["storage"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    health_status["ready"] = all(
        state == "ready" for state in health_status["components"].values()
    )
    return health_status
