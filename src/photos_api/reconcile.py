"""
Detect and remove orphaned images.

Creating a post writes the image before the row, and deleting a post removes
the image before the row. A failure between the two steps leaves the bucket
and the database out of step. This sweep finds:

- orphaned objects: keys in the bucket that no row references
- dangling rows: rows whose image is missing from the bucket

Only orphaned objects are ever deleted. Dangling rows are reported for a
human to decide on.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from photos_api.db_layer.post_service import PostService
from photos_api.s3.delete_objects import delete_s3_object
from photos_api.s3.read_objects import iter_objects

logger = logging.getLogger(__name__)

DEFAULT_MIN_AGE_SECONDS = 300


@dataclass
class ReconcileReport:
    orphaned_objects: List[str] = field(default_factory=list)
    dangling_rows: List[str] = field(default_factory=list)
    deleted_objects: List[str] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.orphaned_objects and not self.dangling_rows


def reconcile_orphaned_objects(
    s3_client,
    bucket_name: str,
    post_service: PostService,
    apply: bool = False,
    min_age_seconds: int = DEFAULT_MIN_AGE_SECONDS,
    now: Optional[datetime] = None,
) -> ReconcileReport:
    """
    Compare the bucket with the posts table.

    Args:
        s3_client: boto3 S3 client
        bucket_name: bucket holding post images
        post_service: metadata store
        apply: delete orphaned objects instead of only reporting them
        min_age_seconds: ignore objects modified more recently than this, so
            a create whose row has not landed yet is not swept
        now: reference time for the age check, defaults to the current time

    Returns:
        ReconcileReport listing what was found and what was deleted
    """
    cutoff = (now or datetime.now(timezone.utc)) - timedelta(seconds=min_age_seconds)

    # Keys are listed before rows are read; a row inserted during the sweep
    # for an already-listed key is still matched.
    objects = dict(iter_objects(s3_client, bucket_name))
    referenced = set(post_service.list_image_names())

    report = ReconcileReport(
        orphaned_objects=sorted(
            key for key, last_modified in objects.items()
            if key not in referenced and last_modified <= cutoff
        ),
        dangling_rows=sorted(referenced - set(objects)),
    )
    logger.info(
        f"Found {len(report.orphaned_objects)} orphaned objects and "
        f"{len(report.dangling_rows)} dangling rows in '{bucket_name}'"
    )

    if apply:
        for key in report.orphaned_objects:
            delete_s3_object(s3_client, bucket_name, key)
            report.deleted_objects.append(key)

    return report
