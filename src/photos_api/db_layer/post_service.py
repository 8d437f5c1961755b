"""
Post service for the metadata store.
Handles the rows pairing a caption with the key of a stored image.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from photos_api.database.local import DEFAULT_DB_PATH, connect, init_db

logger = logging.getLogger(__name__)


def _row_to_post(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "caption": row["caption"],
        "imageName": row["imageName"],
        "created": datetime.fromisoformat(row["created"]),
    }


class PostService:
    """Service for creating, listing and deleting post rows"""

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path

    def init_schema(self) -> None:
        init_db(self.db_path)

    def create_post(self, caption: str, image_name: str) -> Dict[str, Any]:
        """Insert a post row and return it as stored"""
        created = datetime.now(timezone.utc).isoformat(timespec="microseconds")
        with connect(self.db_path) as conn:
            cursor = conn.execute(
                'INSERT INTO posts (caption, imageName, created) VALUES (?, ?, ?)',
                (caption, image_name, created)
            )
            post_id = cursor.lastrowid
            row = conn.execute('SELECT * FROM posts WHERE id = ?', (post_id,)).fetchone()

        logger.info(f"Created post {post_id} for image {image_name}")
        return _row_to_post(row)

    def list_posts(self) -> List[Dict[str, Any]]:
        """All posts, newest first. Ties on created keep insertion order reversed."""
        with connect(self.db_path) as conn:
            rows = conn.execute(
                'SELECT * FROM posts ORDER BY created DESC, id DESC'
            ).fetchall()
        return [_row_to_post(row) for row in rows]

    def get_post(self, post_id: int) -> Optional[Dict[str, Any]]:
        with connect(self.db_path) as conn:
            row = conn.execute('SELECT * FROM posts WHERE id = ?', (post_id,)).fetchone()
        return _row_to_post(row) if row else None

    def delete_post(self, post_id: int) -> bool:
        """Delete a post row. Returns False when no row had that id."""
        with connect(self.db_path) as conn:
            cursor = conn.execute('DELETE FROM posts WHERE id = ?', (post_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted post {post_id}")
        else:
            logger.warning(f"Post {post_id} was already gone at delete time")
        return deleted

    def list_image_names(self) -> List[str]:
        """Every imageName referenced by a row, for reconciliation against the bucket"""
        with connect(self.db_path) as conn:
            rows = conn.execute('SELECT imageName FROM posts').fetchall()
        return [row["imageName"] for row in rows]

    def ping(self) -> None:
        """Raise if the database file cannot be queried"""
        with connect(self.db_path) as conn:
            conn.execute('SELECT 1 FROM posts LIMIT 1').fetchall()
