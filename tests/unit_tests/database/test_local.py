import sqlite3

import pytest

from photos_api.database.local import init_db
from photos_api.db_layer.post_service import PostService


@pytest.fixture
def db(tmp_path):
    db_path = str(tmp_path / "test_posts.db")
    init_db(db_path)
    return db_path


def test_init_db(db):
    conn = sqlite3.connect(db)
    cursor = conn.cursor()
    cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name='posts'")
    assert cursor.fetchone() is not None
    cursor.execute("PRAGMA table_info(posts)")
    columns = [row[1] for row in cursor.fetchall()]
    conn.close()

    assert columns == ["id", "caption", "imageName", "created"]


def test_init_db_is_idempotent(db):
    service = PostService(db)
    service.create_post("kept", "f" * 64)

    init_db(db)

    assert [post["caption"] for post in service.list_posts()] == ["kept"]


def test_image_name_is_unique(db):
    service = PostService(db)
    service.create_post("first", "a" * 64)

    with pytest.raises(sqlite3.IntegrityError):
        service.create_post("second", "a" * 64)
