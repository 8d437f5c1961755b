from tests.fixtures.aws_fixtures import (  # noqa: F401
    clear_settings_cache,
    client,
    mocked_aws,
    s3_client,
    settings,
)
from tests.fixtures.db_client import post_service, standalone_post_service  # noqa: F401
from tests.fixtures.image_fixtures import jpeg_bytes, png_bytes  # noqa: F401
