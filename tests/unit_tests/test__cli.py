from click.testing import CliRunner

from photos_api.cli import cli
from photos_api.db_layer.post_service import PostService
from photos_api.s3.read_objects import object_exists_in_s3
from photos_api.s3.write_objects import upload_s3_object
from tests.consts import TEST_BUCKET_NAME


def cli_env(tmp_path):
    return {
        "BUCKET_NAME": TEST_BUCKET_NAME,
        "BUCKET_REGION": "us-east-1",
        "ACCESS_KEY": "testing",
        "SECRET_ACCESS_KEY": "testing",
        "DATABASE_PATH": str(tmp_path / "cli.db"),
    }


def test_show_config(tmp_path, clear_settings_cache):
    result = CliRunner().invoke(cli, ["show-config"], env=cli_env(tmp_path))

    assert result.exit_code == 0, result.output
    assert f"BUCKET_NAME: {TEST_BUCKET_NAME}" in result.output
    assert "testing" not in result.output


def test_init_db(tmp_path, clear_settings_cache):
    result = CliRunner().invoke(cli, ["init-db"], env=cli_env(tmp_path))

    assert result.exit_code == 0, result.output
    assert PostService(str(tmp_path / "cli.db")).list_posts() == []


def test_reconcile(tmp_path, s3_client, clear_settings_cache):
    PostService(str(tmp_path / "cli.db")).init_schema()
    upload_s3_object(s3_client, TEST_BUCKET_NAME, "a" * 64, b"img")
    runner = CliRunner()

    dry_run = runner.invoke(cli, ["reconcile", "--min-age", "0"], env=cli_env(tmp_path))
    assert dry_run.exit_code == 0, dry_run.output
    assert f"orphaned: {'a' * 64}" in dry_run.output
    assert "--apply" in dry_run.output
    assert object_exists_in_s3(s3_client, TEST_BUCKET_NAME, "a" * 64)

    applied = runner.invoke(cli, ["reconcile", "--apply", "--min-age", "0"], env=cli_env(tmp_path))
    assert applied.exit_code == 0, applied.output
    assert f"deleted: {'a' * 64}" in applied.output
    assert not object_exists_in_s3(s3_client, TEST_BUCKET_NAME, "a" * 64)
