import os
import re
import pytest

from simple_photo.cli import app


VERSION_PATTERN = r"simple-photo \d+\.\d+\.\d+"


def _args(project_root, *rest):
    return ["--root", str(project_root), "--save-path", "photos", *rest]


# ---------------------------
# Valid CLI usage
# ---------------------------

valid_cli_cases = [
    pytest.param(["--version"], VERSION_PATTERN, id="version_long"),
    pytest.param(["-V"], VERSION_PATTERN, id="version_short"),
    pytest.param(["--help"], "SimplePhoto local photo storage tooling.", id="help_root"),
    pytest.param(["upload", "--help"], "Upload a photo", id="help_upload"),
    pytest.param(["url", "--help"], "Print the public URL", id="help_url"),
]

@pytest.mark.parametrize("args,expected_output_pattern", valid_cli_cases)
def test_general_cli_cases(runner, args, expected_output_pattern):
    """
    Tests valid CLI flags and help messages.
    """
    result = runner.invoke(app, args)
    assert result.exit_code == 0, f"Unexpected exit code: {result.exit_code}. Output:\n{result.stdout}"
    assert re.search(expected_output_pattern, result.stdout), (
        f"Expected output not found in:\n{result.stdout}"
    )


invalid_cli_cases = [
    pytest.param(["invalid-command"], "No such command 'invalid-command'", id="invalid_command"),
    pytest.param(["upload"], "Missing argument", id="upload_missing_file"),
]

@pytest.mark.parametrize("args,expected_output", invalid_cli_cases)
def test_invalid_cli_cases(runner, args, expected_output):
    result = runner.invoke(app, args)
    assert result.exit_code == 2, f"Unexpected exit code: {result.exit_code}"
    assert expected_output in result.stderr, (
        f"Expected error message not found.\nExpected:{expected_output}\nOriginal Output:\n{result.stderr}"
    )


# ---------------------------
# Storage commands
# ---------------------------

def test_upload_prints_reference(runner, project_root, source_photo):
    result = runner.invoke(app, _args(project_root, "upload", str(source_photo), "--destination", "2024/"))
    assert result.exit_code == 0, result.stderr
    assert result.stdout.strip() == "2024/pic.jpg"
    assert (project_root / "photos" / "2024" / "pic.jpg").is_file()


def test_upload_missing_file(runner, project_root, tmp_path):
    result = runner.invoke(app, _args(project_root, "upload", str(tmp_path / "nope.jpg")))
    assert result.exit_code == 1
    assert "[ERROR]" in result.stderr
    assert "does not exist" in result.stderr


def test_upload_copy_failure(runner, project_root, source_photo, mocker):
    mocker.patch(
        "simple_photo.storage.local_storage.shutil.copyfile",
        side_effect=OSError("disk full"),
    )
    result = runner.invoke(app, _args(project_root, "upload", str(source_photo)))
    assert result.exit_code == 1
    assert "Failed to upload photo" in result.stderr


def test_exists_and_delete(runner, project_root, source_photo):
    runner.invoke(app, _args(project_root, "upload", str(source_photo)))

    result = runner.invoke(app, _args(project_root, "exists", "pic.jpg"))
    assert result.exit_code == 0
    assert result.stdout.strip() == "yes"

    result = runner.invoke(app, _args(project_root, "delete", "pic.jpg"))
    assert result.exit_code == 0
    assert "Deleted pic.jpg" in result.stdout

    result = runner.invoke(app, _args(project_root, "exists", "pic.jpg"))
    assert result.exit_code == 1
    assert result.stdout.strip() == "no"


def test_path_command(runner, project_root):
    result = runner.invoke(app, _args(project_root, "path", "a.jpg"))
    assert result.exit_code == 0
    assert result.stdout.strip() == f"{project_root}/photos/a.jpg"

    result = runner.invoke(app, _args(project_root, "path"))
    assert result.stdout.strip() == f"{project_root}/photos"


def test_url_command(runner, project_root):
    result = runner.invoke(app, _args(project_root, "url", "a.jpg", "--base-url", "https://cdn.example.com/"))
    assert result.exit_code == 0, result.stderr
    assert result.stdout.strip() == "https://cdn.example.com/photos/a.jpg"


def test_url_command_uses_environment(runner, project_root, monkeypatch):
    monkeypatch.setenv("SIMPLE_PHOTO_BASE_URL", "http://static.test")
    result = runner.invoke(app, _args(project_root, "url", "a.jpg"))
    assert result.stdout.strip() == "http://static.test/photos/a.jpg"


def test_url_command_without_base_url(runner, project_root):
    result = runner.invoke(app, _args(project_root, "url", "a.jpg"))
    assert result.exit_code == 1
    assert "No base URL provider configured" in result.stderr


def test_resource_command(runner, project_root, source_photo):
    runner.invoke(app, _args(project_root, "upload", str(source_photo)))
    result = runner.invoke(app, _args(project_root, "resource", "pic.jpg"))
    assert result.exit_code == 0, result.stderr
    tmp_name = result.stdout.strip()
    try:
        with open(tmp_name, "rb") as f:
            assert f.read() == source_photo.read_bytes()
    finally:
        os.remove(tmp_name)


def test_resource_command_missing(runner, project_root):
    result = runner.invoke(app, _args(project_root, "resource", "missing.jpg"))
    assert result.exit_code == 1
    assert "Failed to fetch photo" in result.stderr


def test_resource_command_copy_failure(runner, project_root, source_photo, mocker):
    runner.invoke(app, _args(project_root, "upload", str(source_photo)))
    mocker.patch(
        "simple_photo.storage.local_storage.shutil.copyfile",
        side_effect=OSError("disk full"),
    )
    result = runner.invoke(app, _args(project_root, "resource", "pic.jpg"))
    assert result.exit_code == 1
    assert "could not copy pic.jpg" in result.stderr


def test_mkdir_command(runner, project_root):
    result = runner.invoke(app, _args(project_root, "mkdir", "albums/2024"))
    assert result.exit_code == 0
    assert (project_root / "photos" / "albums" / "2024").is_dir()
    assert result.stdout.strip() == f"{project_root}/photos/albums/2024"


def test_commands_read_root_from_environment(runner, project_root, source_photo, monkeypatch):
    monkeypatch.setenv("SIMPLE_PHOTO_PROJECT_ROOT", str(project_root))
    monkeypatch.setenv("SIMPLE_PHOTO_SAVE_PATH", "env-photos")
    result = runner.invoke(app, ["upload", str(source_photo)])
    assert result.exit_code == 0, result.stderr
    assert (project_root / "env-photos" / "pic.jpg").is_file()
