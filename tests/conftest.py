from __future__ import annotations

import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from simple_photo.config.settings import BASE_URL_VAR, ROOT_VAR, SAVE_PATH_VAR
from simple_photo.storage.local_storage import LocalStorage
from simple_photo.toolbox.base_url import StaticBaseUrl


@pytest.fixture(autouse=True)
def isolate_env(tmp_path, monkeypatch):
    """
    Run each test from a temporary cwd with no SIMPLE_PHOTO_* variables set.
    """
    for var in (ROOT_VAR, SAVE_PATH_VAR, BASE_URL_VAR):
        monkeypatch.delenv(var, raising=False)
    old_cwd = os.getcwd()
    os.chdir(tmp_path)
    yield
    os.chdir(old_cwd)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def project_root(tmp_path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def source_photo(tmp_path) -> Path:
    src = tmp_path / "incoming" / "pic.jpg"
    src.parent.mkdir()
    src.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg\x00\x01")
    return src


@pytest.fixture
def storage(project_root) -> LocalStorage:
    return LocalStorage(project_root, "photos", StaticBaseUrl("https://cdn.example.com"))
