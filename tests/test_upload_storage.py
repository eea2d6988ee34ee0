from __future__ import annotations

import io
import logging
import re

import pytest

from civicreport.services.errors import InvalidUploadError, UploadTooLargeError
from civicreport.services.storage import UploadStore


@pytest.mark.parametrize(
    "filename, content_type",
    [
        ("photo.jpg", "image/jpeg"),
        ("photo.JPEG", "image/jpeg"),
        ("photo.png", "image/png"),
        ("anim.gif", "image/gif"),
        ("photo.jpg", "image/jpg"),
    ],
)
def test_validate_accepts_images(filename, content_type):
    UploadStore.validate(filename, content_type)


@pytest.mark.parametrize(
    "filename, content_type",
    [
        ("photo.txt", "image/png"),    # extension fails
        ("photo.png", "text/plain"),   # media type fails
        ("photo.webp", "image/webp"),  # both outside the allowed set
        ("photo", "image/png"),
        ("photo.png", None),
    ],
)
def test_validate_rejects_non_images(filename, content_type):
    with pytest.raises(InvalidUploadError, match="Only image files are allowed!"):
        UploadStore.validate(filename, content_type)


def test_generated_filename_format():
    name = UploadStore.generate_filename("street lamp.png")
    assert re.fullmatch(r"\d{13}-\d{1,10}-street lamp\.png", name)


def test_generated_filename_strips_directories():
    assert UploadStore.generate_filename("../../etc/evil.png").endswith("-evil.png")
    assert UploadStore.generate_filename("C:\\pics\\cat.gif").endswith("-cat.gif")


def test_save_creates_directory_and_writes(tmp_path):
    store = UploadStore(tmp_path / "nested" / "uploads")
    name = store.save(io.BytesIO(b"gif-bytes"), "cat.gif", "image/gif")
    assert (store.root / name).read_bytes() == b"gif-bytes"
    assert store.path_for(name) == store.root / name


def test_save_over_limit_leaves_no_partial_file(tmp_path):
    store = UploadStore(tmp_path, max_bytes=10)
    with pytest.raises(UploadTooLargeError):
        store.save(io.BytesIO(b"x" * 11), "big.png", "image/png")
    assert list(tmp_path.iterdir()) == []


def test_save_at_limit_is_accepted(tmp_path):
    store = UploadStore(tmp_path, max_bytes=10)
    name = store.save(io.BytesIO(b"x" * 10), "ok.png", "image/png")
    assert (tmp_path / name).stat().st_size == 10


def test_path_for_rejects_traversal(tmp_path):
    store = UploadStore(tmp_path / "uploads")
    (tmp_path / "secret.png").write_bytes(b"x")
    assert store.path_for("../secret.png") is None
    assert store.path_for("") is None
    assert store.path_for(".hidden") is None


def test_delete_missing_file_is_logged_not_raised(tmp_path, caplog):
    store = UploadStore(tmp_path)
    with caplog.at_level(logging.WARNING, logger="civicreport.services.storage"):
        assert store.delete("123-456-gone.png") is False
    assert "gone.png" in caplog.text


def test_delete_removes_file(tmp_path):
    store = UploadStore(tmp_path)
    name = store.save(io.BytesIO(b"data"), "a.png", "image/png")
    assert store.delete(name) is True
    assert not (tmp_path / name).exists()
    assert store.delete(None) is False
