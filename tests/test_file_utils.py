from __future__ import annotations

import io
import re

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from studyshelf.utils.exceptions import CategoryNotFoundError, UnsupportedFileTypeError
from studyshelf.utils.file_utils import (
    StoredUpload,
    build_file_url,
    generate_unique_filename,
    save_uploaded_file,
)


def _upload_file(content: bytes, filename: str = "notes.pdf", content_type: str = "application/pdf") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_generate_unique_filename_keeps_extension():
    name = generate_unique_filename("Chapter 1.PDF")
    assert re.fullmatch(r"\d{13}_[0-9a-f]{6}\.pdf", name)
    assert generate_unique_filename("a.pdf") != generate_unique_filename("a.pdf")


@pytest.mark.parametrize(
    ("base_url", "file_path", "expected"),
    [
        ("http://localhost:5000/", "uploads/1712.pdf", "http://localhost:5000/uploads/1712.pdf"),
        ("http://10.0.2.2:5000", "/srv/data/uploads/1712.pdf", "http://10.0.2.2:5000/uploads/1712.pdf"),
        ("https://example.org/", "uploads\\1712.pdf", "https://example.org/uploads/1712.pdf"),
    ],
)
def test_build_file_url(base_url, file_path, expected):
    assert build_file_url(base_url, file_path) == expected


async def test_save_uploaded_file(tmp_path):
    stored = await save_uploaded_file(_upload_file(b"%PDF-1.4 data"), tmp_path / "uploads")

    assert stored.path.read_bytes() == b"%PDF-1.4 data"
    assert stored.size == 13
    assert stored.original_filename == "notes.pdf"


async def test_save_accepts_pdf_extension_with_generic_type(tmp_path):
    stored = await save_uploaded_file(
        _upload_file(b"%PDF", filename="scan.pdf", content_type="application/octet-stream"), tmp_path
    )
    assert stored.path.exists()


async def test_save_rejects_non_pdf(tmp_path):
    with pytest.raises(UnsupportedFileTypeError):
        await save_uploaded_file(_upload_file(b"hi", filename="a.txt", content_type="text/plain"), tmp_path)
    assert list(tmp_path.iterdir()) == []


async def test_stored_upload_kept_on_success(tmp_path):
    path = tmp_path / "book.pdf"
    path.write_bytes(b"%PDF")

    async with StoredUpload(path, "book.pdf", 4):
        pass

    assert path.exists()


async def test_stored_upload_discarded_on_error(tmp_path):
    path = tmp_path / "book.pdf"
    path.write_bytes(b"%PDF")

    with pytest.raises(CategoryNotFoundError):
        async with StoredUpload(path, "book.pdf", 4):
            raise CategoryNotFoundError("cat_x")

    assert not path.exists()


async def test_discard_tolerates_missing_file(tmp_path):
    stored = StoredUpload(tmp_path / "gone.pdf", "gone.pdf", 0)
    await stored.discard()
    assert stored.discarded
