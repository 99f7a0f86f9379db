from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from studyshelf.config.settings import Settings
from studyshelf.core import container, create_app
from studyshelf.repositories import BookRepository, CategoryRepository, CounterRepository
from studyshelf.services import CodeAllocator

PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\ntrailer << /Root 1 0 R >>\n%%EOF\n"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        UPLOAD_DIR=tmp_path / "uploads",
        LOG_DIR=tmp_path / "logs",
        LOG_JSON=False,
        LOG_LEVEL="DEBUG",
        MONGODB_DATABASE="studyshelf_test",
    )


@pytest.fixture()
def db():
    return AsyncMongoMockClient()["studyshelf_test"]


@pytest.fixture()
def repos(db, settings):
    books = BookRepository(db)
    books.set_settings(settings)
    categories = CategoryRepository(db)
    categories.set_settings(settings)
    counters = CounterRepository(db)
    counters.set_settings(settings)
    return books, categories, counters


@pytest.fixture()
def allocator(repos) -> CodeAllocator:
    books, _, counters = repos
    return CodeAllocator(book_repo=books, counter_repo=counters)


@pytest.fixture()
def client(db, settings):
    settings.ensure_directories()
    app = create_app(settings)
    asyncio.run(container.bind(db, settings))
    try:
        yield TestClient(app)
    finally:
        asyncio.run(container.shutdown())


@pytest.fixture()
def category_id(client: TestClient) -> str:
    response = client.post("/api/categories", json={"name": "Networking"})
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture()
def pdf_bytes() -> bytes:
    return PDF_BYTES


@pytest.fixture()
def upload(client: TestClient):
    """Post a multipart upload; pass None to leave a form field out."""

    def _upload(title="TCP/IP Basics", description="Intro notes", category_id=None,
                content=PDF_BYTES, filename="notes.pdf", content_type="application/pdf",
                with_file=True):
        data = {
            key: value
            for key, value in (("title", title), ("description", description), ("categoryId", category_id))
            if value is not None
        }
        files = {"pdfFile": (filename, content, content_type)} if with_file else None
        return client.post("/api/upload", data=data, files=files)

    return _upload


@pytest.fixture()
def stored_files(settings: Settings):
    """Files currently in the upload directory."""

    def _stored_files() -> list:
        return sorted(p for p in settings.upload_dir.iterdir() if p.is_file())

    return _stored_files
