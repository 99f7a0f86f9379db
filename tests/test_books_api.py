from __future__ import annotations

from pathlib import Path

from studyshelf.core import container


def test_list_books_newest_first(client, upload, category_id):
    for title in ("First", "Second", "Third"):
        assert upload(category_id=category_id, title=title).status_code == 201

    books = client.get("/api/books").json()

    assert [b["title"] for b in books] == ["Third", "Second", "First"]
    assert [b["publishedCode"] for b in books] == ["eduIT003", "eduIT002", "eduIT001"]
    assert set(books[0]) >= {"id", "title", "description", "categoryName", "publishedCode", "fileUrl"}
    assert all(b["categoryName"] == "Networking" for b in books)


def test_list_books_filtered_by_category(client, upload, category_id):
    other = client.post("/api/categories", json={"name": "Mathematics"}).json()["id"]
    upload(category_id=category_id, title="Subnets")
    upload(category_id=other, title="Linear Algebra")

    books = client.get("/api/books", params={"categoryId": other}).json()

    assert [b["title"] for b in books] == ["Linear Algebra"]
    assert books[0]["categoryName"] == "Mathematics"


def test_list_books_empty(client):
    assert client.get("/api/books").json() == []


def test_get_book(client, upload, category_id):
    created = upload(category_id=category_id).json()["book"]

    response = client.get(f"/api/books/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_unknown_book(client):
    response = client.get("/api/books/book_unknown")

    assert response.status_code == 404
    assert response.json()["detail"] == "Book not found: book_unknown"


def test_download_book(client, upload, category_id, pdf_bytes):
    book_id = upload(category_id=category_id, filename="tcp.pdf").json()["book"]["id"]

    response = client.get(f"/api/books/{book_id}/download")

    assert response.status_code == 200
    assert response.content == pdf_bytes
    assert response.headers["content-type"] == "application/pdf"
    assert "tcp.pdf" in response.headers["content-disposition"]


def test_download_missing_file(client, upload, category_id):
    book = upload(category_id=category_id).json()["book"]
    stored = container.settings.upload_dir / Path(book["fileUrl"]).name
    stored.unlink()

    response = client.get(f"/api/books/{book['id']}/download")

    assert response.status_code == 404
    assert response.json()["detail"] == "File not found on server"


def test_request_id_header(client):
    response = client.get("/api/books")
    assert len(response.headers["X-Request-ID"]) == 12


def test_health(client):
    body = client.get("/health").json()
    assert body["services"]["mongodb"] == "connected"
