from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from studyshelf.controllers import BookController
from studyshelf.schemas import Book
from studyshelf.services import format_code, next_published_code, parse_code_number
from studyshelf.utils.file_utils import StoredUpload


def _book(code: str, number) -> Book:
    return Book(
        book_id=f"book_{code}",
        title="t",
        description="d",
        category_id="cat_x",
        published_code=code,
        code_number=number if number is not None else 0,
        file_path=f"uploads/{code}.pdf",
        created_at=datetime.utcnow(),
    )


@pytest.mark.parametrize(
    ("latest", "expected"),
    [
        (None, "eduIT001"),
        ("", "eduIT001"),
        ("eduIT001", "eduIT002"),
        ("eduIT009", "eduIT010"),
        ("eduIT998", "eduIT999"),
        ("eduIT999", "eduIT1000"),
        ("eduIT1000", "eduIT1001"),
        ("eduITabc", "eduIT001"),
        ("legacy-7", "eduIT001"),
        ("eduIT²", "eduIT001"),
        ("eduIT٣", "eduIT001"),
    ],
)
def test_next_published_code(latest, expected):
    assert next_published_code(latest) == expected


def test_format_and_parse():
    assert format_code(7) == "eduIT007"
    assert format_code(12345) == "eduIT12345"
    assert parse_code_number("eduIT042") == 42
    assert parse_code_number("eduIT") is None
    assert parse_code_number("eduIT-3") is None
    assert parse_code_number("eduIT²") is None
    assert parse_code_number(None) is None


async def test_first_allocation_is_eduit001(allocator):
    assert await allocator.allocate_next_code() == "eduIT001"
    assert await allocator.allocate_next_code() == "eduIT002"


async def test_allocation_continues_after_existing_books(allocator, repos):
    books, _, _ = repos
    await books.ensure_indexes()
    await books.create(_book("eduIT041", 41))
    await books.create(_book("eduIT999", 999))
    await books.create(_book("eduIT120", 120))

    assert await allocator.latest_code() == "eduIT999"
    assert await allocator.peek_next_code() == "eduIT1000"
    assert await allocator.allocate_next_code() == "eduIT1000"


async def test_peek_does_not_reserve(allocator):
    assert await allocator.peek_next_code() == "eduIT001"
    assert await allocator.peek_next_code() == "eduIT001"
    assert await allocator.allocate_next_code() == "eduIT001"


async def test_thousandth_sequential_code(allocator):
    codes = [await allocator.allocate_next_code() for _ in range(1000)]
    assert codes[0] == "eduIT001"
    assert codes[-1] == "eduIT1000"
    numbers = [parse_code_number(code) for code in codes]
    assert numbers == sorted(numbers)
    assert len(set(codes)) == 1000


async def test_concurrent_allocations_are_unique(allocator):
    codes = await asyncio.gather(*(allocator.allocate_next_code() for _ in range(50)))
    assert len(set(codes)) == 50
    assert sorted(parse_code_number(c) for c in codes) == list(range(1, 51))


async def test_sync_never_lowers_counter(allocator, repos):
    books, _, counters = repos
    for _ in range(5):
        await allocator.allocate_next_code()
    await books.create(_book("eduIT002", 2))

    assert await allocator.sync() == 5
    assert await counters.get("published_code") == 5


async def test_concurrent_uploads_get_distinct_codes(allocator, repos, settings):
    books, categories, _ = repos
    await books.ensure_indexes()
    category = await categories.create("Networking")
    controller = BookController(
        book_repo=books,
        category_repo=categories,
        code_allocator=allocator,
        settings=settings,
    )
    settings.ensure_directories()

    def _stored(i: int) -> StoredUpload:
        path = settings.upload_dir / f"concurrent_{i}.pdf"
        path.write_bytes(b"%PDF-1.4\n%%EOF\n")
        return StoredUpload(path=path, original_filename=path.name, size=path.stat().st_size)

    responses = await asyncio.gather(*(
        controller.submit_upload(f"Part {i}", "notes", category.category_id, _stored(i), "http://testserver")
        for i in range(20)
    ))

    codes = [response.published_code for response in responses]
    assert len(set(codes)) == 20
    stored = [book.published_code for book in await books.get_all()]
    assert sorted(stored, key=parse_code_number) == [format_code(n) for n in range(1, 21)]
