"""
StudyShelf Client Service.
Encapsulates all HTTP communication with the StudyShelf API.
"""
import httpx
import logging
from pathlib import Path
from typing import List, Optional

import aiofiles
import aiofiles.os

from studyshelf_client.config import ClientConfig
from studyshelf_client.schemas.category import CategoryCreate, CategoryResponse
from studyshelf_client.schemas.book import BookResponse, FileCheck, UploadResponse

logger = logging.getLogger(__name__)


class StudyShelfClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        download_dir: Optional[Path] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or ClientConfig.BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else ClientConfig.TIMEOUT
        self.download_dir = Path(download_dir or ClientConfig.DOWNLOAD_DIR)
        self.transport = transport

    async def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    # --- Categories ---
    async def list_categories(self) -> List[CategoryResponse]:
        async with await self._get_client() as client:
            resp = await client.get("/categories")
            resp.raise_for_status()
            return [CategoryResponse(**item) for item in resp.json()]

    async def create_category(self, name: str) -> CategoryResponse:
        async with await self._get_client() as client:
            resp = await client.post("/categories", json=CategoryCreate(name=name).model_dump())
            resp.raise_for_status()
            return CategoryResponse(**resp.json())

    # --- Books ---
    async def list_books(self, category_id: Optional[str] = None) -> List[BookResponse]:
        params = {"categoryId": category_id} if category_id else {}
        async with await self._get_client() as client:
            resp = await client.get("/books", params=params)
            resp.raise_for_status()
            return [self._with_file_url(BookResponse(**item)) for item in resp.json()]

    async def get_book(self, book_id: str) -> Optional[BookResponse]:
        async with await self._get_client() as client:
            resp = await client.get(f"/books/{book_id}")
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
            return self._with_file_url(BookResponse(**resp.json()))

    async def upload_book(
        self,
        title: str,
        description: str,
        category_id: str,
        filename: str,
        content: bytes,
        content_type: str = "application/pdf"
    ) -> UploadResponse:
        """Upload a PDF as multipart/form-data under the field name pdfFile."""
        data = {
            "title": title.strip(),
            "description": description.strip(),
            "categoryId": category_id,
        }
        files = {"pdfFile": (filename, content, content_type)}
        async with await self._get_client() as client:
            resp = await client.post("/upload", data=data, files=files)
            resp.raise_for_status()
            return UploadResponse(**resp.json())

    # --- Files ---
    def get_file_url(self, file_path: Optional[str]) -> Optional[str]:
        """
        Normalize a stored file reference into a full URL.

        Absolute http(s) URLs pass through. Anything else is reduced to its
        filename and resolved against the server's uploads mount.
        """
        if not file_path:
            return None
        if file_path.startswith("http"):
            return file_path
        filename = file_path.replace("\\", "/").split("/")[-1]
        return str(httpx.URL(self.base_url).join(f"{ClientConfig.UPLOADS_PATH}/{filename}"))

    def _with_file_url(self, book: BookResponse) -> BookResponse:
        book.file_url = self.get_file_url(book.file_url) or book.file_url
        return book

    async def check_file_exists(self, file_url: str) -> FileCheck:
        """HEAD the file URL. Network and HTTP errors count as missing."""
        try:
            async with await self._get_client() as client:
                resp = await client.head(file_url)
                resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"File check failed for {file_url}: {e}")
            return FileCheck(exists=False)

        try:
            size = int(resp.headers.get("content-length", "0"))
        except ValueError:
            size = 0
        return FileCheck(exists=True, size=size, content_type=resp.headers.get("content-type"))

    async def download_book(
        self,
        book: BookResponse,
        target_dir: Optional[Path] = None,
        filename: Optional[str] = None
    ) -> Path:
        """
        Download a book's PDF, reusing an existing local copy of the same size.

        Returns:
            Path of the local file.

        Raises:
            FileNotFoundError: the server does not have the file.
            httpx.HTTPError: the transfer failed.
        """
        file_url = self.get_file_url(book.file_url)
        check = await self.check_file_exists(file_url)
        if not check.exists:
            raise FileNotFoundError(f"File not found on server: {file_url}")

        target_dir = Path(target_dir or self.download_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / (filename or f"{book.published_code}.pdf")

        if target.exists() and check.size and target.stat().st_size == check.size:
            logger.info(f"Using cached copy of {book.published_code}: {target}")
            return target

        partial = target.with_name(target.name + ".part")
        try:
            async with await self._get_client() as client:
                async with client.stream("GET", file_url, timeout=None) as response:
                    response.raise_for_status()
                    async with aiofiles.open(partial, "wb") as f:
                        async for chunk in response.aiter_bytes():
                            await f.write(chunk)
        except (httpx.HTTPError, OSError):
            if partial.exists():
                await aiofiles.os.remove(partial)
            raise

        await aiofiles.os.replace(partial, target)
        logger.info(f"Downloaded {book.published_code} to {target}")
        return target
