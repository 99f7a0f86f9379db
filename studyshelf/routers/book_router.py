"""
Book API router.

Thin router that stores the uploaded PDF and delegates to BookController.
"""
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile
from fastapi.responses import FileResponse
from typing import List, Optional
import logging

from studyshelf.config.settings import Settings
from studyshelf.core.dependencies import get_book_controller, get_settings_dependency
from studyshelf.controllers import BookController
from studyshelf.schemas import BookResponse, BookUploadResponse
from studyshelf.utils.file_utils import save_uploaded_file

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Books"])


@router.post("/upload", response_model=BookUploadResponse, status_code=201)
async def upload_book(
    request: Request,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None, alias="categoryId"),
    pdf_file: Optional[UploadFile] = File(None, alias="pdfFile"),
    controller: BookController = Depends(get_book_controller),
    settings: Settings = Depends(get_settings_dependency)
):
    """Upload a PDF with its title, description and category."""
    stored_file = None
    if pdf_file is not None and pdf_file.filename:
        stored_file = await save_uploaded_file(
            pdf_file,
            settings.upload_dir,
            max_size=settings.max_upload_size_bytes
        )

    book = await controller.submit_upload(
        title=title,
        description=description,
        category_id=category_id,
        stored_file=stored_file,
        base_url=str(request.base_url)
    )
    return BookUploadResponse(message="Book uploaded successfully", book=book)


@router.get("/books", response_model=List[BookResponse])
async def list_books(
    request: Request,
    category_id: Optional[str] = Query(None, alias="categoryId"),
    controller: BookController = Depends(get_book_controller)
):
    """List all books, newest first."""
    return await controller.list_books(str(request.base_url), category_id)


@router.get("/books/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: str,
    request: Request,
    controller: BookController = Depends(get_book_controller)
):
    """Get a specific book."""
    return await controller.get_book(book_id, str(request.base_url))


@router.get("/books/{book_id}/download")
async def download_book(
    book_id: str,
    controller: BookController = Depends(get_book_controller)
):
    """Download the PDF behind a book."""
    book, file_path = await controller.get_book_file(book_id)
    if not file_path.exists():
        logger.error(f"File for book {book_id} missing on disk: {file_path}")
        raise HTTPException(status_code=404, detail="File not found on server")

    return FileResponse(
        path=file_path,
        filename=book.original_filename or f"{book.published_code}.pdf",
        media_type="application/pdf"
    )
