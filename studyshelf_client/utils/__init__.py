from .helpers import format_file_size, get_category_color, is_pdf_file, truncate_text

__all__ = ["format_file_size", "get_category_color", "is_pdf_file", "truncate_text"]
