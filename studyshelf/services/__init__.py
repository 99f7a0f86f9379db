"""
Services module for StudyShelf.
"""
from .code_allocator import (
    CodeAllocator,
    format_code,
    next_published_code,
    parse_code_number,
)

__all__ = [
    "CodeAllocator",
    "format_code",
    "next_published_code",
    "parse_code_number",
]
