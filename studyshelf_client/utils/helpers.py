"""
Display helpers shared by client views.
"""
from typing import Optional

CATEGORY_COLORS = (
    "#4287f5",  # blue
    "#42f5a7",  # green
    "#f54242",  # red
    "#f5a742",  # orange
    "#a742f5",  # purple
    "#f542d4",  # pink
)


def format_file_size(size: int) -> str:
    """Human-readable size: 0 Bytes, 1.5 KB, 2 MB, ..."""
    if size <= 0:
        return "0 Bytes"
    units = ("Bytes", "KB", "MB", "GB")
    index = 0
    while size >= 1024 ** (index + 1) and index < len(units) - 1:
        index += 1
    value = round(size / (1024 ** index), 2)
    return f"{value:g} {units[index]}"


def is_pdf_file(content_type: Optional[str]) -> bool:
    return content_type == "application/pdf"


def truncate_text(text: Optional[str], max_length: int) -> str:
    """Cut text to max_length characters, marking the cut with '...'."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def get_category_color(category: str) -> str:
    """Stable badge color for a category name."""
    return CATEGORY_COLORS[sum(ord(ch) for ch in category) % len(CATEGORY_COLORS)]
