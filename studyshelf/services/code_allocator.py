"""
Published code allocation.

Books get human-readable codes like ``eduIT001``. The numeric suffix comes from
an atomic counter document, so two uploads running at the same time can never
be handed the same code. The counter is seeded from the highest code already
stored, which keeps databases that predate the counter in sequence.
"""
from typing import Optional
import logging

from studyshelf.repositories import BookRepository, CounterRepository

logger = logging.getLogger(__name__)

COUNTER_NAME = "published_code"
DEFAULT_PREFIX = "eduIT"
DEFAULT_WIDTH = 3


def format_code(number: int, prefix: str = DEFAULT_PREFIX, width: int = DEFAULT_WIDTH) -> str:
    """Zero-pad number to at least width digits; wider numbers grow the code."""
    return f"{prefix}{number:0{width}d}"


def parse_code_number(code: Optional[str], prefix: str = DEFAULT_PREFIX) -> Optional[int]:
    """Numeric suffix of a published code, or None if it is not a plain integer."""
    if not code:
        return None
    suffix = code[len(prefix):] if code.startswith(prefix) else code
    # isdigit() also accepts superscripts and other digits int() rejects
    if not (suffix.isascii() and suffix.isdigit()):
        return None
    return int(suffix)


def next_published_code(
    latest_code: Optional[str],
    prefix: str = DEFAULT_PREFIX,
    width: int = DEFAULT_WIDTH
) -> str:
    """
    Code that follows latest_code.

    No previous code starts the sequence at 1. A previous code whose suffix is
    not an integer also restarts at 1; that code may already be taken, which
    the unique index on published codes catches at insert time.
    """
    counter = 1
    if latest_code:
        number = parse_code_number(latest_code, prefix)
        if number is not None:
            counter = number + 1
        else:
            logger.warning(f"Unparsable published code {latest_code!r}, restarting at 1")
    return format_code(counter, prefix, width)


class CodeAllocator:
    """Hands out published codes for new books."""

    def __init__(
        self,
        book_repo: BookRepository,
        counter_repo: CounterRepository,
        prefix: str = DEFAULT_PREFIX,
        width: int = DEFAULT_WIDTH
    ):
        self.book_repo = book_repo
        self.counter_repo = counter_repo
        self.prefix = prefix
        self.width = width
        self._synced = False

    def number_of(self, code: str) -> Optional[int]:
        return parse_code_number(code, self.prefix)

    async def latest_code(self) -> Optional[str]:
        """Published code of the most recently numbered book."""
        return await self.book_repo.get_latest_code()

    async def peek_next_code(self) -> str:
        """Code the stored books imply should come next. Reserves nothing."""
        return next_published_code(await self.latest_code(), self.prefix, self.width)

    async def sync(self) -> int:
        """
        Lift the counter past every code already stored.

        Returns:
            The counter value after syncing.
        """
        implied = self.number_of(await self.peek_next_code()) - 1
        value = await self.counter_repo.raise_to(COUNTER_NAME, implied)
        self._synced = True
        return value

    async def allocate_next_code(self) -> str:
        """Reserve and return a fresh published code."""
        if not self._synced:
            await self.sync()
        number = await self.counter_repo.increment(COUNTER_NAME)
        code = format_code(number, self.prefix, self.width)
        logger.debug(f"Allocated published code {code}")
        return code
