"""
Logging configuration for StudyShelf.

setup_logging() is called once by the app factory. Modules log through
logging.getLogger(__name__) and pick up the handlers installed here.
Every line carries the id of the request it was written under.
"""
import logging
import logging.handlers
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from contextvars import ContextVar

# ── Context variable for request correlation ──
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

# Attributes copied from LogRecord `extra` into JSON lines
EXTRA_FIELDS = (
    "method", "path", "status_code", "duration_ms",
    "client_ip", "request_size", "response_size",
)

QUIET_LOGGERS = (
    "uvicorn.access", "httpcore", "httpx",
    "pymongo", "motor", "asyncio", "watchfiles",
    "multipart", "python_multipart",
)

MAX_LOG_BYTES = 10 * 1024 * 1024  # 10 MB
PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def get_request_id() -> str:
    """Request id of the current context, "-" outside a request."""
    return request_id_var.get("-")


# ══════════════════════════════════════════════════════════════════
# JSON Formatter (for log files)
# ══════════════════════════════════════════════════════════════════

class JSONFormatter(logging.Formatter):
    """One JSON object per line, for the log files."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": get_request_id(),
        }
        # Add exception info if present
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        # Extra fields attached by the middleware
        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)
        return json.dumps(entry, ensure_ascii=False, default=str)


# ══════════════════════════════════════════════════════════════════
# Console Formatter (colored, human-readable)
# ══════════════════════════════════════════════════════════════════

class ColoredFormatter(logging.Formatter):
    """
    Console output: ``[HH:MM:SS] LEVEL    module — message  [req:id]``
    """

    COLORS = {
        "DEBUG":    "\033[36m",    # Cyan
        "INFO":     "\033[32m",    # Green
        "WARNING":  "\033[33m",    # Yellow
        "ERROR":    "\033[31m",    # Red
        "CRITICAL": "\033[1;31m",  # Bold Red
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        time_str = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        # studyshelf.controllers.book_controller → book_controller
        name = record.name.rsplit(".", 1)[-1] if record.name.count(".") > 1 else record.name

        req_id = get_request_id()
        req_tag = f" {self.DIM}[req:{req_id[:8]}]{self.RESET}" if req_id != "-" else ""

        line = (
            f"{self.DIM}[{time_str}]{self.RESET} "
            f"{color}{record.levelname:<8}{self.RESET} "
            f"{name} — {record.getMessage()}{req_tag}"
        )
        if record.exc_info and record.exc_info[0] is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


# ══════════════════════════════════════════════════════════════════
# Setup
# ══════════════════════════════════════════════════════════════════

def _file_handler(path: Path, level: int, log_json: bool, backups: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=str(path),
        maxBytes=MAX_LOG_BYTES,
        backupCount=backups,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if log_json else logging.Formatter(PLAIN_FORMAT))
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path = Path("./logs"),
    log_json: bool = True,
) -> None:
    """
    Configure the root logger with console and rotating file handlers.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_dir: Directory for ``studyshelf.log`` and ``studyshelf.error.log``.
        log_json: Write JSON lines to the log files instead of plain text.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Create log directory
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # ── Root logger ──
    root = logging.getLogger()
    root.setLevel(level)

    # Drop handlers from basicConfig or an earlier setup_logging call
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.close()

    # ── Console handler ──
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(ColoredFormatter())
    root.addHandler(console)

    # ── File handler (rotating) ──
    root.addHandler(_file_handler(log_dir / "studyshelf.log", level, log_json, backups=5))

    # ── Error-only file (for quick triage) ──
    root.addHandler(_file_handler(log_dir / "studyshelf.error.log", logging.ERROR, log_json, backups=3))

    # ── Quiet noisy third-party loggers ──
    for noisy in QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger("studyshelf").info(
        f"Logging configured: level={log_level}, dir={log_dir}, json={log_json}"
    )
