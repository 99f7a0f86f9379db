from __future__ import annotations

import json
import logging

from studyshelf.core.logging_config import JSONFormatter, request_id_var, setup_logging


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("studyshelf.controllers.book_controller", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_request_id_and_extras():
    token = request_id_var.set("abc123def456")
    try:
        line = JSONFormatter().format(_record("uploaded", status_code=201, path="/api/upload", ignored="x"))
    finally:
        request_id_var.reset(token)

    entry = json.loads(line)
    assert entry["message"] == "uploaded"
    assert entry["request_id"] == "abc123def456"
    assert entry["status_code"] == 201
    assert entry["path"] == "/api/upload"
    assert "ignored" not in entry


def test_json_formatter_outside_request():
    entry = json.loads(JSONFormatter().format(_record("startup")))
    assert entry["request_id"] == "-"


def test_setup_logging_writes_error_file(tmp_path):
    setup_logging(log_level="INFO", log_dir=tmp_path, log_json=True)

    logging.getLogger("studyshelf.tests").error("disk full")
    for handler in logging.getLogger().handlers:
        handler.flush()

    errors = (tmp_path / "studyshelf.error.log").read_text(encoding="utf-8").splitlines()
    assert json.loads(errors[-1])["message"] == "disk full"
    assert (tmp_path / "studyshelf.log").exists()
