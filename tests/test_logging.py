from __future__ import annotations

import json
import logging

from api.logging import StructuredFormatter, setup_logging


def test_setup_logging_adds_handler_and_is_idempotent() -> None:
    root = logging.getLogger()
    # Clear any existing handlers
    for h in list(root.handlers):
        root.removeHandler(h)

    setup_logging("DEBUG")
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)
    assert root.level == logging.DEBUG
    count = len(root.handlers)

    # Calling again should not add duplicate handlers
    setup_logging("warning")
    assert len(root.handlers) == count
    assert root.level == logging.WARNING


def test_structured_formatter_includes_context_fields() -> None:
    record = logging.LogRecord(
        name="api.jobs",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Backfilled quote %d",
        args=(3,),
        exc_info=None,
    )
    record.__dict__.update(job_id="j1", quote_id=3)
    data = json.loads(StructuredFormatter().format(record))
    assert data["message"] == "Backfilled quote 3"
    assert data["level"] == "INFO"
    assert data["logger"] == "api.jobs"
    assert data["job_id"] == "j1"
    assert data["quote_id"] == 3
    assert "script" not in data
    assert "exception" not in data


def test_structured_formatter_keeps_runes_readable() -> None:
    record = logging.LogRecord(
        name="core",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="rendered ᚠᚢᚦ",
        args=None,
        exc_info=None,
    )
    assert "ᚠᚢᚦ" in StructuredFormatter().format(record)
