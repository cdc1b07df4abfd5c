# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from tasktrack.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_app_logs_and_drops_third_party_noise() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("tasktrack.storage.record_store", logging.DEBUG))
    assert f.filter(_record("tasktrack", logging.INFO))
    assert not f.filter(_record("tasktracker", logging.INFO))
    assert not f.filter(_record("asyncio", logging.WARNING))
    assert f.filter(_record("asyncio", logging.ERROR))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert f.filter(_record("py.warnings", logging.ERROR))


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        setup_logging(log_dir=tmp_path, console_level=logging.WARNING)
        logging.getLogger("tasktrack.test").debug("hello file")
        for h in root.handlers:
            h.flush()

        content = (tmp_path / "tasktrack.log").read_text("utf-8")
        assert "DEBUG tasktrack.test: hello file" in content
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
