# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from todo_list.logging_setup import setup_logging


def test_setup_logging_writes_file_and_filters_console(tmp_path: Path, capsys) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(log_dir=tmp_path, console_level=logging.INFO)

        logging.getLogger("todo_list.cli.main").info("visible on console")
        logging.getLogger("todo_list.storage.writer").info("file only")
        logging.getLogger("somelib").warning("third-party noise")

        for h in root.handlers:
            h.flush()

        err = capsys.readouterr().err
        assert "visible on console" in err
        assert "file only" not in err
        assert "third-party noise" not in err

        text = (tmp_path / "todo.log").read_text("utf-8")
        assert "visible on console" in text
        assert "file only" in text
        assert "third-party noise" in text
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)


def test_app_warnings_from_quiet_loggers_reach_console(tmp_path: Path, capsys) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        assert log_file == tmp_path / "logs" / "todo.log"

        logging.getLogger("todo_list.storage.kv_store").warning("corrupt file")
        logging.getLogger("somelib").error("library failure")

        err = capsys.readouterr().err
        assert "corrupt file" in err
        assert "library failure" in err
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
