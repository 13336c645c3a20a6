"""Tests for objcgen.logging."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from objcgen.logging import configure_logging, get_logger


def test_get_logger_names_pipeline_components() -> None:
    assert get_logger("loader").name == "objcgen.loader"
    assert get_logger().name == "objcgen"


def test_console_hides_debug_unless_verbose() -> None:
    stream = io.StringIO()
    configure_logging(stream=stream)

    get_logger("emitter").debug("Skipped method NSAlert.layout")
    get_logger("loader").warning("Redeclaration of NSAlert.run ignored")

    assert stream.getvalue() == "[objcgen] WARNING Redeclaration of NSAlert.run ignored\n"

    configure_logging(verbose=True, stream=stream)
    get_logger("emitter").debug("Skipped method NSAlert.layout")
    assert stream.getvalue().endswith("[objcgen] DEBUG Skipped method NSAlert.layout\n")


def test_reconfiguring_replaces_handlers() -> None:
    configure_logging(stream=io.StringIO())
    logger = configure_logging(stream=io.StringIO())
    assert len(logger.handlers) == 1


def test_log_file_records_debug_lines(tmp_path: Path) -> None:
    stream = io.StringIO()
    log_file = tmp_path / "logs" / "objcgen.log"
    logger = configure_logging(log_file=log_file, stream=stream)

    get_logger("resolver").debug("Resolved title as string")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert stream.getvalue() == ""
    assert "DEBUG objcgen.resolver: Resolved title as string" in log_file.read_text(encoding="utf-8")
