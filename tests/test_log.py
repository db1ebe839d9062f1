"""
File: tests/test_log.py
Tests for the root logger setup.
"""
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from core.log import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put back whatever handlers pytest had installed."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    httpx_level = logging.getLogger("httpx").level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)


def test_single_rich_handler_after_repeated_setup():
    setup_logging("INFO")
    setup_logging("WARNING")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], RichHandler)
    assert root.level == logging.WARNING


def test_debug_level_lets_httpx_through():
    setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_non_debug_level_quiets_httpx():
    setup_logging(logging.INFO)
    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING


def test_records_reach_given_console():
    console = Console(record=True, width=120)
    setup_logging("INFO", console=console)

    logging.getLogger("core.services.controller").info("Loaded %d animals", 3)

    assert "Loaded 3 animals" in console.export_text()
