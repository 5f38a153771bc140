#!/usr/bin/env python3
"""
Unit тесты для main.py (настройка логирования)
"""

import logging
import sys

import pytest

from sandbox_fs_mcp.main import configure_logging


@pytest.fixture
def root_logger():
    """Восстанавливает обработчики и уровень корневого логгера после теста"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """Тесты для configure_logging"""

    def test_level_name_is_case_insensitive(self, root_logger):
        assert configure_logging(" debug ") == logging.DEBUG
        assert root_logger.level == logging.DEBUG

    def test_records_go_to_stderr(self, root_logger):
        configure_logging("WARNING")

        assert len(root_logger.handlers) == 1
        assert root_logger.handlers[0].stream is sys.stderr

    def test_unknown_level_falls_back_to_info(self, root_logger):
        assert configure_logging("chatty") == logging.INFO
        assert root_logger.level == logging.INFO
