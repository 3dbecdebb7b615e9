import logging
import pytest
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import MagicMock, patch

from shared.models.logger_model import Level, Logger
from modules.tag_logger.services.logger_manager import LoggerManager


SAMPLE_PROPERTIES = """\
# root logger configuration
root=ERROR:App
logger.com.example=DEBUG:App-ex
logger.com.example.server=INFO:App-server
"""


@pytest.fixture
def sample_properties() -> dict:
    return {
        "root": "ERROR:App",
        "logger.com.example": "DEBUG:App-ex",
        "logger.com.example.server": "INFO:App-server",
    }


@pytest.fixture
def manager(sample_properties: dict) -> LoggerManager:
    return LoggerManager(properties=sample_properties)


@pytest.fixture
def mock_emit() -> Generator[MagicMock, None, None]:
    with patch("shared.models.logger_model.emit") as emit:
        yield emit


@pytest.fixture
def unfiltered_logger() -> Logger:
    return Logger("Test", Level.INFO, filter_check_enabled=False)


@pytest.fixture
def tag_level() -> Generator[Callable[[str, int], None], None, None]:
    """Set stdlib levels on tag loggers, restored after the test."""
    saved = {}

    def set_level(tag: str, level: int) -> None:
        stdlib_logger = logging.getLogger(tag)
        saved.setdefault(tag, stdlib_logger.level)
        stdlib_logger.setLevel(level)

    yield set_level

    for tag, level in saved.items():
        logging.getLogger(tag).setLevel(level)


@pytest.fixture
def properties_file(tmp_path: Path) -> Callable[[str], Path]:
    def write(content: str, name: str = "tag-logger.properties") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return write


@pytest.fixture
def reset_singleton() -> Generator[None, None, None]:
    original = LoggerManager._instance
    LoggerManager._instance = None
    yield
    LoggerManager._instance = original
