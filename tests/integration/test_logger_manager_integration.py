import logging
import threading
import time
import pytest
from pathlib import Path
from unittest.mock import MagicMock

from shared.models.logger_model import Level, Logger
from shared.services.logger import VERBOSE
from modules.tag_logger import ROOT, get_logger
from modules.tag_logger.services.logger_manager import DEFAULT_LOGGER, LoggerManager
from tests.conftest import SAMPLE_PROPERTIES


pytestmark = pytest.mark.integration


class TestFileConfiguration:
    def test_loads_from_config_dir(self, config_dir: Path, properties_file):
        properties_file(SAMPLE_PROPERTIES)

        manager = LoggerManager()

        assert manager.get_logger("com.example.Foo") == Logger("App-ex", Level.DEBUG)
        assert manager.get_logger("com.example.server.Handler") == Logger("App-server", Level.INFO)
        assert manager.get_logger("com.other.Bar") == Logger("App", Level.ERROR)

    def test_missing_file_falls_back(self, config_dir: Path, monkeypatch: pytest.MonkeyPatch, mock_emit: MagicMock):
        monkeypatch.setattr("sys.path", [])

        manager = LoggerManager()

        assert dict(manager.loggers) == {None: DEFAULT_LOGGER}

    def test_empty_file_falls_back(self, config_dir: Path, properties_file, mock_emit: MagicMock):
        properties_file("# nothing configured\n")

        manager = LoggerManager()

        assert manager.get_logger("com.example.Foo") == Logger("XXX", Level.VERBOSE)

    def test_undecodable_file_falls_back(self, config_dir: Path, mock_emit: MagicMock):
        (config_dir / "tag-logger.properties").write_bytes(b"root=INFO:\xff\xfe")

        manager = LoggerManager()

        assert dict(manager.loggers) == {None: DEFAULT_LOGGER}

    def test_filter_flag_from_file(self, config_dir: Path, properties_file):
        properties_file("check-logcat-filter=false\nroot=INFO:App\n")

        manager = LoggerManager()

        assert manager.get_logger(None) == Logger("App", Level.INFO, False)


class TestSingleton:
    def test_root_constant(self):
        assert ROOT is not None
        assert get_logger(None) == ROOT

    def test_single_load_under_concurrent_access(
        self, reset_singleton, config_dir: Path, properties_file, monkeypatch: pytest.MonkeyPatch
    ):
        properties_file(SAMPLE_PROPERTIES)
        original = LoggerManager._load_configuration
        loads = []

        def slow_load(self, properties, loader):
            loads.append(threading.get_ident())
            time.sleep(0.05)
            return original(self, properties, loader)

        monkeypatch.setattr(LoggerManager, "_load_configuration", slow_load)

        barrier = threading.Barrier(8)
        results = []

        def worker():
            barrier.wait()
            results.append(get_logger("com.example.Foo"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(loads) == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)
        assert results[0].tag == "App-ex"

    def test_caller_inference(self, reset_singleton):
        LoggerManager._instance = LoggerManager(properties={
            f"logger.{__name__}": "DEBUG:Caller",
            "root": "ERROR:App",
        })

        assert get_logger() == Logger("Caller", Level.DEBUG)
        assert get_logger(None) == Logger("App", Level.ERROR)


class TestEndToEnd:
    def test_lines_reach_stdlib_logging(
        self, config_dir: Path, properties_file, caplog: pytest.LogCaptureFixture
    ):
        properties_file("check-logcat-filter=false\nlogger.com.example=INFO:E2E-App\n")
        logger = LoggerManager().get_logger("com.example.Service")

        with caplog.at_level(VERBOSE):
            logger.d("dropped")
            logger.i("started on port %d", 8080)
            logger.e("crashed", RuntimeError("boom"))

        records = [(r.name, r.levelno, r.getMessage()) for r in caplog.records if r.name == "E2E-App"]
        assert records == [
            ("E2E-App", logging.INFO, "started on port 8080"),
            ("E2E-App", logging.ERROR, "crashed"),
        ]

    def test_platform_filter_silences_tag(
        self, config_dir: Path, properties_file, tag_level, caplog: pytest.LogCaptureFixture
    ):
        properties_file("logger.com.example=DEBUG:E2E-Filtered\n")
        tag_level("E2E-Filtered", logging.WARNING)
        logger = LoggerManager().get_logger("com.example.Service")

        with caplog.at_level(VERBOSE):
            logger.i("silenced")
            logger.w("kept")

        assert [r.getMessage() for r in caplog.records if r.name == "E2E-Filtered"] == ["kept"]
