import pytest
from pathlib import Path
from typing import Generator

from config.settings import settings


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    monkeypatch.setattr(settings, "LOGGER_CONFIG_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "LOGGER_PROPERTIES_NAME", "tag-logger.properties")
    yield tmp_path
