import logging
import pytest
from pathlib import Path

from coalesce.adapters.diagnostics import LOGGER_NAME, DiagnosticCollector


@pytest.fixture
def diagnostics():
    return DiagnosticCollector()


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """
    tmp_path/
      src/file1.cs
      src/file2.txt
      out/            (empty, output directory)
    """
    src = tmp_path / "src"
    src.mkdir()
    (src / "file1.cs").write_text("public class Test {}", encoding="utf-8")
    (src / "file2.txt").write_text("some text", encoding="utf-8")
    (tmp_path / "out").mkdir()
    return tmp_path


@pytest.fixture(autouse=True)
def reset_console_logging():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
