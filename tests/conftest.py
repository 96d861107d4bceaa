import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Same layout main.py relies on: packages live under src/
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC_DIR = os.path.join(ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def store(qapp, tmp_path):
    from core.settings import SettingsStore

    return SettingsStore(path=str(tmp_path / "settings.ini"))


@pytest.fixture
def spin(qapp):
    """Returns a function that runs the Qt event loop for about `ms` milliseconds."""
    from PySide6.QtCore import QEventLoop, QTimer

    def _spin(ms: int) -> None:
        loop = QEventLoop()
        QTimer.singleShot(ms, loop.quit)
        loop.exec()

    return _spin
