import logging
import os
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from client.auth import Authenticator
from client.mpris import MprisRoot
from client.talker import YaMTalker
from core import config
from core.application import Application
from core.clipboard import ClipboardReader
from core.settings import SettingsStore
from core.state import AppContext, Notify
from player.player import Player
from ui.main_window import MainWindow
from ui.notification_popup import PopupNotifier

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    level = logging.DEBUG if os.getenv("CASSETTE_DEBUG") == "1" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def init_context() -> AppContext:
    ctx = AppContext()

    ctx.settings = SettingsStore()
    ctx.talker = YaMTalker(token=ctx.settings.get_string(config.KEY_TOKEN))
    ctx.auth = Authenticator(ctx.settings, ctx.talker)
    ctx.notifier = PopupNotifier()
    ctx.clipboard = ClipboardReader()
    ctx.mpris = MprisRoot()

    try:
        ctx.player = Player()
    except Exception as e:
        logger.exception("Failed to initialize audio player")
        ctx.player = None
        ctx.queued_notifications.append(
            Notify(message=f"Failed to initialize audio player: {e}", notify_type="error")
        )

    return ctx


def main() -> int:
    setup_logging()

    qt_app = QApplication(sys.argv)
    qt_app.setApplicationName(config.APP_NAME)
    qt_app.setDesktopFileName(config.APP_ID)

    app = Application(init_context(), window_factory=MainWindow, quit=qt_app.quit)
    app.ctx.mpris.register()
    app.activate()

    code = qt_app.exec()
    app.ctx.settings.sync()
    return code


if __name__ == "__main__":
    raise SystemExit(main())
