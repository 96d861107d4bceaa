# core/notifications.py
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

from core import config
from core.models import TrackInfo

logger = logging.getLogger(__name__)


class NowPlayingNotifier(QObject):
    """
    Keeps at most one "now playing" notification on screen.

    Every notification is sent under the same id so the notifier replaces
    instead of stacking, and the previous expiry timer is stopped before a
    new one starts.
    """

    def __init__(
        self,
        settings,
        notifier,
        presentation: Callable[[], Optional[object]],
        timeout_ms: int = config.NOW_PLAYING_TIMEOUT_MS,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._settings = settings
        self._notifier = notifier
        self._presentation = presentation
        self._timeout_ms = int(timeout_ms)
        self._expiry: QTimer | None = None

    @property
    def pending(self) -> bool:
        return self._expiry is not None

    def show_now_playing(self, track: TrackInfo) -> None:
        if not self._settings.get_boolean(config.KEY_SHOW_PLAYING_NOTIF):
            return

        window = self._presentation()
        if window is not None and window.is_active():
            logger.debug("Window is focused; skipping now-playing notification.")
            return

        self.cancel()

        self._notifier.send(
            config.NOW_PLAYING_ID,
            "Now playing",
            track.display_body,
            [("Previous", "prev-force"), ("Next", "next")],
            f"{config.APP_ID}-symbolic",
        )

        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(self._timeout_ms)
        timer.timeout.connect(self._expire)
        self._expiry = timer
        timer.start()

    def cancel(self) -> None:
        timer = self._expiry
        if timer is None:
            return
        self._expiry = None
        timer.stop()
        timer.deleteLater()

    def _expire(self) -> None:
        timer = self._expiry
        self._expiry = None
        self._notifier.withdraw(config.NOW_PLAYING_ID)
        if timer is not None:
            timer.deleteLater()
