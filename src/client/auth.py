from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from core import config
from .workers import AccountCheckWorker

logger = logging.getLogger(__name__)


class Authenticator(QObject):
    success = Signal()
    local = Signal()
    error = Signal(str)

    def __init__(self, settings, talker, parent: QObject | None = None):
        super().__init__(parent)
        self.settings = settings
        self.talker = talker
        self._worker: AccountCheckWorker | None = None

    def log_in(self) -> None:
        token = self.settings.get_string(config.KEY_TOKEN)
        if not token:
            logger.info("No token configured; continuing in local mode.")
            self.local.emit()
            return

        if self._worker is not None and self._worker.isRunning():
            return

        self.talker.set_token(token)
        self._worker = AccountCheckWorker(self.talker, parent=self)
        self._worker.finished_signal.connect(self._on_checked)
        self._worker.finished.connect(self._release_worker)
        self._worker.start()

    def _release_worker(self) -> None:
        worker = self.sender()
        if worker is self._worker:
            self._worker = None
        if worker is not None:
            worker.deleteLater()

    def log_out(self) -> None:
        self.settings.set_string(config.KEY_TOKEN, "")
        self.talker.set_token("")
        logger.info("Logged out.")
        self.local.emit()

    def _on_checked(self, ok: bool, msg: str) -> None:
        if ok:
            self.success.emit()
            return

        if self.talker.online is False:
            # No network: the talker already reported it, cached views still work
            self.success.emit()
            return

        logger.warning("Authentication failed: %s", msg)
        self.error.emit(msg)
        self.local.emit()
