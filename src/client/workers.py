# client/workers.py
from __future__ import annotations

from PySide6.QtCore import QThread, Signal


class TrackResolveWorker(QThread):
    finished_signal = Signal(bool, object, str)  # ok, TrackInfo | None, message

    def __init__(self, talker, track_id: str, parent=None):
        super().__init__(parent)
        self.talker = talker
        self.track_id = str(track_id)

    def run(self):
        try:
            track = self.talker.get_track(self.track_id)
            self.finished_signal.emit(True, track, "")
        except Exception as e:
            self.finished_signal.emit(False, None, f"Can't load track: {e}")


class AccountCheckWorker(QThread):
    finished_signal = Signal(bool, str)  # ok, message

    def __init__(self, talker, parent=None):
        super().__init__(parent)
        self.talker = talker

    def run(self):
        try:
            self.talker.account_status()
            self.finished_signal.emit(True, "")
        except Exception as e:
            self.finished_signal.emit(False, str(e))
