from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QGuiApplication


@dataclass(frozen=True)
class ClipboardResult:
    text: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


class ClipboardReader:
    """
    Reads the system clipboard on the next event loop turn and hands the
    outcome to a callback. Failures come back as ClipboardResult.error.
    """

    def read_text(self, on_done: Callable[[ClipboardResult], None]) -> None:
        QTimer.singleShot(0, lambda: on_done(self._read()))

    def write_text(self, text: str) -> None:
        QGuiApplication.clipboard().setText(text)

    def _read(self) -> ClipboardResult:
        try:
            clipboard = QGuiApplication.clipboard()
            if clipboard is None:
                raise RuntimeError("No clipboard available")
            mime = clipboard.mimeData()
            if mime is None or not mime.hasText():
                raise ValueError("Clipboard holds no text")
            return ClipboardResult(text=mime.text())
        except Exception as e:
            return ClipboardResult(error=e)
