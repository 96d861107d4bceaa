from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QTimer, QEasingCurve, QPoint, QPropertyAnimation
from PySide6.QtWidgets import QWidget, QFrame, QLabel, QHBoxLayout, QGraphicsOpacityEffect

from core.state import Notify


def _colors(kind: str) -> tuple[str, str]:
    """
    Returns (bg, border).
    """
    kind = (kind or "info").lower()
    if kind == "success":
        return "#052e1a", "#16a34a"
    if kind in ("warn", "warning"):
        return "#2a1a05", "#f59e0b"
    if kind == "error":
        return "#2a0a0a", "#ef4444"
    return "#0b1222", "#38bdf8"


class ToastWidget(QFrame):
    def __init__(self, note: Notify, parent: QWidget):
        super().__init__(parent)
        self.note = note

        bg, border = _colors(note.notify_type)
        self.setObjectName("Toast")
        self.setStyleSheet(f"""
        QFrame#Toast {{
            background: {bg};
            border: 1px solid {border};
            border-radius: 14px;
        }}
        QLabel {{
            color: #e5e7eb;
            font-size: 12px;
        }}
        """)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        root = QHBoxLayout(self)
        root.setContentsMargins(14, 10, 14, 10)

        self.lbl = QLabel(note.message)
        self.lbl.setWordWrap(True)
        root.addWidget(self.lbl, 1)

        self._opacity = QGraphicsOpacityEffect(self)
        self._opacity.setOpacity(0.0)
        self.setGraphicsEffect(self._opacity)
        self._anim: Optional[QPropertyAnimation] = None

        # Restarted when the same message is raised again while visible
        self.expiry = QTimer(self)
        self.expiry.setSingleShot(True)

    def fade(self, start: float, end: float, on_done=None):
        self._anim = QPropertyAnimation(self._opacity, b"opacity", self)
        self._anim.setDuration(180)
        self._anim.setStartValue(start)
        self._anim.setEndValue(end)
        self._anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        if on_done is not None:
            self._anim.finished.connect(on_done)
        self._anim.start()


class ToastManager(QWidget):
    """
    Overlay that stacks toasts bottom-center over the host window.
    Identical messages are merged so connection flapping does not pile up.
    """
    def __init__(self, host: QWidget, max_visible: int = 3):
        super().__init__(host)
        self.host = host
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)

        self._toasts: list[ToastWidget] = []
        self._margin = 16
        self._spacing = 8
        self._max_visible = max_visible

        self.raise_()
        self.show()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._layout_toasts()

    def messages(self) -> list[str]:
        return [t.note.message for t in self._toasts]

    def show_toast(self, message: str, notify_type: str = "info", timeout_ms: int = 3000):
        self.setGeometry(self.host.rect())
        self.raise_()

        for t in self._toasts:
            if t.note.message == message:
                t.expiry.start(max(500, int(timeout_ms)))
                return

        toast = ToastWidget(Notify(message=message, notify_type=notify_type), parent=self)
        toast.setFixedWidth(min(420, max(240, self.width() // 2)))
        toast.expiry.timeout.connect(lambda: self._dismiss_toast(toast))
        self._toasts.append(toast)

        while len(self._toasts) > self._max_visible:
            old = self._toasts.pop(0)
            old.hide()
            old.deleteLater()

        self._layout_toasts()
        toast.show()
        toast.fade(0.0, 1.0)
        toast.expiry.start(max(500, int(timeout_ms)))

    def _dismiss_toast(self, toast: ToastWidget):
        if toast not in self._toasts:
            return

        def remove():
            if toast in self._toasts:
                self._toasts.remove(toast)
            toast.hide()
            toast.deleteLater()
            self._layout_toasts()

        toast.fade(1.0, 0.0, remove)

    def _layout_toasts(self):
        self.setGeometry(self.host.rect())
        y = self.height() - self._margin

        for t in reversed(self._toasts):
            t.adjustSize()
            y -= t.sizeHint().height()
            t.move(QPoint((self.width() - t.width()) // 2, y))
            y -= self._spacing
