"""
Desktop notifications shown as frameless popups in the bottom-right corner.
"""

from __future__ import annotations

from typing import Optional, Sequence

from PySide6.QtCore import QObject, QPoint, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QIcon
from PySide6.QtWidgets import (
    QApplication,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QStyle,
    QVBoxLayout,
    QWidget,
)


# Messages sent without an id close themselves after this
ANONYMOUS_TIMEOUT_MS = 5000
_SPACING = 12


class NotificationPopup(QWidget):
    actionClicked = Signal(str)
    closed = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        flags = Qt.WindowType.Tool | Qt.WindowType.FramelessWindowHint | Qt.WindowType.WindowStaysOnTopHint
        super().__init__(parent)
        self.setWindowFlags(flags)
        self.setObjectName("NotificationPopup")
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating, True)

        self._container = QWidget(self)
        self._container.setObjectName("PopupCard")
        shadow = QGraphicsDropShadowEffect(self._container)
        shadow.setBlurRadius(24)
        shadow.setColor(QColor(0, 0, 0, 140))
        shadow.setOffset(0, 10)
        self._container.setGraphicsEffect(shadow)

        self._icon_label = QLabel()
        self._icon_label.setFixedSize(40, 40)
        self._icon_label.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)

        self._title_label = QLabel()
        self._title_label.setObjectName("NotificationTitle")
        self._title_label.setStyleSheet("font-weight: bold; font-size: 14px;")

        self._message_label = QLabel()
        self._message_label.setWordWrap(True)
        self._message_label.setObjectName("NotificationMessage")
        self._message_label.setMaximumWidth(360)

        self._actions_row = QWidget()
        self._actions_layout = QHBoxLayout(self._actions_row)
        self._actions_layout.setContentsMargins(0, 6, 0, 0)
        self._actions_layout.setSpacing(8)

        text_layout = QVBoxLayout()
        text_layout.setSpacing(4)
        text_layout.addWidget(self._title_label)
        text_layout.addWidget(self._message_label)
        text_layout.addWidget(self._actions_row)

        base_layout = QHBoxLayout(self)
        base_layout.setContentsMargins(0, 0, 0, 0)
        base_layout.addWidget(self._container)

        layout = QHBoxLayout(self._container)
        layout.addWidget(self._icon_label, 0, Qt.AlignmentFlag.AlignTop)
        layout.addLayout(text_layout)
        layout.setContentsMargins(12, 10, 12, 12)
        layout.setSpacing(10)
        self.setMinimumWidth(300)
        self.setMaximumWidth(440)

        self.setStyleSheet(
            """
            QWidget#PopupCard {
                background-color: rgba(24, 24, 28, 0.88);
                border-radius: 12px;
                border: 1px solid rgba(255, 255, 255, 0.10);
            }
            QWidget#PopupCard QLabel#NotificationTitle {
                color: white;
            }
            QWidget#PopupCard QLabel#NotificationMessage {
                color: rgba(255, 255, 255, 0.85);
            }
            QWidget#PopupCard QPushButton {
                color: white;
                background-color: rgba(255, 255, 255, 0.12);
                border: none;
                border-radius: 8px;
                padding: 4px 12px;
            }
            QWidget#PopupCard QPushButton:hover {
                background-color: rgba(255, 255, 255, 0.22);
            }
            """
        )

    def set_content(self, title: str, body: str, buttons: Sequence[tuple[str, str]], icon: str) -> None:
        self._title_label.setText(title)
        self._message_label.setText(body)
        self._apply_icon(icon)

        while self._actions_layout.count():
            item = self._actions_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()

        self._actions_row.setVisible(bool(buttons))
        self._actions_layout.addStretch()
        for label, command in buttons:
            btn = QPushButton(label)
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.clicked.connect(lambda _=False, c=command: self.actionClicked.emit(c))
            self._actions_layout.addWidget(btn)

        self.adjustSize()

    def _apply_icon(self, icon: str) -> None:
        fallback = self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay)
        qicon = QIcon.fromTheme(icon, fallback) if icon else fallback
        self._icon_label.setPixmap(qicon.pixmap(40, 40))

    def closeEvent(self, event) -> None:  # noqa: N802
        self.closed.emit()
        super().closeEvent(event)


class PopupNotifier(QObject):
    """
    send()/withdraw() keyed by id. Sending with an id that is already on
    screen replaces its content; id None always makes a new popup.
    """

    action_invoked = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._popups: dict[object, NotificationPopup] = {}
        self._anon_counter = 0

    def send(
        self,
        notification_id: Optional[str],
        title: str,
        body: str,
        buttons: Sequence[tuple[str, str]] = (),
        icon: str = "",
    ) -> None:
        key: object = notification_id
        if key is None:
            self._anon_counter += 1
            key = ("anon", self._anon_counter)

        popup = self._popups.get(key)
        if popup is None:
            popup = NotificationPopup()
            popup.actionClicked.connect(self._on_action)
            popup.closed.connect(lambda k=key: self._forget(k))
            self._popups[key] = popup

        popup.set_content(title, body, list(buttons), icon)
        popup.show()
        self._layout_popups()

        if notification_id is None:
            QTimer.singleShot(ANONYMOUS_TIMEOUT_MS, lambda k=key: self.withdraw(k))

    def withdraw(self, notification_id) -> None:
        popup = self._popups.pop(notification_id, None)
        if popup is None:
            return
        popup.close()
        popup.deleteLater()
        self._layout_popups()

    def _on_action(self, command: str) -> None:
        popup = self.sender()
        for key, p in list(self._popups.items()):
            if p is popup:
                self.withdraw(key)
                break
        self.action_invoked.emit(command)

    def _forget(self, key) -> None:
        if self._popups.pop(key, None) is not None:
            self._layout_popups()

    def _layout_popups(self) -> None:
        screen = QApplication.primaryScreen()
        if screen is None:
            return
        geometry = screen.availableGeometry()
        y = geometry.bottom() - _SPACING
        for popup in reversed(list(self._popups.values())):
            popup.adjustSize()
            y -= popup.height()
            popup.move(QPoint(geometry.right() - popup.width() - 20, y))
            y -= _SPACING
