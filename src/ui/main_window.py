from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QLineEdit, QHBoxLayout,
    QStackedWidget, QToolButton, QStyle, QApplication
)
from PySide6.QtCore import Signal
import logging

from core.config import APP_NAME
from ui.player_bar import PlayerBar
from ui.views import HomeView, LocalView, TrackView, view_for
from ui.widgets.toast import ToastManager

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    closed = Signal()

    def __init__(self, app):
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.resize(900, 600)
        self.app = app
        self.player = app.ctx.player

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self._root = QVBoxLayout(self.central_widget)

        self.toasts = ToastManager(self)

        # --- Top bar (back + search + connection badge) ---
        top_bar = QHBoxLayout()

        self.btn_back = QToolButton()
        self.btn_back.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_ArrowBack))
        self.btn_back.setToolTip("Back")
        self.btn_back.setEnabled(False)
        self.btn_back.clicked.connect(self.go_back)
        top_bar.addWidget(self.btn_back)

        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Search tracks / artists / albums...")
        top_bar.addWidget(self.search_box, stretch=1)

        self.lbl_offline = QLabel("Offline")
        self.lbl_offline.setObjectName("OfflineBadge")
        self.lbl_offline.setVisible(False)
        top_bar.addWidget(self.lbl_offline)

        self._root.addLayout(top_bar)

        # --- View stack ---
        self.views = QStackedWidget()
        self._root.addWidget(self.views, 1)

        # --- PlayerBar ---
        self.player_bar = PlayerBar(self.player, app.actions.trigger, self)
        self._root.addWidget(self.player_bar)

        self._shortcuts = app.actions.bind_shortcuts(self)

        self.setStyleSheet(self.styleSheet() + """
            QLabel#OfflineBadge {
                color: #f59e0b;
                border: 1px solid #f59e0b;
                border-radius: 8px;
                padding: 2px 8px;
            }
            QToolButton {
                border: 1px solid transparent;
                background: transparent;
                padding: 6px;
                border-radius: 10px;
            }
            QToolButton:hover {
                background: #0b1222;
                border-color: #1f2937;
            }
            """)

    # ------------------ presentation contract ------------------
    def is_active(self) -> bool:
        return self.isActiveWindow()

    def present(self):
        self.show()
        self.raise_()
        self.activateWindow()

    def set_online(self):
        self.lbl_offline.setVisible(False)

    def set_offline(self):
        self.lbl_offline.setVisible(True)

    def show_toast(self, message: str, notify_type: str = "info"):
        self.toasts.show_toast(message, notify_type=notify_type, timeout_ms=3000)

    def focused_text_input(self):
        w = QApplication.focusWidget()
        return w if isinstance(w, QLineEdit) else None

    # ------------------ views ------------------
    def _reset_views(self, root):
        while self.views.count():
            w = self.views.widget(0)
            self.views.removeWidget(w)
            w.deleteLater()
        self.views.addWidget(root)
        self._update_back()

    def load_default_views(self):
        self._reset_views(HomeView())

    def load_local_views(self):
        self._reset_views(LocalView())

    def add_view(self, descriptor):
        view = view_for(descriptor)
        if isinstance(view, TrackView) and self.player:
            view.playRequested.connect(lambda track: self.player.play_tracks([track]))
        self.views.addWidget(view)
        self.views.setCurrentWidget(view)
        self._update_back()
        logger.debug("Opened view %s", view.title)

    def go_back(self):
        if self.views.count() <= 1:
            return
        w = self.views.widget(self.views.count() - 1)
        self.views.removeWidget(w)
        w.deleteLater()
        self.views.setCurrentIndex(self.views.count() - 1)
        self._update_back()

    def _update_back(self):
        self.btn_back.setEnabled(self.views.count() > 1)

    def closeEvent(self, event):
        self.closed.emit()
        super().closeEvent(event)
