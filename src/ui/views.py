# ui/views.py
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QPushButton, QHBoxLayout

from core.models import TrackInfo
from core.url_router import UserPlaylist, share_url


class BaseView(QWidget):
    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.title = title

        self._root = QVBoxLayout(self)
        self._root.setContentsMargins(24, 18, 24, 18)
        self._root.setSpacing(10)

        self.lbl_title = QLabel(title)
        self.lbl_title.setObjectName("ViewTitle")
        self.lbl_title.setStyleSheet("font-size: 20px; font-weight: 600;")
        self._root.addWidget(self.lbl_title)


class HomeView(BaseView):
    def __init__(self, parent=None):
        super().__init__("Home", parent)
        hint = QLabel("Copy a music.yandex.ru link and press Ctrl+Shift+V to open it.")
        hint.setWordWrap(True)
        self._root.addWidget(hint)
        self._root.addStretch(1)


class LocalView(BaseView):
    def __init__(self, parent=None):
        super().__init__("Local library", parent)
        self._root.addWidget(QLabel("Only saved tracks are available in local mode."))
        self._root.addStretch(1)


class PlaylistView(BaseView):
    def __init__(self, user_id: str, kind: str, parent=None):
        super().__init__(f"Playlist {kind}", parent)
        self.user_id = user_id
        self.kind = kind

        owner = QLabel(f"by user {user_id}")
        owner.setStyleSheet("color: #9ca3af;")
        self._root.addWidget(owner)
        self._root.addStretch(1)


class TrackView(BaseView):
    playRequested = Signal(object)  # TrackInfo

    def __init__(self, track: TrackInfo, parent=None):
        super().__init__(track.title + (f" {track.version}" if track.version else ""), parent)
        self.track = track

        artists = QLabel(track.artists_names or "Unknown artist")
        artists.setStyleSheet("color: #9ca3af;")
        self._root.addWidget(artists)

        link = QLabel(share_url(track))
        link.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self._root.addWidget(link)

        row = QHBoxLayout()
        self.btn_play = QPushButton("Play")
        self.btn_play.clicked.connect(lambda: self.playRequested.emit(self.track))
        row.addWidget(self.btn_play)
        row.addStretch(1)
        self._root.addLayout(row)
        self._root.addStretch(1)


def view_for(descriptor) -> BaseView:
    if isinstance(descriptor, UserPlaylist):
        return PlaylistView(descriptor.user_id, descriptor.kind)
    if isinstance(descriptor, TrackInfo):
        return TrackView(descriptor)
    if isinstance(descriptor, BaseView):
        return descriptor
    raise TypeError(f"No view for {descriptor!r}")
