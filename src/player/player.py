# src/player/player.py
from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Optional, Sequence

from PySide6.QtCore import QObject, Signal, QUrl
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput

from core import config
from core.models import TrackInfo
from .queue import PlayQueue, RepeatMode, ShuffleMode

logger = logging.getLogger(__name__)


class PlayerStatus(Enum):
    STOPPED = auto()
    PLAYING = auto()
    PAUSED = auto()


class Player(QObject):
    statusChanged = Signal(object)      # PlayerStatus
    positionChanged = Signal(int)       # ms
    durationChanged = Signal(int)       # ms
    trackChanged = Signal(object)       # TrackInfo | None
    modesChanged = Signal(object, object)  # ShuffleMode, RepeatMode
    current_track_finish_loading = Signal(object)  # TrackInfo

    def __init__(self, queue: PlayQueue | None = None):
        super().__init__()

        self.status = PlayerStatus.STOPPED
        self.queue = queue or PlayQueue()
        self._announced_track_id: str | None = None

        self.audio = QAudioOutput()
        self.media = QMediaPlayer()
        self.media.setAudioOutput(self.audio)

        # Default volume (0.0 - 1.0)
        self._volume_0_to_1: float = 0.7
        self.audio.setVolume(self._volume_0_to_1)

        self.media.positionChanged.connect(self.positionChanged.emit)
        self.media.durationChanged.connect(self.durationChanged.emit)
        self.media.playbackStateChanged.connect(self._on_state_changed)
        self.media.mediaStatusChanged.connect(self._on_media_status)

    # ----------------------------
    # Qt backend handlers
    # ----------------------------

    def _on_state_changed(self, state: QMediaPlayer.PlaybackState) -> None:
        if state == QMediaPlayer.PlaybackState.PlayingState:
            self._set_status(PlayerStatus.PLAYING)
        elif state == QMediaPlayer.PlaybackState.PausedState:
            self._set_status(PlayerStatus.PAUSED)
        else:
            self._set_status(PlayerStatus.STOPPED)

    def _on_media_status(self, status: QMediaPlayer.MediaStatus) -> None:
        if status in (QMediaPlayer.MediaStatus.LoadedMedia, QMediaPlayer.MediaStatus.BufferedMedia):
            track = self.current_track
            # Buffered fires repeatedly while streaming; announce each track once
            if track is not None and track.id != self._announced_track_id:
                self._announced_track_id = track.id
                self.current_track_finish_loading.emit(track)
        elif status == QMediaPlayer.MediaStatus.EndOfMedia:
            self._on_ended()
        elif status == QMediaPlayer.MediaStatus.InvalidMedia:
            logger.warning("Cannot play %s: %s", self.current_track, self.media.errorString())

    def _on_ended(self) -> None:
        if self.queue.repeat_mode == RepeatMode.ONE:
            self.media.setPosition(0)
            self.media.play()
            return
        if self.queue.can_go_next:
            self._load(self.queue.next())
        else:
            self._set_status(PlayerStatus.STOPPED)

    def _set_status(self, new_status: PlayerStatus) -> None:
        if self.status != new_status:
            self.status = new_status
            self.statusChanged.emit(self.status)

    def _load(self, track: Optional[TrackInfo]) -> None:
        self._announced_track_id = None
        self.trackChanged.emit(track)
        if track is None:
            self.media.stop()
            return
        if not track.stream_url:
            logger.warning("Track %s has no stream url yet", track.id)
            self.media.stop()
            return

        if "://" in track.stream_url:
            url = QUrl(track.stream_url)
        else:
            url = QUrl.fromLocalFile(track.stream_url)
        self.media.setSource(url)
        self.media.play()

    # ----------------------------
    # Public API
    # ----------------------------

    @property
    def current_track(self) -> Optional[TrackInfo]:
        return self.queue.current

    @property
    def can_go_next(self) -> bool:
        return self.queue.can_go_next

    @property
    def can_go_prev(self) -> bool:
        return self.queue.can_go_prev

    def play_tracks(self, tracks: Sequence[TrackInfo], start_index: int = 0) -> None:
        self._load(self.queue.set_tracks(tracks, start_index))

    def play_pause(self) -> None:
        if self.media.playbackState() == QMediaPlayer.PlaybackState.PlayingState:
            self.media.pause()
        elif self.current_track is not None:
            self.media.play()

    def next(self) -> None:
        track = self.queue.next()
        if track is not None:
            self._load(track)

    def prev(self, force: bool = False) -> None:
        # Soft prev past the first seconds rewinds the current track
        if not force and self.position_ms() > config.PREV_RESTART_THRESHOLD_MS:
            self.media.setPosition(0)
            return
        track = self.queue.prev()
        if track is not None:
            self._load(track)

    def roll_shuffle_mode(self) -> ShuffleMode:
        mode = self.queue.roll_shuffle_mode()
        self.modesChanged.emit(self.queue.shuffle_mode, self.queue.repeat_mode)
        return mode

    def roll_repeat_mode(self) -> RepeatMode:
        mode = self.queue.roll_repeat_mode()
        self.modesChanged.emit(self.queue.shuffle_mode, self.queue.repeat_mode)
        return mode

    def stop(self) -> None:
        self.media.stop()

    def seek_ms(self, ms: int) -> None:
        self.media.setPosition(max(0, int(ms)))

    def set_volume(self, volume_0_to_1: float) -> None:
        v = min(1.0, max(0.0, float(volume_0_to_1)))
        self._volume_0_to_1 = v
        self.audio.setVolume(v)

    # convenient getters for UI
    def position_ms(self) -> int:
        return int(self.media.position())

    def duration_ms(self) -> int:
        return int(self.media.duration())
