"""
Tests for player/player.py. The QtMultimedia backend is replaced with mocks.
"""

from unittest.mock import patch

import pytest
from PySide6.QtMultimedia import QMediaPlayer

from core import config
from core.models import TrackInfo
from player.player import Player
from player.queue import PlayQueue, RepeatMode

TRACKS = [TrackInfo(id=str(i), title=f"Track {i}", stream_url=f"/music/{i}.mp3") for i in range(3)]


@pytest.fixture
def player(qapp):
    with patch("player.player.QMediaPlayer"), patch("player.player.QAudioOutput"):
        p = Player(PlayQueue())
    p.play_tracks(TRACKS, start_index=1)
    p.media.reset_mock()
    return p


def _at(player, ms):
    player.media.position.return_value = ms


# ===========================================================================
# prev()
# ===========================================================================


class TestPrev:
    def test_soft_prev_past_threshold_rewinds(self, player):
        _at(player, config.PREV_RESTART_THRESHOLD_MS + 2000)

        player.prev()

        player.media.setPosition.assert_called_once_with(0)
        player.media.setSource.assert_not_called()
        assert player.current_track == TRACKS[1]

    def test_soft_prev_near_start_steps_back(self, player):
        _at(player, 1000)

        player.prev()

        player.media.setPosition.assert_not_called()
        player.media.setSource.assert_called_once()
        assert player.current_track == TRACKS[0]

    def test_soft_prev_at_threshold_steps_back(self, player):
        _at(player, config.PREV_RESTART_THRESHOLD_MS)
        player.prev()
        assert player.current_track == TRACKS[0]

    def test_force_prev_ignores_position(self, player):
        _at(player, config.PREV_RESTART_THRESHOLD_MS + 2000)

        player.prev(force=True)

        player.media.setPosition.assert_not_called()
        assert player.current_track == TRACKS[0]

    def test_force_prev_on_first_track_does_nothing(self, player):
        _at(player, 0)
        player.prev(force=True)
        player.media.reset_mock()

        player.prev(force=True)

        assert player.current_track == TRACKS[0]
        player.media.setSource.assert_not_called()


# ===========================================================================
# Loading and end of media
# ===========================================================================


class TestMediaStatus:
    def test_track_announced_once(self, player):
        announced = []
        player.current_track_finish_loading.connect(announced.append)

        player._on_media_status(QMediaPlayer.MediaStatus.LoadedMedia)
        player._on_media_status(QMediaPlayer.MediaStatus.BufferedMedia)

        assert announced == [TRACKS[1]]

    def test_next_track_is_announced_again(self, player):
        announced = []
        player.current_track_finish_loading.connect(announced.append)

        player._on_media_status(QMediaPlayer.MediaStatus.LoadedMedia)
        player.next()
        player._on_media_status(QMediaPlayer.MediaStatus.LoadedMedia)

        assert announced == [TRACKS[1], TRACKS[2]]

    def test_end_of_media_advances(self, player):
        player._on_media_status(QMediaPlayer.MediaStatus.EndOfMedia)
        assert player.current_track == TRACKS[2]

    def test_repeat_one_replays(self, player):
        player.queue.repeat_mode = RepeatMode.ONE

        player._on_media_status(QMediaPlayer.MediaStatus.EndOfMedia)

        player.media.setPosition.assert_called_once_with(0)
        player.media.play.assert_called_once()
        assert player.current_track == TRACKS[1]

    def test_track_without_stream_url_stops(self, player):
        player.play_tracks([TrackInfo(id="x", title="Remote")])
        player.media.stop.assert_called_once()
        player.media.setSource.assert_not_called()


class TestModes:
    def test_roll_emits_modes(self, player):
        seen = []
        player.modesChanged.connect(lambda s, r: seen.append(r))

        player.roll_repeat_mode()

        assert seen == [RepeatMode.QUEUE]
