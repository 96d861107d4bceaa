"""
Tests for core/actions.py.
"""

from unittest.mock import Mock

import pytest

from core.actions import ActionDispatchTable
from core.clipboard import ClipboardResult
from core.models import TrackInfo
from core.url_router import AlbumRoot, UserPlaylist

COMMANDS = [
    "quit",
    "log-out",
    "play-pause",
    "next",
    "prev",
    "prev-force",
    "change-shuffle",
    "change-repeat",
    "share-current-track",
    "parse-url",
]


class FakeClipboard:
    def __init__(self, text=None, error=None):
        self.result = ClipboardResult(text=text, error=error)
        self.written = []

    def read_text(self, on_done):
        on_done(self.result)

    def write_text(self, text):
        self.written.append(text)


@pytest.fixture
def player():
    p = Mock()
    p.can_go_next = True
    p.can_go_prev = True
    p.current_track = None
    return p


@pytest.fixture
def window():
    w = Mock()
    w.focused_text_input.return_value = None
    return w


@pytest.fixture
def deps(player, window):
    return {
        "player": player,
        "auth": Mock(),
        "clipboard": FakeClipboard(),
        "window": window,
        "activate": Mock(),
        "quit": Mock(),
        "show_message": Mock(),
        "show_track_by_id": Mock(),
    }


def _table(deps):
    return ActionDispatchTable(
        player=deps["player"],
        auth=deps["auth"],
        clipboard=deps["clipboard"],
        presentation=lambda: deps["window"],
        activate=deps["activate"],
        quit=deps["quit"],
        show_message=deps["show_message"],
        show_track_by_id=deps["show_track_by_id"],
    )


# ===========================================================================
# Table
# ===========================================================================


class TestTable:
    def test_commands(self, deps):
        assert _table(deps).commands() == COMMANDS

    def test_unknown_command(self, deps):
        assert _table(deps).trigger("does-not-exist") is False

    def test_quit(self, deps):
        assert _table(deps).trigger("quit") is True
        deps["quit"].assert_called_once()

    def test_log_out(self, deps):
        _table(deps).trigger("log-out")
        deps["auth"].log_out.assert_called_once()

    def test_default_accels(self, deps):
        table = _table(deps)
        assert table.accels("play-pause") == ("Space",)
        assert table.accels("parse-url") == ("Ctrl+Shift+V",)
        assert table.accels("prev-force") == ()

    def test_bind_shortcuts(self, deps, qapp):
        from PySide6.QtWidgets import QWidget

        host = QWidget()
        shortcuts = _table(deps).bind_shortcuts(host)
        assert len(shortcuts) == 8


# ===========================================================================
# Playback commands
# ===========================================================================


class TestPlayback:
    def test_play_pause_toggles(self, deps, player):
        _table(deps).trigger("play-pause")
        player.play_pause.assert_called_once()

    def test_play_pause_types_space_into_text_input(self, deps, player, window):
        entry = Mock()
        window.focused_text_input.return_value = entry

        _table(deps).trigger("play-pause")

        entry.insert.assert_called_once_with(" ")
        player.play_pause.assert_not_called()

    def test_play_pause_without_window(self, deps, player):
        deps["window"] = None
        _table(deps).trigger("play-pause")
        player.play_pause.assert_called_once()

    def test_next_guarded(self, deps, player):
        player.can_go_next = False
        _table(deps).trigger("next")
        player.next.assert_not_called()

    def test_next(self, deps, player):
        _table(deps).trigger("next")
        player.next.assert_called_once_with()

    def test_prev_guarded(self, deps, player):
        player.can_go_prev = False
        table = _table(deps)
        table.trigger("prev")
        table.trigger("prev-force")
        player.prev.assert_not_called()

    def test_prev_is_soft(self, deps, player):
        _table(deps).trigger("prev")
        player.prev.assert_called_once_with()

    def test_prev_force(self, deps, player):
        _table(deps).trigger("prev-force")
        player.prev.assert_called_once_with(force=True)

    def test_mode_cycles(self, deps, player):
        table = _table(deps)
        table.trigger("change-shuffle")
        table.trigger("change-repeat")
        player.roll_shuffle_mode.assert_called_once()
        player.roll_repeat_mode.assert_called_once()

    def test_no_player_is_ignored(self, deps):
        deps["player"] = None
        table = _table(deps)
        for name in ("play-pause", "next", "prev", "prev-force", "change-shuffle", "change-repeat", "share-current-track"):
            assert table.trigger(name) is True


# ===========================================================================
# Sharing
# ===========================================================================


class TestShare:
    def test_share_copies_link(self, deps, player):
        player.current_track = TrackInfo(id="54654", title="Song", album_id="4545465")

        _table(deps).trigger("share-current-track")

        assert deps["clipboard"].written == ["https://music.yandex.ru/album/4545465/track/54654"]
        deps["show_message"].assert_called_once_with("Link copied to clipboard")

    def test_share_skips_ugc(self, deps, player):
        player.current_track = TrackInfo(id="1", title="Upload", is_ugc=True)
        _table(deps).trigger("share-current-track")
        assert deps["clipboard"].written == []

    def test_share_without_track(self, deps):
        _table(deps).trigger("share-current-track")
        assert deps["clipboard"].written == []
        deps["show_message"].assert_not_called()


# ===========================================================================
# parse-url
# ===========================================================================


class TestParseUrl:
    def _run(self, deps, text=None, error=None):
        deps["clipboard"] = FakeClipboard(text=text, error=error)
        _table(deps).trigger("parse-url")

    def test_activates_window_first(self, deps):
        self._run(deps, text="https://music.yandex.ru/album/1")
        deps["activate"].assert_called_once()

    def test_playlist_opens_view(self, deps, window):
        self._run(deps, text="https://music.yandex.ru/users/737063213/playlists/3")
        window.add_view.assert_called_once_with(UserPlaylist(user_id="737063213", kind="3"))
        deps["show_message"].assert_not_called()

    def test_playlists_root_not_implemented(self, deps, window):
        self._run(deps, text="https://music.yandex.ru/users/737063213/playlists")
        deps["show_message"].assert_called_once_with("Users view not implemented yet")
        window.add_view.assert_not_called()

    def test_album_root_not_implemented(self, deps):
        self._run(deps, text="https://music.yandex.ru/album/4545465")
        deps["show_message"].assert_called_once_with("Albums view not implemented yet")

    def test_album_track_resolves_track(self, deps):
        self._run(deps, text="https://music.yandex.ru/album/4545465/track/54654?foo=bar")
        deps["show_track_by_id"].assert_called_once_with("54654")
        deps["show_message"].assert_not_called()

    def test_malformed_text(self, deps):
        self._run(deps, text="https://example.com/anything")
        deps["show_message"].assert_called_once_with("Can't parse clipboard content")

    def test_clipboard_failure(self, deps):
        self._run(deps, error=RuntimeError("no clipboard"))
        deps["show_message"].assert_called_once_with("Can't parse clipboard content")

    def test_empty_clipboard(self, deps):
        self._run(deps)
        deps["show_message"].assert_called_once_with("Can't parse clipboard content")

    def test_open_route_directly(self, deps):
        _table(deps).open_route(AlbumRoot(album_id="1"))
        deps["show_message"].assert_called_once_with("Albums view not implemented yet")
