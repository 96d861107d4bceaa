# core/actions.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from PySide6.QtGui import QKeySequence, QShortcut

from core.clipboard import ClipboardResult
from core.url_router import (
    AlbumRoot,
    AlbumTrack,
    UrlParseResult,
    UserPlaylist,
    UserPlaylistsRoot,
    parse,
    share_url,
)

logger = logging.getLogger(__name__)

CANT_PARSE_CLIPBOARD = "Can't parse clipboard content"


@dataclass(frozen=True)
class Action:
    name: str
    handler: Callable[[], None]
    accels: tuple[str, ...] = ()


class ActionDispatchTable:
    """
    Command id -> guarded handler. Guards that fail are not errors, the
    command just does nothing.
    """

    def __init__(
        self,
        *,
        player,
        auth,
        clipboard,
        presentation: Callable[[], Optional[object]],
        activate: Callable[[], None],
        quit: Callable[[], None],
        show_message: Callable[[str], None],
        show_track_by_id: Callable[[str], None],
    ):
        self.player = player
        self.auth = auth
        self.clipboard = clipboard
        self._presentation = presentation
        self._activate = activate
        self._quit = quit
        self._show_message = show_message
        self._show_track_by_id = show_track_by_id

        actions = [
            Action("quit", self._quit, ("Ctrl+Q",)),
            Action("log-out", self.on_log_out),
            Action("play-pause", self.on_play_pause, ("Space",)),
            Action("next", self.on_next, ("Ctrl+D",)),
            Action("prev", self.on_prev, ("Ctrl+A",)),
            Action("prev-force", self.on_prev_force),
            Action("change-shuffle", self.on_change_shuffle, ("Ctrl+S",)),
            Action("change-repeat", self.on_change_repeat, ("Ctrl+R",)),
            Action("share-current-track", self.on_share_current_track, ("Ctrl+Shift+C",)),
            Action("parse-url", self.on_parse_url, ("Ctrl+Shift+V",)),
        ]
        self._actions: dict[str, Action] = {a.name: a for a in actions}

    def commands(self) -> list[str]:
        return list(self._actions)

    def accels(self, name: str) -> tuple[str, ...]:
        return self._actions[name].accels

    def trigger(self, name: str) -> bool:
        action = self._actions.get(name)
        if action is None:
            logger.warning("Unknown command %r", name)
            return False
        action.handler()
        return True

    def bind_shortcuts(self, widget) -> list[QShortcut]:
        shortcuts = []
        for action in self._actions.values():
            for accel in action.accels:
                shortcuts.append(
                    QShortcut(QKeySequence(accel), widget, activated=lambda n=action.name: self.trigger(n))
                )
        return shortcuts

    # ------------------ handlers ------------------
    def on_log_out(self):
        self.auth.log_out()

    def on_play_pause(self):
        window = self._presentation()
        text_input = window.focused_text_input() if window is not None else None
        if text_input is not None:
            # Space is bound to play-pause; let it still type into text fields
            text_input.insert(" ")
        elif self.player is not None:
            self.player.play_pause()

    def on_next(self):
        if self.player and self.player.can_go_next:
            self.player.next()

    def on_prev(self):
        if self.player and self.player.can_go_prev:
            self.player.prev()

    def on_prev_force(self):
        if self.player and self.player.can_go_prev:
            self.player.prev(force=True)

    def on_change_shuffle(self):
        if self.player:
            self.player.roll_shuffle_mode()

    def on_change_repeat(self):
        if self.player:
            self.player.roll_repeat_mode()

    def on_share_current_track(self):
        track = self.player.current_track if self.player else None
        if track is None or track.is_ugc:
            return
        self.clipboard.write_text(share_url(track))
        self._show_message("Link copied to clipboard")

    def on_parse_url(self):
        self._activate()
        self.clipboard.read_text(self._on_clipboard_read)

    # ------------------ routing ------------------
    def _on_clipboard_read(self, result: ClipboardResult):
        if not result.ok:
            logger.info("Clipboard read failed: %s", result.error)
            self._show_message(CANT_PARSE_CLIPBOARD)
            return
        self.open_route(parse(result.text))

    def open_route(self, route: UrlParseResult):
        if isinstance(route, UserPlaylist):
            window = self._presentation()
            if window is not None:
                window.add_view(route)
        elif isinstance(route, UserPlaylistsRoot):
            self._show_message("Users view not implemented yet")
        elif isinstance(route, AlbumRoot):
            self._show_message("Albums view not implemented yet")
        elif isinstance(route, AlbumTrack):
            self._show_track_by_id(route.track_id)
        else:
            self._show_message(CANT_PARSE_CLIPBOARD)
