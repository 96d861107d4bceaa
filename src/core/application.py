"""
Application object wiring session state, notifications and actions to
the window and the client collaborators.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QCoreApplication, QObject

from client.workers import TrackResolveWorker
from core import config
from core.actions import ActionDispatchTable
from core.notifications import NowPlayingNotifier
from core.session import ApplicationState, SessionController, StateTransition
from core.state import AppContext

logger = logging.getLogger(__name__)


class Application(QObject):
    """
    Collaborators are duck-typed:

      talker      connection_established / connection_lost signals
      auth        success / local / error signals, log_in(), log_out()
      player      current_track_finish_loading signal, play_pause(), next(),
                  prev(force), can_go_next, can_go_prev, current_track,
                  roll_shuffle_mode(), roll_repeat_mode()
      notifier    send(id, title, body, buttons, icon), withdraw(id),
                  action_invoked signal
      clipboard   read_text(callback), write_text(text)
      mpris       quit_triggered / raise_triggered signals (optional)
      window      is_active(), set_online(), set_offline(), show_toast(msg),
                  add_view(descriptor), load_default_views(),
                  load_local_views(), focused_text_input(), present(),
                  closed signal
    """

    def __init__(
        self,
        context: AppContext,
        window_factory: Callable[["Application"], object],
        quit: Optional[Callable[[], None]] = None,
    ):
        super().__init__()
        self.ctx = context
        self._window_factory = window_factory
        self._quit = quit or QCoreApplication.quit
        self.main_window = None
        self._track_workers: set[TrackResolveWorker] = set()

        self.session = SessionController(context.settings, parent=self)
        self.session.load()
        self.session.attach_network(context.talker)
        self.session.state_changed.connect(self._on_state_changed)

        self.now_playing = NowPlayingNotifier(
            context.settings,
            context.notifier,
            presentation=lambda: self.main_window,
            parent=self,
        )
        if context.player is not None:
            context.player.current_track_finish_loading.connect(self.now_playing.show_now_playing)

        self.actions = ActionDispatchTable(
            player=context.player,
            auth=context.auth,
            clipboard=context.clipboard,
            presentation=lambda: self.main_window,
            activate=self.activate,
            quit=self._quit,
            show_message=self.show_message,
            show_track_by_id=self.show_track_by_id,
        )
        # Notification buttons carry command ids ("prev-force", "next")
        context.notifier.action_invoked.connect(self.actions.trigger)

        context.auth.success.connect(self._on_auth_success)
        context.auth.local.connect(self._on_auth_local)
        context.auth.error.connect(self._on_auth_error)

        if context.mpris is not None:
            context.mpris.quit_triggered.connect(self._on_quit_requested)
            context.mpris.raise_triggered.connect(self.activate)

    @property
    def state(self) -> ApplicationState:
        return self.session.state

    # ------------------ lifecycle ------------------
    def activate(self) -> None:
        if self.main_window is not None:
            self.main_window.present()
            return

        window = self._window_factory(self)
        self.main_window = window
        window.closed.connect(self._on_window_closed)

        if self.session.coerce_stale_offline():
            logger.info("Stored state was OFFLINE; assuming ONLINE until the talker says otherwise.")

        window.present()
        self._flush_queued_notifications()

        if self.session.state == ApplicationState.LOCAL:
            window.load_local_views()
        else:
            self.ctx.auth.log_in()

    def _on_quit_requested(self) -> None:
        logger.info("Quit requested over MPRIS.")
        self._quit()

    def _on_window_closed(self) -> None:
        self.main_window = None

    def _flush_queued_notifications(self) -> None:
        for n in self.ctx.queued_notifications:
            self.show_message(n.message)
        self.ctx.queued_notifications.clear()

    # ------------------ messages ------------------
    def show_message(self, message: str) -> None:
        window = self.main_window
        if window is not None and window.is_active():
            window.show_toast(message)
            return
        self.ctx.notifier.send(None, config.APP_NAME, message, [], f"{config.APP_ID}-symbolic")

    # ------------------ state ------------------
    def _on_state_changed(self, transition: StateTransition) -> None:
        window = self.main_window
        if transition.new == ApplicationState.ONLINE:
            self.show_message("Connection restored")
            if window is not None:
                window.set_online()
        elif transition.new == ApplicationState.OFFLINE:
            self.show_message("Connection problems")
            if window is not None:
                window.set_offline()

    def _on_auth_success(self) -> None:
        if self.main_window is not None:
            self.main_window.load_default_views()

    def _on_auth_local(self) -> None:
        self.session.set_state(ApplicationState.LOCAL)
        if self.main_window is not None:
            self.main_window.load_local_views()

    def _on_auth_error(self, msg: str) -> None:
        self.show_message("Authorization failed")

    # ------------------ tracks ------------------
    def show_track_by_id(self, track_id: str) -> None:
        worker = TrackResolveWorker(self.ctx.talker, track_id, parent=self)
        self._track_workers.add(worker)
        # Bound slot: the result is delivered on the GUI thread
        worker.finished_signal.connect(self._on_track_resolved)
        # run() may still be on its way out when finished_signal arrives;
        # only QThread.finished means the thread has stopped
        worker.finished.connect(self._release_track_worker)
        worker.start()

    def _release_track_worker(self) -> None:
        worker = self.sender()
        if worker in self._track_workers:
            self._track_workers.discard(worker)
            worker.deleteLater()

    def _on_track_resolved(self, ok: bool, track, msg: str) -> None:
        if not ok:
            logger.warning(msg)
            self.show_message("Can't load track")
            return
        if self.main_window is not None:
            self.main_window.add_view(track)
