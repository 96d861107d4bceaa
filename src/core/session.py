# core/session.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from PySide6.QtCore import QObject, Signal

from core import config

logger = logging.getLogger(__name__)


class ApplicationState(IntEnum):
    BEGIN = 0
    LOCAL = 1
    ONLINE = 2
    OFFLINE = 3


@dataclass(frozen=True)
class StateTransition:
    old: ApplicationState
    new: ApplicationState


class SessionController(QObject):
    """
    Owns the connectivity/session state.

    The first transition out of BEGIN is silent (no "Connection restored"
    right after login); later transitions emit state_changed. Storage is
    read once by load() and written after every real set_state().
    """

    state_changed = Signal(object)  # StateTransition

    def __init__(self, store, parent: QObject | None = None):
        super().__init__(parent)
        self._store = store
        self._state = ApplicationState.BEGIN

        # Writes to the stored key from elsewhere go through set_state too
        self._store.value_changed.connect(self._on_store_changed)

    @property
    def state(self) -> ApplicationState:
        return self._state

    def set_state(self, new_state: ApplicationState) -> None:
        new_state = ApplicationState(new_state)
        if new_state == self._state:
            return
        if new_state == ApplicationState.BEGIN:
            logger.warning("Refusing to move back to BEGIN from %s.", self._state.name)
            return

        old_state = self._state
        self._state = new_state
        logger.info("Application state %s -> %s", old_state.name, new_state.name)

        self._save()

        if old_state != ApplicationState.BEGIN:
            self.state_changed.emit(StateTransition(old=old_state, new=new_state))

    def load(self) -> ApplicationState:
        raw = self._store.get_enum(config.KEY_APPLICATION_STATE)
        try:
            self._state = ApplicationState(raw)
        except ValueError:
            logger.warning("Unknown stored application state %r; starting from BEGIN.", raw)
            self._state = ApplicationState.BEGIN
        return self._state

    def coerce_stale_offline(self) -> bool:
        # OFFLINE left over from a previous run is not a real outage yet
        if self._state == ApplicationState.OFFLINE:
            self._state = ApplicationState.ONLINE
            return True
        return False

    def attach_network(self, talker) -> None:
        # Bound slots so emissions from worker threads are queued to ours
        talker.connection_established.connect(self._on_connection_established)
        talker.connection_lost.connect(self._on_connection_lost)

    def _on_connection_established(self) -> None:
        self.set_state(ApplicationState.ONLINE)

    def _on_connection_lost(self) -> None:
        self.set_state(ApplicationState.OFFLINE)

    def _save(self) -> None:
        self._store.set_enum(config.KEY_APPLICATION_STATE, int(self._state))

    def _on_store_changed(self, key: str) -> None:
        if key != config.KEY_APPLICATION_STATE:
            return
        raw = self._store.get_enum(key)
        try:
            stored = ApplicationState(raw)
        except ValueError:
            logger.warning("Ignoring unknown application state %r written to settings.", raw)
            return
        if stored == ApplicationState.BEGIN and self._state != ApplicationState.BEGIN:
            self._save()
            return
        self.set_state(stored)
