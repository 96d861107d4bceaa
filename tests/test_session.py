"""
Tests for core/session.py.
"""

import pytest
from PySide6.QtCore import QObject, Signal

from core import config
from core.session import ApplicationState, SessionController, StateTransition


class FakeTalker(QObject):
    connection_established = Signal()
    connection_lost = Signal()


@pytest.fixture
def controller(store):
    return SessionController(store)


@pytest.fixture
def events(controller):
    received = []
    controller.state_changed.connect(received.append)
    return received


def _controller_in(store, state):
    store.set_enum(config.KEY_APPLICATION_STATE, int(state))
    c = SessionController(store)
    c.load()
    return c


# ===========================================================================
# set_state()
# ===========================================================================


class TestSetState:
    @pytest.mark.parametrize("state", list(ApplicationState))
    def test_same_state_is_noop(self, store, state):
        c = _controller_in(store, state)
        received = []
        c.state_changed.connect(received.append)

        c.set_state(state)

        assert received == []
        assert c.state == state

    @pytest.mark.parametrize("target", [ApplicationState.LOCAL, ApplicationState.ONLINE, ApplicationState.OFFLINE])
    def test_leaving_begin_is_silent(self, controller, events, target):
        controller.set_state(target)

        assert controller.state == target
        assert events == []

    def test_later_transitions_are_announced(self, controller, events):
        controller.set_state(ApplicationState.ONLINE)
        controller.set_state(ApplicationState.OFFLINE)
        controller.set_state(ApplicationState.ONLINE)

        assert events == [
            StateTransition(old=ApplicationState.ONLINE, new=ApplicationState.OFFLINE),
            StateTransition(old=ApplicationState.OFFLINE, new=ApplicationState.ONLINE),
        ]

    def test_listener_sees_new_state(self, controller):
        seen = []
        controller.state_changed.connect(lambda t: seen.append(controller.state))

        controller.set_state(ApplicationState.ONLINE)
        controller.set_state(ApplicationState.OFFLINE)

        assert seen == [ApplicationState.OFFLINE]

    def test_listeners_called_in_connection_order(self, controller):
        order = []
        controller.state_changed.connect(lambda t: order.append("first"))
        controller.state_changed.connect(lambda t: order.append("second"))

        controller.set_state(ApplicationState.ONLINE)
        controller.set_state(ApplicationState.OFFLINE)

        assert order == ["first", "second"]

    def test_begin_is_never_reentered(self, controller, events):
        controller.set_state(ApplicationState.ONLINE)
        controller.set_state(ApplicationState.BEGIN)

        assert controller.state == ApplicationState.ONLINE
        assert events == []

    def test_state_is_saved(self, store, controller):
        controller.set_state(ApplicationState.LOCAL)
        assert store.get_enum(config.KEY_APPLICATION_STATE) == int(ApplicationState.LOCAL)

        controller.set_state(ApplicationState.ONLINE)
        assert store.get_enum(config.KEY_APPLICATION_STATE) == int(ApplicationState.ONLINE)


# ===========================================================================
# Persistence
# ===========================================================================


class TestPersistence:
    def test_load_restores_without_event(self, store):
        store.set_enum(config.KEY_APPLICATION_STATE, int(ApplicationState.OFFLINE))
        c = SessionController(store)
        received = []
        c.state_changed.connect(received.append)

        assert c.load() == ApplicationState.OFFLINE
        assert received == []

    def test_restored_state_announces_next_change(self, store):
        c = _controller_in(store, ApplicationState.ONLINE)
        received = []
        c.state_changed.connect(received.append)

        c.set_state(ApplicationState.OFFLINE)

        assert received == [StateTransition(ApplicationState.ONLINE, ApplicationState.OFFLINE)]

    def test_unknown_stored_value_falls_back_to_begin(self, store):
        store.set_enum(config.KEY_APPLICATION_STATE, 42)
        c = SessionController(store)
        assert c.load() == ApplicationState.BEGIN

    def test_default_is_begin(self, store):
        assert SessionController(store).load() == ApplicationState.BEGIN

    def test_coerce_stale_offline(self, store):
        c = _controller_in(store, ApplicationState.OFFLINE)
        received = []
        c.state_changed.connect(received.append)

        assert c.coerce_stale_offline() is True
        assert c.state == ApplicationState.ONLINE
        assert received == []

    @pytest.mark.parametrize("state", [ApplicationState.BEGIN, ApplicationState.LOCAL, ApplicationState.ONLINE])
    def test_coerce_leaves_other_states(self, store, state):
        c = _controller_in(store, state)
        assert c.coerce_stale_offline() is False
        assert c.state == state

    def test_external_write_goes_through_setter(self, store):
        c = _controller_in(store, ApplicationState.ONLINE)
        received = []
        c.state_changed.connect(received.append)

        store.set_enum(config.KEY_APPLICATION_STATE, int(ApplicationState.OFFLINE))

        assert c.state == ApplicationState.OFFLINE
        assert received == [StateTransition(ApplicationState.ONLINE, ApplicationState.OFFLINE)]

    def test_external_write_from_begin_is_silent(self, store, controller, events):
        store.set_enum(config.KEY_APPLICATION_STATE, int(ApplicationState.ONLINE))

        assert controller.state == ApplicationState.ONLINE
        assert events == []

    def test_external_begin_write_is_reverted(self, store):
        c = _controller_in(store, ApplicationState.LOCAL)

        store.set_enum(config.KEY_APPLICATION_STATE, int(ApplicationState.BEGIN))

        assert c.state == ApplicationState.LOCAL
        assert store.get_enum(config.KEY_APPLICATION_STATE) == int(ApplicationState.LOCAL)

    def test_other_keys_are_ignored(self, store, controller, events):
        store.set_boolean(config.KEY_SHOW_PLAYING_NOTIF, False)
        assert controller.state == ApplicationState.BEGIN
        assert events == []


# ===========================================================================
# Network reactions
# ===========================================================================


class TestNetwork:
    def test_connection_signals_drive_state(self, controller, events):
        talker = FakeTalker()
        controller.attach_network(talker)

        talker.connection_established.emit()
        assert controller.state == ApplicationState.ONLINE
        assert events == []

        talker.connection_lost.emit()
        assert controller.state == ApplicationState.OFFLINE
        assert events == [StateTransition(ApplicationState.ONLINE, ApplicationState.OFFLINE)]

    def test_repeated_loss_is_announced_once(self, controller, events):
        talker = FakeTalker()
        controller.attach_network(talker)
        talker.connection_established.emit()

        talker.connection_lost.emit()
        talker.connection_lost.emit()

        assert len(events) == 1
