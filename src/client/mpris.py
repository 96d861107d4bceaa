# client/mpris.py
from __future__ import annotations

import logging

from PySide6.QtCore import ClassInfo, Property, QObject, Signal, Slot
from PySide6.QtDBus import QDBusConnection

from core import config

logger = logging.getLogger(__name__)

MPRIS_PATH = "/org/mpris/MediaPlayer2"
MPRIS_SERVICE_PREFIX = "org.mpris.MediaPlayer2."


@ClassInfo({"D-Bus Interface": "org.mpris.MediaPlayer2"})
class MprisRoot(QObject):
    """
    org.mpris.MediaPlayer2 root interface. Desktop shells call Raise/Quit
    over the session bus; the application listens to the two signals.
    """

    quit_triggered = Signal()
    raise_triggered = Signal()

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self.service_name = MPRIS_SERVICE_PREFIX + config.APP_NAME.lower() + (".devel" if config.IS_DEVEL else "")
        self._registered = False

    @property
    def registered(self) -> bool:
        return self._registered

    def register(self, bus: QDBusConnection | None = None) -> bool:
        bus = bus if bus is not None else QDBusConnection.sessionBus()
        if not bus.isConnected():
            logger.warning("No D-Bus session bus; MPRIS is disabled.")
            return False

        options = QDBusConnection.RegisterOption.ExportAllSlots | QDBusConnection.RegisterOption.ExportAllProperties
        if not bus.registerObject(MPRIS_PATH, self, options):
            logger.warning("Could not register %s: %s", MPRIS_PATH, bus.lastError().message())
            return False
        if not bus.registerService(self.service_name):
            logger.warning("Could not own %s: %s", self.service_name, bus.lastError().message())
            bus.unregisterObject(MPRIS_PATH)
            return False

        self._registered = True
        logger.info("MPRIS registered as %s", self.service_name)
        return True

    # ------------------ methods ------------------
    @Slot()
    def Raise(self) -> None:  # noqa: N802
        self.raise_triggered.emit()

    @Slot()
    def Quit(self) -> None:  # noqa: N802
        self.quit_triggered.emit()

    # ------------------ properties ------------------
    def _identity(self) -> str:
        return config.APP_NAME

    def _desktop_entry(self) -> str:
        return config.APP_ID

    def _true(self) -> bool:
        return True

    def _false(self) -> bool:
        return False

    Identity = Property(str, _identity, constant=True)
    DesktopEntry = Property(str, _desktop_entry, constant=True)
    CanQuit = Property(bool, _true, constant=True)
    CanRaise = Property(bool, _true, constant=True)
    HasTrackList = Property(bool, _false, constant=True)
