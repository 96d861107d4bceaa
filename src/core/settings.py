"""
QSettings-backed preferences for the application.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QSettings, Signal

from core import config

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, object] = {
    config.KEY_APPLICATION_STATE: 0,
    config.KEY_SHOW_PLAYING_NOTIF: True,
    config.KEY_TOKEN: "",
}


class SettingsStore(QObject):
    """Typed accessors over QSettings; every write emits value_changed(key)."""

    value_changed = Signal(str)

    def __init__(self, path: Optional[str] = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        if path:
            self._qs = QSettings(path, QSettings.Format.IniFormat)
        else:
            application = config.APP_NAME + ("-Devel" if config.IS_DEVEL else "")
            self._qs = QSettings(config.APP_ORG, application)

    def _default(self, key: str, fallback):
        return DEFAULTS.get(key, fallback)

    def get_enum(self, key: str) -> int:
        raw = self._qs.value(key, self._default(key, 0))
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning("Setting %s has non-integer value %r; using default.", key, raw)
            return int(self._default(key, 0))

    def set_enum(self, key: str, value: int) -> None:
        self._write(key, int(value))

    def get_boolean(self, key: str) -> bool:
        return bool(self._qs.value(key, self._default(key, False), type=bool))

    def set_boolean(self, key: str, value: bool) -> None:
        self._write(key, bool(value))

    def get_string(self, key: str) -> str:
        return str(self._qs.value(key, self._default(key, "")) or "")

    def set_string(self, key: str, value: str) -> None:
        self._write(key, value or "")

    def sync(self) -> None:
        self._qs.sync()

    def _write(self, key: str, value) -> None:
        self._qs.setValue(key, value)
        self.value_changed.emit(key)
