# core/config.py
from __future__ import annotations

import os

PROFILE = os.getenv("CASSETTE_PROFILE", "Default")
IS_DEVEL = PROFILE == "Devel"

APP_NAME = "Cassette"
APP_ORG = "Rirusha"
APP_ID = "io.github.Rirusha.Cassette" + (".Devel" if IS_DEVEL else "")

# Clipboard links must start with this to be routed
URL_PREFIX = "https://music.yandex.ru/"
API_BASE_URL = os.getenv("CASSETTE_API_URL", "https://api.music.yandex.net")
USER_AGENT = "cassette-pyside6/0.1"

NOW_PLAYING_ID = "now-playing"
NOW_PLAYING_TIMEOUT_MS = 10_000

# Past this position a soft prev() restarts the current track
PREV_RESTART_THRESHOLD_MS = 3_000

# settings keys
KEY_APPLICATION_STATE = "application-state"
KEY_SHOW_PLAYING_NOTIF = "show-playing-track-notif"
KEY_TOKEN = "token"
