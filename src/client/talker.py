from __future__ import annotations

import logging
from typing import Optional

import requests
from PySide6.QtCore import QObject, Signal

from core import config
from core.models import TrackInfo

logger = logging.getLogger(__name__)


class TalkerError(Exception):
    pass


class YaMTalker(QObject):
    """
    Thin HTTP client for the music API.

    Connectivity is derived from request outcomes: a connection-level
    failure emits connection_lost, the next successful request emits
    connection_established. Each fires only when the flag flips.
    """

    connection_established = Signal()
    connection_lost = Signal()

    def __init__(
        self,
        base_url: str = config.API_BASE_URL,
        token: str = "",
        user_agent: str = config.USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        self.set_token(token)
        self._online: Optional[bool] = None

    @property
    def online(self) -> Optional[bool]:
        return self._online

    def set_token(self, token: str) -> None:
        if token:
            self.session.headers["Authorization"] = f"OAuth {token}"
        else:
            self.session.headers.pop("Authorization", None)

    def _mark(self, online: bool) -> None:
        if self._online == online:
            return
        self._online = online
        if online:
            self.connection_established.emit()
        else:
            self.connection_lost.emit()

    def _get(self, path: str, **params) -> dict:
        try:
            r = self.session.get(f"{self.base_url}{path}", params=params or None, timeout=15)
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.warning("GET %s failed: %s", path, e)
            self._mark(False)
            raise TalkerError(f"Connection problems: {e}") from e

        self._mark(True)
        if r.status_code == 404:
            raise TalkerError(f"Not found: {path}")
        r.raise_for_status()
        return r.json()

    def account_status(self) -> dict:
        return self._get("/account/status").get("result") or {}

    def get_track(self, track_id: str) -> TrackInfo:
        # GET /tracks/{id} -> {"result": [track]}
        items = self._get(f"/tracks/{track_id}").get("result") or []
        if not items:
            raise TalkerError(f"Track {track_id} not found")
        return TrackInfo.from_api(items[0])
