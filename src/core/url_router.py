# core/url_router.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from core.config import URL_PREFIX
from core.models import TrackInfo


@dataclass(frozen=True)
class UserPlaylist:
    user_id: str
    kind: str


@dataclass(frozen=True)
class UserPlaylistsRoot:
    user_id: str


@dataclass(frozen=True)
class AlbumRoot:
    album_id: str


@dataclass(frozen=True)
class AlbumTrack:
    album_id: str
    track_id: str


@dataclass(frozen=True)
class Malformed:
    pass


UrlParseResult = Union[UserPlaylist, UserPlaylistsRoot, AlbumRoot, AlbumTrack, Malformed]


def _strip_query(segment: str) -> str:
    return segment.split("?", 1)[0]


def parse(url) -> UrlParseResult:
    """
    Classify a music.yandex.ru link.

      users/<id>/playlists            -> UserPlaylistsRoot
      users/<id>/playlists/<kind>     -> UserPlaylist
      album/<id>                      -> AlbumRoot
      album/<id>/track/<track_id>     -> AlbumTrack

    Anything else is Malformed. Never raises.
    """
    if not isinstance(url, str) or not url.startswith(URL_PREFIX):
        return Malformed()

    # "https:", "", "music.yandex.ru" go away
    parts = url.split("/")[3:]

    try:
        head = _strip_query(parts[0])

        if head == "users":
            user_id = parts[1]
            if not user_id or _strip_query(parts[2]) != "playlists":
                return Malformed()
            if len(parts) == 3:
                return UserPlaylistsRoot(user_id=user_id)
            kind = _strip_query(parts[3])
            return UserPlaylist(user_id=user_id, kind=kind) if kind else Malformed()

        if head == "album":
            album_id = _strip_query(parts[1])
            if not album_id:
                return Malformed()
            if len(parts) == 2:
                return AlbumRoot(album_id=album_id)
            if len(parts) >= 4 and parts[2] == "track":
                track_id = _strip_query(parts[3])
                if track_id:
                    return AlbumTrack(album_id=album_id, track_id=track_id)
            return Malformed()

    except IndexError:
        return Malformed()

    return Malformed()


def share_url(track: TrackInfo) -> str:
    if track.album_id:
        return f"{URL_PREFIX}album/{track.album_id}/track/{track.id}"
    return f"{URL_PREFIX}track/{track.id}"
