# core/models.py
from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TrackInfo:
    id: str
    title: str
    version: str | None = None
    artists: tuple[str, ...] = field(default_factory=tuple)
    album_id: str | None = None
    is_ugc: bool = False
    stream_url: str | None = None  # local file or direct link, resolved by the talker

    @property
    def artists_names(self) -> str:
        return ", ".join(self.artists)

    @property
    def display_body(self) -> str:
        """
        "Title Version - Artist, Artist", the body of the now-playing notification.
        """
        version = f" {self.version}" if self.version else ""
        return f"{self.title}{version} - {self.artists_names}"

    @classmethod
    def from_api(cls, data: dict) -> "TrackInfo":
        # /tracks/{id} returns {"result": [track, ...]}, callers pass a single track dict
        albums = data.get("albums") or []
        return cls(
            id=str(data.get("id", "")),
            title=(data.get("title") or "").strip(),
            version=(data.get("version") or "").strip() or None,
            artists=tuple(a.get("name", "") for a in data.get("artists") or [] if a.get("name")),
            album_id=str(albums[0]["id"]) if albums and "id" in albums[0] else None,
            is_ugc=bool(data.get("trackSource") == "UGC"),
            stream_url=data.get("streamUrl"),
        )
