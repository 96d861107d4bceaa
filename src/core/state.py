from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warn/error


@dataclass
class AppContext:
    """
    Everything main.py builds once at startup. Only Application holds the
    whole context; everything below it gets just the pieces it uses.
    """
    settings: Any = None
    talker: Any = None
    auth: Any = None
    player: Any = None
    notifier: Any = None
    clipboard: Any = None
    mpris: Any = None
    # messages raised before there is a window to show them in
    queued_notifications: list[Notify] = field(default_factory=list)
