"""Realtime feed descriptors."""

from __future__ import annotations

from dataclasses import dataclass

FEED_BASE_URL = "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs"

_SUFFIXED_FEEDS = frozenset({"ace", "bdfm", "g", "jz", "nqrw", "l", "si"})


@dataclass(frozen=True)
class Feed:
    """A named realtime feed and the URL it is fetched from."""

    label: str
    url: str

    def __init__(self, label: str, url: str) -> None:
        if not url or "://" not in url:
            raise ValueError(f"bad url {url!r}")
        object.__setattr__(self, "label", label)
        object.__setattr__(self, "url", url)

    @classmethod
    def from_static(cls, name: str) -> Feed:
        """Build one of the well-known subway feeds by its short name."""
        if name == "1234567":
            url = FEED_BASE_URL
        elif name in _SUFFIXED_FEEDS:
            url = f"{FEED_BASE_URL}-{name}"
        else:
            raise ValueError(f"unrecognized feed {name}")
        return cls(name, url)

    def name(self) -> str:
        return self.label

    def __str__(self) -> str:
        return f"F.{self.label:<7}"

    def __repr__(self) -> str:
        return str(self)