"""Music share card application profiles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class MusicType(IntEnum):
    """Music provider of a share card."""

    QQ = 0
    NETEASE = 1
    MIGU = 2
    KUGOU = 3
    KUWO = 4


@dataclass(frozen=True)
class MusicTypeInfo:
    """Application identity used to send a provider's music card."""

    app_id: int
    app_type: int
    platform: int
    sdk_version: str
    package_name: str
    signature: str


_MUSIC_TYPES = {
    MusicType.QQ: MusicTypeInfo(
        100497308, 1, 1, "0.0.0", "com.tencent.qqmusic", "cbd27cd7c861227d013a25b2d10f0799"
    ),
    MusicType.NETEASE: MusicTypeInfo(
        100495085, 1, 1, "0.0.0", "com.netease.cloudmusic", "da6b069da1e2982db3e386233f68d76d"
    ),
    MusicType.MIGU: MusicTypeInfo(
        1101053067, 1, 1, "0.0.0", "cmccwm.mobilemusic", "6cdc72a439cef99a3418d2a78aa28c73"
    ),
    MusicType.KUGOU: MusicTypeInfo(
        205141, 1, 1, "0.0.0", "com.kugou.android", "fe4a24d80fcf253a00676a808f62c2c6"
    ),
    MusicType.KUWO: MusicTypeInfo(
        100243533, 1, 1, "0.0.0", "cn.kuwo.player", "bf9ff4ffb4c558a34ee3fd52c223ebf5"
    ),
}

_STYLE_PLAIN = 0
_STYLE_MUSIC = 4


def music_type_info(music_type: int) -> MusicTypeInfo:
    """Return the application profile for a music provider."""
    try:
        return _MUSIC_TYPES[MusicType(music_type)]
    except ValueError as exc:
        raise ValueError(f"unknown music type {music_type}") from exc


def rich_msg_style(music_url: Optional[str]) -> int:
    """Return the card style: 4 when a playable music URL is given, else 0."""
    if music_url is None or music_url == "":
        return _STYLE_PLAIN
    if not isinstance(music_url, str):
        raise TypeError(f"music url must be a string, not {type(music_url).__name__}")
    return _STYLE_MUSIC