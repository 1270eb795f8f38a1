"""Group honour pages and group announcement (notice) payloads."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping
from urllib.parse import quote_plus

_INITIAL_STATE_MARKER = "window.__INITIAL_STATE__="
_SCRIPT_END = "</script>"
_UINT32_MAX = 0xFFFFFFFF
_UINT64_MAX = 0xFFFFFFFFFFFFFFFF
_NOTICE_SETTINGS = '{"is_show_edit_card":0,"tip_window_type":1,"confirm_required":1}'


class HonorType(IntEnum):
    """Kinds of group honour."""

    TALKATIVE = 1  # 龙王
    PERFORMER = 2  # 群聊之火
    LEGEND = 3  # 群聊炙焰
    STRONG_NEWBIE = 5  # 冒尖小春笋
    EMOTION = 6  # 快乐源泉


def _honor(value: int) -> HonorType | int:
    try:
        return HonorType(value)
    except ValueError:
        return value


def _str(obj: Mapping[str, Any], key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"json field {key!r} must be a string")
    return value


def _int(obj: Mapping[str, Any], key: str, low: int | None = None, high: int | None = None) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"json field {key!r} must be an integer")
    if (low is not None and value < low) or (high is not None and value > high):
        raise ValueError(f"json field {key!r} is out of range")
    return value


def _obj(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a json object")
    return value


def _list(obj: Mapping[str, Any], key: str) -> list[Any]:
    value = obj.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"json field {key!r} must be a list")
    return value


def _load(data: str | bytes | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    return _obj(data, "document")


@dataclass
class HonorMemberInfo:
    """A member listed on a group honour page."""

    uin: int = 0
    avatar: str = ""
    name: str = ""
    desc: str = ""

    @classmethod
    def _from_json(cls, value: Any) -> HonorMemberInfo:
        obj = _obj(value, "honor member")
        return cls(
            uin=_int(obj, "uin"),
            avatar=_str(obj, "avatar"),
            name=_str(obj, "name"),
            desc=_str(obj, "desc"),
        )


@dataclass
class CurrentTalkative:
    """The member currently holding the talkative honour."""

    uin: int = 0
    day_count: int = 0
    avatar: str = ""
    name: str = ""

    @classmethod
    def _from_json(cls, value: Any) -> CurrentTalkative:
        obj = _obj(value, "current talkative")
        return cls(
            uin=_int(obj, "uin"),
            day_count=_int(obj, "day_count", -(2**31), 2**31 - 1),
            avatar=_str(obj, "avatar"),
            name=_str(obj, "nick"),
        )


@dataclass
class GroupHonorInfo:
    """Honour lists of one group."""

    group_code: str = ""
    uin: str = ""
    type: HonorType | int = 0
    talkative_list: list[HonorMemberInfo] = field(default_factory=list)
    current_talkative: CurrentTalkative = field(default_factory=CurrentTalkative)
    actor_list: list[HonorMemberInfo] = field(default_factory=list)
    legend_list: list[HonorMemberInfo] = field(default_factory=list)
    strong_newbie_list: list[HonorMemberInfo] = field(default_factory=list)
    emotion_list: list[HonorMemberInfo] = field(default_factory=list)


def _members(obj: Mapping[str, Any], key: str) -> list[HonorMemberInfo]:
    return [HonorMemberInfo._from_json(item) for item in _list(obj, key)]


def parse_honor_page(page: str | bytes) -> GroupHonorInfo:
    """Extract the honour information embedded in an honour list HTML page."""
    if isinstance(page, (bytes, bytearray)):
        page = bytes(page).decode("utf-8", "replace")
    start = page.find(_INITIAL_STATE_MARKER)
    if start < 0:
        raise ValueError("honor page has no initial state")
    rest = page[start + len(_INITIAL_STATE_MARKER):]
    end = rest.find(_SCRIPT_END)
    if end < 0:
        raise ValueError("honor page initial state is not terminated")
    obj = _load(rest[:end])
    return GroupHonorInfo(
        group_code=_str(obj, "gc"),
        uin=_str(obj, "uin"),
        type=_honor(_int(obj, "type")),
        talkative_list=_members(obj, "talkativeList"),
        current_talkative=CurrentTalkative._from_json(obj.get("currentTalkative")),
        actor_list=_members(obj, "actorList"),
        legend_list=_members(obj, "legendList"),
        strong_newbie_list=_members(obj, "strongnewbieList"),
        emotion_list=_members(obj, "emotionList"),
    )


@dataclass
class GroupNoticeImage:
    """An image attached to a group notice."""

    height: str = ""
    width: str = ""
    id: str = ""


@dataclass
class GroupNoticeMessage:
    """A group announcement."""

    notice_id: str = ""
    sender_id: int = 0
    publish_time: int = 0
    text: str = ""
    images: list[GroupNoticeImage] = field(default_factory=list)


def _parse_feed(value: Any) -> GroupNoticeMessage:
    if value is None:
        raise ValueError("notice feed is null")
    feed = _obj(value, "notice feed")
    body = _obj(feed.get("msg"), "notice message")
    images = []
    for pic in _list(body, "pics"):
        pic_obj = _obj(pic, "notice image")
        images.append(
            GroupNoticeImage(
                height=_str(pic_obj, "h"),
                width=_str(pic_obj, "w"),
                id=_str(pic_obj, "id"),
            )
        )
    return GroupNoticeMessage(
        notice_id=_str(feed, "fid"),
        sender_id=_int(feed, "u", 0, _UINT32_MAX),
        publish_time=_int(feed, "pubt", 0, _UINT64_MAX),
        text=_str(body, "text"),
        images=images,
    )


def parse_group_notice_json(data: str | bytes | Mapping[str, Any]) -> list[GroupNoticeMessage]:
    """Parse a notice list response: regular feeds first, then pinned ones."""
    obj = _load(data)
    return [_parse_feed(feed) for key in ("feeds", "inst") for feed in _list(obj, key)]


def build_add_notice_body(
    group_code: int, bkn: int, text: str, image: GroupNoticeImage | None = None
) -> str:
    """Build the form body that publishes a group notice."""
    body = (
        f"qid={group_code}&bkn={bkn}&text={quote_plus(text, safe='')}"
        f"&pinned=0&type=1&settings={_NOTICE_SETTINGS}"
    )
    if image is not None:
        body += f"&pic={image.id}&imgWidth={image.width}&imgHeight={image.height}"
    return body


def build_delete_notice_body(group_code: int, bkn: int, fid: str) -> str:
    """Build the form body that deletes a group notice."""
    return f"fid={fid}&qid={group_code}&bkn={bkn}&ft=23&op=1"