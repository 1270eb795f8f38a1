"""Group and friend notification events and gray-tip parsing."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from qqcore.notice import HonorType

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_HONOR_TEMPLATES = {
    1052: HonorType.PERFORMER,
    1053: HonorType.TALKATIVE,
    1054: HonorType.TALKATIVE,
    1067: HonorType.EMOTION,
}


def _parse_int(text: str) -> int:
    """Parse a decimal int64; malformed text gives 0, overflow saturates."""
    if not _INT_RE.fullmatch(text):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(text)))


@dataclass
class GroupPokeNotifyEvent:
    """Someone poked someone in a group."""

    group_code: int
    sender: int
    receiver: int

    def source(self) -> int:
        return self.group_code

    def content(self) -> str:
        return f"{self.sender}戳了戳{self.receiver}"


@dataclass
class GroupRedBagLuckyKingNotifyEvent:
    """A group red packet was emptied and a lucky king chosen."""

    group_code: int
    sender: int
    lucky_king: int

    def source(self) -> int:
        return self.group_code

    def content(self) -> str:
        return f"{self.sender}发的红包被领完, {self.lucky_king}是运气王"


@dataclass
class MemberHonorChangedNotifyEvent:
    """A group member gained an honour."""

    group_code: int
    honor: HonorType | int
    uin: int
    nick: str

    def source(self) -> int:
        return self.group_code

    def content(self) -> str:
        if self.honor == HonorType.TALKATIVE:
            return f"昨日 {self.nick}({self.uin}) 在群 {self.group_code} 内发言最积极, 获得 龙王 标识。"
        if self.honor == HonorType.PERFORMER:
            return f"{self.nick}({self.uin}) 在群 {self.group_code} 里连续发消息超过7天, 获得 群聊之火 标识。"
        if self.honor == HonorType.EMOTION:
            return (
                f"{self.nick}({self.uin}) 在群聊 {self.group_code} 中连续发表情包超过3天，"
                "且累计数量超过20条，获得 快乐源泉 标识。"
            )
        return "ERROR"


@dataclass
class MemberSpecialTitleUpdatedEvent:
    """A group member's special title changed."""

    group_code: int
    uin: int = 0
    new_title: str = ""


@dataclass
class FriendPokeNotifyEvent:
    """A friend poked someone."""

    sender: int
    receiver: int

    def source(self) -> int:
        return self.sender

    def content(self) -> str:
        return f"{self.sender}戳了戳{self.receiver}"


@dataclass
class TipCommand:
    """A JSON command embedded in an AIO gray tip."""

    command: int = 0
    data: str = ""
    text: str = ""


def _pairs(params: Mapping[str, str] | Iterable[tuple[str, str]]) -> Iterable[tuple[str, str]]:
    if isinstance(params, Mapping):
        return params.items()
    return params


def process_gray_tip(
    group_code: int,
    self_uin: int,
    busi_type: int,
    busi_id: int,
    templ_id: int,
    params: Mapping[str, str] | Iterable[tuple[str, str]],
) -> list[GroupPokeNotifyEvent | MemberHonorChangedNotifyEvent]:
    """Turn a general gray tip into the events it announces."""
    params = list(_pairs(params))
    events: list[GroupPokeNotifyEvent | MemberHonorChangedNotifyEvent] = []
    if busi_type == 12 and busi_id == 1061:
        sender = 0
        receiver = self_uin
        for name, value in params:
            if name == "uin_str1":
                sender = _parse_int(value)
            if name == "uin_str2":
                receiver = _parse_int(value)
        if sender != 0:
            events.append(GroupPokeNotifyEvent(group_code=group_code, sender=sender, receiver=receiver))
    honor = _HONOR_TEMPLATES.get(templ_id)
    if honor is not None:
        nick = ""
        uin = 0
        for name, value in params:
            if name == "nick":
                nick = value
            if name == "uin":
                uin = _parse_int(value)
        events.append(MemberHonorChangedNotifyEvent(group_code=group_code, honor=honor, uin=uin, nick=nick))
    return events


def _tip_command(raw: str) -> TipCommand | None:
    try:
        obj: Any = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(obj, dict):
        return None
    command = obj.get("cmd", 0)
    data = obj.get("data", "")
    text = obj.get("text", "")
    if command is None:
        command = 0
    if data is None:
        data = ""
    if text is None:
        text = ""
    if isinstance(command, bool) or not isinstance(command, int):
        return None
    if not isinstance(data, str) or not isinstance(text, str):
        return None
    return TipCommand(command=command, data=data, text=text)


def parse_tip_commands(content: str | bytes) -> list[TipCommand]:
    """Extract the ``<{...}>`` JSON commands from gray tip content."""
    if isinstance(content, (bytes, bytearray)):
        content = bytes(content).decode("utf-8", "replace")
    commands = []
    start = -1
    for i, ch in enumerate(content):
        if ch == "<" and i + 1 < len(content) and content[i + 1] == "{":
            start = i + 1
        if ch == ">" and i > 0 and content[i - 1] == "}" and start != -1:
            command = _tip_command(content[start:i])
            if command is not None:
                commands.append(command)
            start = -1
    return commands


def parse_special_title_update(
    group_code: int, content: str | bytes
) -> MemberSpecialTitleUpdatedEvent | None:
    """Read a special-title change from gray tip content, if it announces one."""
    if isinstance(content, (bytes, bytearray)):
        content = bytes(content).decode("utf-8", "replace")
    if not content or "头衔" not in content:
        return None
    event = MemberSpecialTitleUpdatedEvent(group_code=group_code)
    for command in parse_tip_commands(content):
        if command.command == 5:
            event.uin = _parse_int(command.data)
        if command.command == 1:
            event.new_title = command.text
    if event.uin == 0:
        raise ValueError("process special title updated tips error: missing cmd")
    return event