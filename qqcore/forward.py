"""XML cards for merged-forward (multi-message) chat records."""

from __future__ import annotations

_HEAD = (
    "<?xml version='1.0' encoding='UTF-8'?><msg serviceID=\"35\" templateID=\"1\" "
    'action="viewMultiMsg" brief="[聊天记录]" '
)
_AFTER_FILE_NAME = (
    '" tSum="3" sourceMsgId="0" url="" flag="3" adverSign="0" multiMsgFlag="0">'
    '<item layout="1"><title color="#000000" size="34">群聊的聊天记录</title> '
)
_BEFORE_SUMMARY = '<hr></hr><summary size="26" color="#808080">'
_TAIL = '</summary></item><source name="聊天记录"></source></msg>'


def forward_display(res_id: str, file_name: str, preview: str, summary: str) -> str:
    """Build the XML card shown for a forwarded chat record.

    The ``m_resid`` attribute is written only when ``res_id`` is not empty.
    """
    parts = [_HEAD]
    if res_id:
        parts.append(f'm_resid="{res_id}" ')
    parts.extend(
        [
            'm_fileName="',
            file_name,
            _AFTER_FILE_NAME,
            preview,
            _BEFORE_SUMMARY,
            summary,
            _TAIL,
        ]
    )
    return "".join(parts)


def forward_summary(count: int) -> str:
    """Return the summary line naming how many messages were forwarded."""
    return f"查看 {count} 条转发消息"


def preview_line(sender: str, brief: str) -> str:
    """Return one preview title line of a forward card."""
    return f'<title size="26" color="#777777">{sender}: {brief}</title>'