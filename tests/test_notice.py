import json

import pytest

from qqcore.notice import (
    GroupNoticeImage,
    HonorType,
    build_add_notice_body,
    build_delete_notice_body,
    parse_group_notice_json,
    parse_honor_page,
)


def _page(state):
    return (
        "<html><script>window.__INITIAL_STATE__="
        + json.dumps(state)
        + "</script><script>other()</script></html>"
    )


@pytest.mark.parametrize(
    "code, expected",
    [
        (1, HonorType.TALKATIVE),
        (5, HonorType.STRONG_NEWBIE),
        (6, HonorType.EMOTION),
    ],
)
def test_honor_type_values_from_page(code, expected):
    assert HonorType(code) is expected
    info = parse_honor_page(_page({"type": code}))
    assert info.type is expected


def test_parse_honor_page_fields():
    state = {
        "gc": "123",
        "uin": "456",
        "type": 1,
        "talkativeList": [{"uin": 7, "avatar": "a", "name": "n", "desc": "d"}],
        "currentTalkative": {"uin": 7, "day_count": 3, "avatar": "a", "nick": "nick"},
        "strongnewbieList": [{"uin": 8, "name": "m"}],
    }
    info = parse_honor_page(_page(state))
    assert info.group_code == "123"
    assert info.uin == "456"
    assert info.type is HonorType.TALKATIVE
    assert info.talkative_list[0].uin == 7
    assert info.talkative_list[0].desc == "d"
    assert info.current_talkative.name == "nick"
    assert info.current_talkative.day_count == 3
    assert [m.uin for m in info.strong_newbie_list] == [8]
    assert info.actor_list == []


def test_parse_honor_page_bytes():
    info = parse_honor_page(_page({"gc": "1"}).encode())
    assert info.group_code == "1"


def test_parse_honor_page_without_marker():
    with pytest.raises(ValueError):
        parse_honor_page("<html></html>")


def test_parse_honor_page_without_script_end():
    with pytest.raises(ValueError):
        parse_honor_page('window.__INITIAL_STATE__={"gc":"1"}')


def test_parse_group_notice_json_orders_feeds_then_inst():
    doc = {
        "feeds": [
            {
                "fid": "f1",
                "u": 10,
                "pubt": 100,
                "msg": {"text": "hello", "pics": [{"h": "1", "w": "2", "id": "p"}]},
            }
        ],
        "inst": [{"fid": "f2", "u": 11, "pubt": 200, "msg": {"text": "pinned"}}],
    }
    notices = parse_group_notice_json(json.dumps(doc))
    assert [n.notice_id for n in notices] == ["f1", "f2"]
    assert notices[0].images == [GroupNoticeImage(height="1", width="2", id="p")]
    assert notices[0].text == "hello"
    assert notices[1].sender_id == 11
    assert notices[1].images == []


def test_parse_group_notice_json_accepts_mapping_and_empty():
    assert parse_group_notice_json({}) == []


def test_parse_group_notice_json_rejects_bad_sender():
    with pytest.raises(ValueError):
        parse_group_notice_json({"feeds": [{"u": -1}]})


def test_build_add_notice_body_escapes_text():
    body = build_add_notice_body(1, 2, "a b&c")
    assert body.startswith("qid=1&bkn=2&text=a+b%26c&pinned=0&type=1&settings=")
    assert "&pic=" not in body


def test_build_add_notice_body_with_image():
    image = GroupNoticeImage(height="30", width="40", id="img")
    body = build_add_notice_body(1, 2, "t", image)
    assert body.endswith("&pic=img&imgWidth=40&imgHeight=30")


def test_build_delete_notice_body():
    assert build_delete_notice_body(5, 6, "abc") == "fid=abc&qid=5&bkn=6&ft=23&op=1"