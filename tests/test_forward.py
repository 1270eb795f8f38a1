from qqcore.forward import forward_display, forward_summary, preview_line

HEAD = (
    "<?xml version='1.0' encoding='UTF-8'?><msg serviceID=\"35\" templateID=\"1\" "
    'action="viewMultiMsg" brief="[聊天记录]" '
)
TAIL = '</summary></item><source name="聊天记录"></source></msg>'


def test_display_with_res_id_has_attribute():
    xml = forward_display("RES123", "MultiMsg", "PREVIEW", "SUMMARY")
    assert xml.startswith(HEAD + 'm_resid="RES123" m_fileName="MultiMsg"')
    assert xml.endswith("SUMMARY" + TAIL)


def test_display_without_res_id_omits_attribute():
    xml = forward_display("", "file-1", "PREVIEW", "SUMMARY")
    assert "m_resid" not in xml
    assert xml.startswith(HEAD + 'm_fileName="file-1"')


def test_display_places_preview_before_summary():
    xml = forward_display("r", "f", "PREVIEW", "SUMMARY")
    assert xml.index("PREVIEW") < xml.index("<hr></hr>") < xml.index("SUMMARY")
    assert '<title color="#000000" size="34">群聊的聊天记录</title> PREVIEW' in xml


def test_summary_text():
    assert forward_summary(7) == "查看 7 条转发消息"


def test_preview_line_format():
    line = preview_line("alice", "hello")
    assert line == '<title size="26" color="#777777">alice: hello</title>'


def test_preview_lines_compose_into_display():
    preview = preview_line("a", "x") + preview_line("b", "y")
    xml = forward_display("id", "name", preview, forward_summary(2))
    assert preview in xml
    assert xml.count('<title size="26" color="#777777">') == 2
    assert forward_summary(2) + TAIL in xml