from qqcore.logger import ClientLog


class Recorder:
    def __init__(self):
        self.calls = []

    def info(self, fmt, *args):
        self.calls.append(("info", fmt, args))

    def warning(self, fmt, *args):
        self.calls.append(("warning", fmt, args))

    def error(self, fmt, *args):
        self.calls.append(("error", fmt, args))

    def debug(self, fmt, *args):
        self.calls.append(("debug", fmt, args))

    def dump(self, dumped, fmt, *args):
        self.calls.append(("dump", dumped, fmt, args))


def test_messages_forwarded_in_order():
    recorder = Recorder()
    log = ClientLog()
    log.set_logger(recorder)
    log.info("a %v", 1)
    log.warning("b")
    log.error("c %v %v", 2, 3)
    log.debug("d")
    assert recorder.calls == [
        ("info", "a %v", (1,)),
        ("warning", "b", ()),
        ("error", "c %v %v", (2, 3)),
        ("debug", "d", ()),
    ]


def test_dump_puts_data_first():
    recorder = Recorder()
    log = ClientLog(recorder)
    log.dump("packet %v", b"\x01\x02", "cmd")
    assert recorder.calls == [("dump", b"\x01\x02", "packet %v", ("cmd",))]


def test_messages_dropped_without_logger():
    recorder = Recorder()
    log = ClientLog()
    log.info("lost")
    log.dump("lost", b"")
    log.set_logger(recorder)
    log.info("kept")
    assert recorder.calls == [("info", "kept", ())]


def test_clearing_logger_stops_forwarding():
    recorder = Recorder()
    log = ClientLog(recorder)
    log.set_logger(None)
    log.error("x")
    assert recorder.calls == []
    assert log.logger is None