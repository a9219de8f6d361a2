import pytest

from elirtsi import log as logmod
from elirtsi.log import (
    DefaultLogHandler,
    LogHandler,
    LogLevel,
    Logger,
    get_logger,
    log,
    register_log_handler,
    set_log_level,
    unregister_log_handler,
)


class Collector(LogHandler):
    def __init__(self):
        self.records = []

    def log(self, file, line, level, message):
        self.records.append((file, line, level, message))


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    set_log_level(LogLevel.INFO)
    unregister_log_handler()


def test_filtering_follows_level_order():
    collector = Collector()
    register_log_handler(collector)
    set_log_level(LogLevel.WARN)
    for level in (LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARN, LogLevel.ERROR, LogLevel.FATAL):
        log("o.py", 1, level, "msg")
    assert [r[2] for r in collector.records] == [LogLevel.WARN, LogLevel.ERROR, LogLevel.FATAL]


def test_abstract_handler_cannot_be_instantiated():
    with pytest.raises(TypeError):
        LogHandler()


def test_default_handler_format(capsys):
    DefaultLogHandler().log("a.py", 10, LogLevel.WARN, "hello")
    assert capsys.readouterr().out == "[WARN] a.py:10: hello\n"


def test_default_logger_prints_info(capsys):
    log("b.py", 3, LogLevel.INFO, "value %d", 5)
    assert capsys.readouterr().out == "[INFO] b.py:3: value 5\n"


def test_registered_handler_receives_messages():
    collector = Collector()
    register_log_handler(collector)
    log("c.py", 7, LogLevel.ERROR, "failed: %s", "socket")
    assert collector.records == [("c.py", 7, LogLevel.ERROR, "failed: socket")]


def test_messages_below_level_are_dropped():
    collector = Collector()
    register_log_handler(collector)
    set_log_level(LogLevel.WARN)
    log("d.py", 1, LogLevel.INFO, "quiet")
    log("d.py", 2, LogLevel.DEBUG, "quieter")
    log("d.py", 3, LogLevel.FATAL, "loud")
    assert [r[3] for r in collector.records] == ["loud"]


def test_default_level_is_info():
    collector = Collector()
    register_log_handler(collector)
    log("e.py", 1, LogLevel.DEBUG, "hidden")
    log("e.py", 2, LogLevel.INFO, "shown")
    assert [r[3] for r in collector.records] == ["shown"]
    assert get_logger().level == LogLevel.INFO


def test_fmt_without_args_is_not_formatted():
    collector = Collector()
    register_log_handler(collector)
    log("f.py", 1, LogLevel.INFO, "100% done")
    assert collector.records[0][3] == "100% done"


def test_unregister_restores_default(capsys):
    collector = Collector()
    register_log_handler(collector)
    unregister_log_handler()
    log("g.py", 4, LogLevel.ERROR, "back")
    assert collector.records == []
    assert capsys.readouterr().out == "[ERROR] g.py:4: back\n"


def test_logger_with_none_handler_falls_back(capsys):
    logger = Logger()
    logger.register_handler(None)
    logger.log("h.py", 9, LogLevel.INFO, "fallback")
    assert capsys.readouterr().out == "[INFO] h.py:9: fallback\n"
    assert isinstance(logger.handler, DefaultLogHandler)


def test_logger_log_does_not_filter():
    logger = Logger()
    collector = Collector()
    logger.register_handler(collector)
    logger.set_level(LogLevel.FATAL)
    logger.log("i.py", 1, LogLevel.DEBUG, "raw")
    assert collector.records == [("i.py", 1, LogLevel.DEBUG, "raw")]
    assert logger.level == LogLevel.FATAL


def test_get_logger_is_shared():
    assert get_logger() is logmod.get_logger()
    set_log_level(LogLevel.ERROR)
    assert get_logger().level == LogLevel.ERROR