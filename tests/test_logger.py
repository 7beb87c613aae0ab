import io
import sys

import pytest

from tradex import logger
from tradex.logger import LogLevel


@pytest.fixture
def out():
    buf = io.StringIO()
    logger.set_out(buf)
    yield buf
    logger.set_out(sys.stderr)
    logger.set_level(LogLevel.WARN)


def test_default_level_hides_info(out):
    logger.info("hidden %s", "line")
    logger.warn("shown %s", "line")
    text = out.getvalue()
    assert "hidden line" not in text
    assert "[WARN ] shown line" in text


def test_debug_visible_after_set_level(out):
    logger.set_level(LogLevel.DEBUG)
    logger.debug("value=%d", 7)
    assert "[DEBUG] value=7" in out.getvalue()


def test_error_tag(out):
    logger.error("boom")
    assert "[ERROR] boom" in out.getvalue()


def test_level_filters_lower(out):
    logger.set_level(LogLevel.ERROR)
    logger.warn("quiet")
    logger.error("loud")
    text = out.getvalue()
    assert "quiet" not in text
    assert "loud" in text


def test_message_without_args_keeps_percent(out):
    logger.warn("100% done")
    assert "100% done" in out.getvalue()


def test_fatal_exits(out):
    with pytest.raises(SystemExit) as info:
        logger.fatal("bad %s", "state")
    assert info.value.code == 1
    assert "[FATAL] bad state" in out.getvalue()


def test_fatal_suppressed_above_level(out):
    logger.set_level(LogLevel.PANIC)
    logger.fatal("ignored")
    assert "ignored" not in out.getvalue()


def test_panic_raises(out):
    with pytest.raises(RuntimeError, match="broken 3"):
        logger.panic("broken %d", 3)
    assert "[PANIC] broken 3" in out.getvalue()