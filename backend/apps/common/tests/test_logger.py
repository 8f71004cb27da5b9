import logging
from decimal import Decimal

import pytest

from apps.common import AppLogger, get_logger


def test_bind_returns_new_logger_with_merged_context():
    base = get_logger("tests.logger").bind(component="carts")
    child = base.bind(layer="service")
    assert base.context == {"component": "carts"}
    assert child.context == {"component": "carts", "layer": "service"}


def test_format_renders_context_after_message():
    line = AppLogger._format("Cart line stored", {"cart_id": 3, "price": Decimal("5.99")})
    assert line == "Cart line stored | cart_id=3 price=5.99"


def test_format_without_context_is_plain_message():
    assert AppLogger._format("Fetched cart", {}) == "Fetched cart"


def test_log_call_merges_bound_and_call_context(caplog):
    log = get_logger("tests.logger.emit").bind(component="wishlist")
    with caplog.at_level(logging.INFO, logger="tests.logger.emit"):
        log.info("Wishlist entry added", product_id=7)
    assert "Wishlist entry added | component=wishlist product_id=7" in caplog.text


def test_disabled_level_is_not_emitted(caplog):
    log = get_logger("tests.logger.quiet")
    with caplog.at_level(logging.WARNING, logger="tests.logger.quiet"):
        log.debug("hidden")
    assert "hidden" not in caplog.text


def test_exception_attaches_traceback(caplog):
    log = get_logger("tests.logger.exc")
    with caplog.at_level(logging.ERROR, logger="tests.logger.exc"):
        try:
            raise ValueError("boom")
        except ValueError:
            log.exception("Unhandled", view="CartView")
    record = caplog.records[-1]
    assert record.exc_info is not None
    assert record.getMessage() == "Unhandled | view=CartView"


@pytest.mark.parametrize("value,expected", [(None, "None"), ([1, 2], "[1, 2]"), (True, "True")])
def test_stringify(value, expected):
    assert AppLogger._stringify(value) == expected
