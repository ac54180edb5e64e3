"""
Tests for the account-aware logger.
"""

import logging

import pytest

from wacloud.core.logging.context import (
    account_context,
    clear_account_context,
    get_current_account_context,
    set_account_context,
)
from wacloud.core.logging.logger import CompactFormatter, get_logger


@pytest.fixture(autouse=True)
def reset_context():
    clear_account_context()
    yield
    clear_account_context()


class TestAccountContext:
    def test_scoped_context_restores_previous(self):
        set_account_context("outer")

        with account_context("inner"):
            assert get_current_account_context() == "inner"

        assert get_current_account_context() == "outer"

    def test_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with account_context("106540352242922"):
                raise RuntimeError("boom")

        assert get_current_account_context() is None


class TestContextLogger:
    def test_prefix_from_current_context(self, caplog):
        logger = get_logger("wacloud.tests")

        with caplog.at_level(logging.INFO, logger="wacloud.tests"):
            with account_context("106540352242922"):
                logger.info("Text message sent")

        assert caplog.messages == ["[A:106540352242922] Text message sent"]

    def test_no_prefix_without_context(self, caplog):
        logger = get_logger("wacloud.tests")

        with caplog.at_level(logging.INFO, logger="wacloud.tests"):
            logger.info("Listing templates")

        assert caplog.messages == ["Listing templates"]

    def test_bind(self, caplog):
        logger = get_logger("wacloud.tests").bind(account_id="102290129340398")

        with caplog.at_level(logging.WARNING, logger="wacloud.tests"):
            logger.warning("Recording unreadable")

        assert caplog.messages == ["[A:102290129340398] Recording unreadable"]

    def test_active_context_wins_over_bound_account(self, caplog):
        logger = get_logger("wacloud.tests").bind(account_id="bound")

        with caplog.at_level(logging.INFO, logger="wacloud.tests"):
            with account_context("active"):
                logger.info("hello")

        assert caplog.messages == ["[A:active] hello"]


class TestCompactFormatter:
    def test_shortens_package_names(self):
        record = logging.LogRecord(
            "wacloud.messaging.whatsapp.handlers.whatsapp_media_handler",
            logging.INFO,
            __file__,
            1,
            "Media uploaded",
            None,
            None,
        )

        output = CompactFormatter("[%(name)s] %(message)s").format(record)

        assert output == "[handlers.whatsapp_media_handler] Media uploaded"

    def test_leaves_other_names(self):
        record = logging.LogRecord("aiohttp.client", logging.INFO, __file__, 1, "x", None, None)

        assert CompactFormatter("%(name)s").format(record) == "aiohttp.client"
