"""
Tests for the Lambda receiver and consumers.
"""

import logging

import pytest

import receiver.handler as rh
from consumers.base import DetailConsumer
from consumers.log import LogConsumer
from core.errors import DecodeError, SchemaMismatchError
from models.health_event import Detail


class RecordingConsumer(DetailConsumer):
    def __init__(self):
        self.seen = []

    def process(self, detail):
        self.seen.append(detail)


class FailingConsumer(DetailConsumer):
    def process(self, detail):
        raise RuntimeError("backend down")


class TestHandler:
    """Tests for Handler.handle."""

    def test_default_consumer_is_log_consumer(self):
        handler = rh.Handler()
        assert [type(c) for c in handler.consumers] == [LogConsumer]

    def test_dispatches_detail_to_consumers(self, load_envelope):
        first, second = RecordingConsumer(), RecordingConsumer()
        handler = rh.Handler([first, second])

        detail = handler.handle(load_envelope("specific-ec2-event.json"))

        assert isinstance(detail, Detail)
        assert first.seen == [detail]
        assert second.seen == [detail]

    def test_decode_error_logged_and_raised(self, caplog):
        consumer = RecordingConsumer()
        handler = rh.Handler([consumer])

        with caplog.at_level(logging.ERROR, logger="receiver"):
            with pytest.raises(SchemaMismatchError):
                handler.handle({"detail": {"eventArn": 123}})

        assert consumer.seen == []
        assert "Failed to decode health event" in caplog.text

    def test_failing_consumer_does_not_stop_others(self, load_envelope, caplog):
        consumer = RecordingConsumer()
        handler = rh.Handler([FailingConsumer(), consumer])

        detail = handler.handle(load_envelope("public-ec2-event.json"))

        assert consumer.seen == [detail]
        assert "FailingConsumer failed processing event" in caplog.text


class TestLogConsumer:
    """Tests for LogConsumer."""

    def test_summary_at_info(self, load_envelope, caplog):
        handler = rh.Handler([LogConsumer()])
        with caplog.at_level(logging.INFO, logger="consumers"):
            handler.handle(load_envelope("public-ec2-event.json"))

        assert "service=EC2" in caplog.text
        assert "status=open" in caplog.text
        assert "start=Fri, 27 Jan 2023 06:02:51 UTC" in caplog.text

    def test_full_value_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="consumers"):
            LogConsumer().process(Detail(service="S3"))

        assert "Detail(" in caplog.text
        assert "start=-" in caplog.text


class TestLambdaHandler:
    """Tests for the module-level Lambda entry point."""

    @pytest.fixture(autouse=True)
    def reset_default_handler(self, monkeypatch):
        monkeypatch.setattr(rh, "_default_handler", None)
        loggers = [logging.getLogger(name) for name in ("receiver", "core", "consumers")]
        levels = [logger.level for logger in loggers]
        yield
        for logger, level in zip(loggers, levels):
            logger.setLevel(level)

    def test_lambda_handler(self, load_envelope, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert rh.lambda_handler(load_envelope("specific-elb-event.json"), None) is None
        assert logging.getLogger("receiver").level == logging.DEBUG
        assert isinstance(rh._default_handler, rh.Handler)

    def test_unknown_log_level_falls_back(self, load_envelope, monkeypatch, caplog):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        rh.lambda_handler(load_envelope("specific-elb-event.json"), None)
        assert logging.getLogger("receiver").level == logging.INFO
        assert "Unknown LOG_LEVEL 'VERBOSE'" in caplog.text

    def test_lambda_handler_raises_on_bad_event(self):
        with pytest.raises(DecodeError):
            rh.lambda_handler({"detail": {"startTime": "Someday"}}, None)
