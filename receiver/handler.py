"""Lambda receiver for AWS Health events delivered through EventBridge.

    EventBridge envelope
        -> parse_envelope (unwrap raw ``detail`` bytes)
        -> decode_detail  (typed, immutable Detail)
        -> consumers      (LogConsumer by default)

Decode failures are logged and re-raised so the runtime's retry and
dead-letter handling sees the failed invocation.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Iterable, Mapping

from consumers.base import DetailConsumer
from consumers.log import LogConsumer
from core.decoder import decode_detail
from core.envelope import parse_envelope
from core.errors import DecodeError
from models.health_event import Detail

log = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "INFO"


class Handler:
    """Decodes one envelope per call and fans the result out to consumers."""

    def __init__(self, consumers: Iterable[DetailConsumer] | None = None) -> None:
        self._consumers: list[DetailConsumer] = (
            list(consumers) if consumers is not None else [LogConsumer()]
        )

    @property
    def consumers(self) -> list[DetailConsumer]:
        return list(self._consumers)

    def handle(self, event: Mapping[str, Any] | bytes | str, context: Any = None) -> Detail:
        try:
            envelope = parse_envelope(event)
            detail = decode_detail(envelope.detail)
        except DecodeError:
            log.exception("Failed to decode health event")
            raise

        log.debug(
            "Decoded envelope id=%s source=%s detail-type=%s",
            envelope.id,
            envelope.source,
            envelope.detail_type,
        )

        for consumer in self._consumers:
            try:
                consumer.process(detail)
            except Exception:
                log.exception(
                    "%s failed processing event %s",
                    consumer.name,
                    detail.event_arn,
                )

        return detail


_default_handler: Handler | None = None


def log_level_from_env() -> str:
    """Return ``LOG_LEVEL`` if it names a logging level, else the default."""
    level = os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        log.warning(
            "Unknown LOG_LEVEL %r, falling back to %s", level, DEFAULT_LOG_LEVEL
        )
        return DEFAULT_LOG_LEVEL
    return level


def _configure_logging() -> None:
    level = log_level_from_env()
    for name in ("receiver", "core", "consumers"):
        logging.getLogger(name).setLevel(level)


def lambda_handler(event: dict[str, Any], context: Any) -> None:
    """Lambda entry point."""
    global _default_handler
    if _default_handler is None:
        _configure_logging()
        _default_handler = Handler()
    _default_handler.handle(event, context)
