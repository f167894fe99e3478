from __future__ import annotations

import logging

from consumers.base import DetailConsumer
from core.timestamp import format_health_time
from models.health_event import Detail

log = logging.getLogger(__name__)


class LogConsumer(DetailConsumer):
    """Consumer that writes decoded events to the log.

    A one-line summary goes out at INFO; the full decoded value at DEBUG.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or log

    def process(self, detail: Detail) -> None:
        start = format_health_time(detail.start_time) if detail.start_time else "-"
        self._log.info(
            "Health event %s: service=%s type=%s category=%s status=%s "
            "region=%s start=%s entities=%d",
            detail.event_arn or "<no arn>",
            detail.service,
            detail.event_type_code,
            detail.event_type_category,
            detail.status_code,
            detail.event_region,
            start,
            len(detail.affected_entities),
        )
        self._log.debug("%r", detail)
