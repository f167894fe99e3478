from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from core.decoder import decode_detail, load_json
from core.errors import DecodeError, EnvelopeError
from models.health_event import Detail

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Envelope:
    """EventBridge (CloudWatch Events) envelope around a health event.

    Fields:
        id:          Envelope identifier assigned by EventBridge.
        detail_type: ``detail-type``, e.g. "AWS Health Event".
        source:      Emitting service, e.g. "aws.health".
        time:        When EventBridge received the event (UTC), if present.
        resources:   ARNs the event refers to.
        detail:      Raw JSON bytes of the ``detail`` object, undecoded.
    """

    version: str
    id: str
    detail_type: str
    source: str
    account: str
    time: datetime | None
    region: str
    resources: tuple[str, ...]
    detail: bytes


def _parse_timestamp(raw: str) -> datetime:
    """Parse ISO 8601 timestamps that may include fractional seconds."""
    cleaned = raw.replace("Z", "+00:00")
    return datetime.fromisoformat(cleaned).astimezone(timezone.utc)


def _envelope_time(raw: Any) -> datetime | None:
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return _parse_timestamp(raw)
    except ValueError:
        # The envelope time is informational only; the detail carries the
        # timestamps that matter.
        log.warning("Ignoring unparsable envelope time %r", raw)
        return None


def _text(event: Mapping[str, Any], key: str) -> str:
    value = event.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise EnvelopeError(
            f"envelope '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def _raw_detail(detail: Any) -> bytes:
    if detail is None:
        raise EnvelopeError("envelope has no 'detail'")
    if isinstance(detail, dict):
        try:
            return json.dumps(detail, allow_nan=False).encode("utf-8")
        except (ValueError, RecursionError) as exc:
            raise EnvelopeError(f"envelope 'detail' cannot be encoded: {exc}") from exc
    if isinstance(detail, str):
        return detail.encode("utf-8")
    if isinstance(detail, bytes):
        return detail
    raise EnvelopeError(
        f"envelope 'detail' must be an object, got {type(detail).__name__}"
    )


def parse_envelope(event: Mapping[str, Any] | bytes | str) -> Envelope:
    """Unwrap an envelope as delivered by the Lambda runtime or as raw JSON.

    Only ``detail`` is required; the other attributes default to empty.
    """
    if isinstance(event, (bytes, str)):
        try:
            event = load_json(event)
        except DecodeError as exc:
            raise EnvelopeError(f"envelope is not valid JSON: {exc}") from exc

    if not isinstance(event, Mapping):
        raise EnvelopeError(
            f"envelope must be an object, got {type(event).__name__}"
        )

    resources = event.get("resources") or []
    if not isinstance(resources, list):
        raise EnvelopeError(
            f"envelope 'resources' must be an array, got {type(resources).__name__}"
        )
    if not all(isinstance(r, str) for r in resources):
        raise EnvelopeError("envelope 'resources' must hold only strings")

    return Envelope(
        version=_text(event, "version"),
        id=_text(event, "id"),
        detail_type=_text(event, "detail-type"),
        source=_text(event, "source"),
        account=_text(event, "account"),
        time=_envelope_time(event.get("time")),
        region=_text(event, "region"),
        resources=tuple(resources),
        detail=_raw_detail(event.get("detail")),
    )


def parse_detail(event: Mapping[str, Any] | bytes | str) -> Detail:
    """Unwrap ``event`` and decode its health ``detail``."""
    return decode_detail(parse_envelope(event).detail)
