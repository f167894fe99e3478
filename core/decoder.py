from __future__ import annotations

import json
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

from core.errors import JSONSyntaxError, SchemaMismatchError
from core.timestamp import parse_health_time
from models.health_event import (
    AffectedEntity,
    Detail,
    EventDescriptionRow,
    EventScopeCode,
    EventTypeCategory,
    StatusCode,
)


def _object(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise SchemaMismatchError(path, "object", value)
    return value


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _string(obj: Mapping[str, Any], key: str, path: str = "") -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SchemaMismatchError(_join(path, key), "string", value)
    return value


def _time(obj: Mapping[str, Any], key: str, path: str = "") -> datetime | None:
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise SchemaMismatchError(_join(path, key), "timestamp string", value)
    return parse_health_time(value, _join(path, key))


def _array(obj: Mapping[str, Any], key: str) -> list[Any]:
    value = obj.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise SchemaMismatchError(key, "array", value)
    return value


def _metadata(obj: Mapping[str, Any], key: str) -> Mapping[str, str]:
    value = obj.get(key)
    if value is None:
        return MappingProxyType({})
    entries = _object(value, key)
    return MappingProxyType({k: _string(entries, k, key) for k in entries})


def _description_row(value: Any, path: str) -> EventDescriptionRow:
    row = _object(value, path)
    return EventDescriptionRow(
        language=_string(row, "language", path),
        latest_description=_string(row, "latestDescription", path),
    )


def _affected_entity(value: Any, path: str) -> AffectedEntity:
    entity = _object(value, path)
    return AffectedEntity(
        entity_value=_string(entity, "entityValue", path),
        # lowercase "t" is how the provider spells it inside entities
        last_updated_time=_time(entity, "lastUpdatedtime", path),
        status=_string(entity, "status", path),
    )


def _reject_constant(name: str) -> Any:
    raise JSONSyntaxError(f"invalid JSON: {name} is not a JSON value")


def load_json(raw: bytes | str) -> Any:
    """Parse strict UTF-8 JSON.

    Unlike a bare ``json.loads`` this rejects NaN and Infinity literals, a
    byte order mark and UTF-16/UTF-32 input.

    Raises:
        JSONSyntaxError: ``raw`` is not well-formed UTF-8 JSON or nests too
            deeply for the interpreter to parse.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
        return json.loads(text, parse_constant=_reject_constant)
    except UnicodeDecodeError as exc:
        raise JSONSyntaxError(f"payload is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise JSONSyntaxError(f"invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise JSONSyntaxError("JSON nests too deeply to decode") from exc


def decode_detail(raw: bytes | str) -> Detail:
    """Decode the ``detail`` payload of an AWS Health event.

    Keys outside the schema are ignored. Open enumerations such as
    ``statusCode`` are stored verbatim whatever their value.

    Raises:
        JSONSyntaxError: ``raw`` is not well-formed JSON.
        SchemaMismatchError: a value has the wrong JSON type.
        MalformedTimestampError: a timestamp fails the provider's grammar.
    """
    obj = _object(load_json(raw), "detail")

    return Detail(
        event_arn=_string(obj, "eventArn"),
        service=_string(obj, "service"),
        event_type_code=_string(obj, "eventTypeCode"),
        event_type_category=EventTypeCategory(_string(obj, "eventTypeCategory")),
        event_scope_code=EventScopeCode(_string(obj, "eventScopeCode")),
        communication_id=_string(obj, "communicationId"),
        start_time=_time(obj, "startTime"),
        end_time=_time(obj, "endTime"),
        last_updated_time=_time(obj, "lastUpdatedTime"),
        status_code=StatusCode(_string(obj, "statusCode")),
        event_region=_string(obj, "eventRegion"),
        event_description=tuple(
            _description_row(row, f"eventDescription[{i}]")
            for i, row in enumerate(_array(obj, "eventDescription"))
        ),
        event_metadata=_metadata(obj, "eventMetadata"),
        affected_entities=tuple(
            _affected_entity(entity, f"affectedEntities[{i}]")
            for i, entity in enumerate(_array(obj, "affectedEntities"))
        ),
        page=_string(obj, "page"),
        total_pages=_string(obj, "totalPages"),
        affected_account=_string(obj, "affectedAccount"),
    )
