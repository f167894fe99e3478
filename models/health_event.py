from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, NewType

# Open enumerations: the provider adds codes without notice, so any string
# decodes. The constants below document the values known today.

EventTypeCategory = NewType("EventTypeCategory", str)

EVENT_TYPE_CATEGORY_ISSUE = EventTypeCategory("issue")
EVENT_TYPE_CATEGORY_ACCOUNT_NOTIFICATION = EventTypeCategory("accountNotification")
EVENT_TYPE_CATEGORY_INVESTIGATION = EventTypeCategory("investigation")
EVENT_TYPE_CATEGORY_SCHEDULED_CHANGE = EventTypeCategory("scheduledChange")

KNOWN_EVENT_TYPE_CATEGORIES = frozenset({
    EVENT_TYPE_CATEGORY_ISSUE,
    EVENT_TYPE_CATEGORY_ACCOUNT_NOTIFICATION,
    EVENT_TYPE_CATEGORY_INVESTIGATION,
    EVENT_TYPE_CATEGORY_SCHEDULED_CHANGE,
})

EventScopeCode = NewType("EventScopeCode", str)

EVENT_SCOPE_CODE_ACCOUNT_SPECIFIC = EventScopeCode("ACCOUNT_SPECIFIC")
EVENT_SCOPE_CODE_PUBLIC = EventScopeCode("PUBLIC")

KNOWN_EVENT_SCOPE_CODES = frozenset({
    EVENT_SCOPE_CODE_ACCOUNT_SPECIFIC,
    EVENT_SCOPE_CODE_PUBLIC,
})

StatusCode = NewType("StatusCode", str)

# issue / investigation events
STATUS_CODE_ISSUE_OPEN = StatusCode("open")
STATUS_CODE_ISSUE_CLOSED = StatusCode("closed")
STATUS_CODE_ISSUE_UPCOMING = StatusCode("upcoming")
# scheduledChange events
STATUS_CODE_SCHEDULED_CHANGE_UPCOMING = StatusCode("Upcoming")
STATUS_CODE_SCHEDULED_CHANGE_ONGOING = StatusCode("Ongoing")
STATUS_CODE_SCHEDULED_CHANGE_COMPLETED = StatusCode("Completed")
STATUS_CODE_UNDEFINED = StatusCode("-")

KNOWN_STATUS_CODES = frozenset({
    STATUS_CODE_ISSUE_OPEN,
    STATUS_CODE_ISSUE_CLOSED,
    STATUS_CODE_ISSUE_UPCOMING,
    STATUS_CODE_SCHEDULED_CHANGE_UPCOMING,
    STATUS_CODE_SCHEDULED_CHANGE_ONGOING,
    STATUS_CODE_SCHEDULED_CHANGE_COMPLETED,
    STATUS_CODE_UNDEFINED,
})


def _empty_metadata() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class EventDescriptionRow:
    """One localized description of a health event.

    ``latest_description`` is free text and usually carries embedded
    newlines and provider markup such as ``[RESOLVED]`` or timestamps.
    """

    language: str = ""
    latest_description: str = ""


@dataclass(frozen=True)
class AffectedEntity:
    """A resource affected by an account-specific event."""

    entity_value: str = ""
    last_updated_time: datetime | None = None
    status: str = ""


@dataclass(frozen=True)
class Detail:
    """Decoded ``detail`` payload of an AWS Health event.

    Reference:
    https://docs.aws.amazon.com/health/latest/ug/cloudwatch-events-health.html#aws-health-event-schema

    Every field mirrors one key of the JSON object; nothing is derived.
    Missing strings are ``""``, missing timestamps ``None`` and missing
    lists empty tuples. ``page`` and ``total_pages`` stay strings because
    the provider sends them as text.
    """

    event_arn: str = ""
    service: str = ""
    event_type_code: str = ""
    event_type_category: EventTypeCategory = EventTypeCategory("")
    event_scope_code: EventScopeCode = EventScopeCode("")
    communication_id: str = ""
    start_time: datetime | None = None
    end_time: datetime | None = None
    last_updated_time: datetime | None = None
    status_code: StatusCode = StatusCode("")
    event_region: str = ""
    event_description: tuple[EventDescriptionRow, ...] = ()
    event_metadata: Mapping[str, str] = field(default_factory=_empty_metadata)
    affected_entities: tuple[AffectedEntity, ...] = ()
    page: str = ""
    total_pages: str = ""
    affected_account: str = ""
