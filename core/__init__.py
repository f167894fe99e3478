from core.decoder import decode_detail
from core.envelope import Envelope, parse_detail, parse_envelope
from core.errors import (
    DecodeError,
    EnvelopeError,
    JSONSyntaxError,
    MalformedTimestampError,
    SchemaMismatchError,
)
from core.timestamp import format_health_time, parse_health_time

__all__ = [
    "DecodeError",
    "Envelope",
    "EnvelopeError",
    "JSONSyntaxError",
    "MalformedTimestampError",
    "SchemaMismatchError",
    "decode_detail",
    "format_health_time",
    "parse_detail",
    "parse_envelope",
    "parse_health_time",
]
