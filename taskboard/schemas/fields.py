"""Datetime fields shared by the task and user schemas.

The database stores naive UTC datetimes. On the wire every datetime carries
an explicit ``Z`` so browsers do not read it as local time.
"""

import re
from datetime import datetime, timezone

from marshmallow import fields


# Calendar date, optionally followed by a time and a UTC offset.
# Week dates (2030-W03-2) and ordinal dates (2030-015) are not due dates.
_DUE_DATE_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)


def to_utc_iso(value: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with a ``Z`` suffix.

    Naive values are taken to be UTC already.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return f"{value.isoformat()}Z"


class UTCDateTime(fields.DateTime):
    """Dump-side datetime that always states its UTC offset."""

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return to_utc_iso(value)


class DueDate(UTCDateTime):
    """Due date accepting ``YYYY-MM-DD`` or an ISO-8601 calendar datetime.

    Aware datetimes are normalized to UTC and stored naive.
    """

    default_error_messages = {"invalid": "Invalid date format"}

    def _deserialize(self, value, attr, data, **kwargs):
        if not isinstance(value, str) or not _DUE_DATE_RE.match(value.strip()):
            raise self.make_error("invalid")
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as err:
            raise self.make_error("invalid") from err
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed
