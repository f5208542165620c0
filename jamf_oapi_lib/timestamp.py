#!/usr/bin/env python3

import re
from datetime import datetime, timezone

from .exceptions import InvalidDataError


class Timestamp:
    """A point in time as used by 'date-time' attributes of the Jamf Pro API.

    The API sends and expects ISO 8601 strings in UTC, e.g.
    "2023-04-13T17:22:31.123Z". Timestamps may be built from such a string,
    from a datetime (naive ones are taken as UTC), or from a unix epoch in
    seconds or milliseconds.
    """

    # epochs larger than this are taken to be milliseconds
    MAX_EPOCH_SECONDS = 10_000_000_000

    def __init__(self, value):
        if isinstance(value, Timestamp):
            self.datetime = value.datetime
        elif isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            self.datetime = value.astimezone(timezone.utc)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            if value > self.MAX_EPOCH_SECONDS:
                value = value / 1000
            self.datetime = datetime.fromtimestamp(value, tz=timezone.utc)
        elif isinstance(value, str):
            self.datetime = self.parse_iso8601(value)
        else:
            raise InvalidDataError(f"Cannot make a Timestamp from {value!r}")

    @staticmethod
    def parse_iso8601(value):
        """convert an ISO 8601 string from the API into an aware UTC datetime"""
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        # fromisoformat wants exactly 3 or 6 fractional digits on older pythons
        text = re.sub(
            r"\.(\d+)", lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1
        )
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as error:
            raise InvalidDataError(
                f"'{value}' is not an ISO 8601 timestamp"
            ) from error
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    def to_jamf(self):
        """the string the API expects, millisecond precision, UTC"""
        stamp = self.datetime.strftime("%Y-%m-%dT%H:%M:%S")
        return f"{stamp}.{self.datetime.microsecond // 1000:03d}Z"

    def __eq__(self, other):
        if isinstance(other, Timestamp):
            return self.datetime == other.datetime
        if isinstance(other, datetime):
            return self == Timestamp(other)
        return NotImplemented

    def __hash__(self):
        return hash(self.datetime)

    def __lt__(self, other):
        return self.datetime < Timestamp(other).datetime

    def __repr__(self):
        return f"Timestamp('{self.to_jamf()}')"

    def __str__(self):
        return self.to_jamf()
