"""Parsing of query conditions given as compact strings on the command line."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class SpanTag:
    """A key/value tag a trace is filtered by."""

    key: str
    value: str


def parse_tags(text: str) -> Optional[list[SpanTag]]:
    """Parse ``key=value,key=value`` into tags; an empty string gives ``None``."""
    if text == "":
        return None
    tags = []
    for item in text.split(","):
        parts = item.split("=")
        if len(parts) < 2:
            raise ValueError(f"invalid tag {item!r}, must be in form of key=value")
        tags.append(SpanTag(key=parts[0], value=parts[1]))
    return tags


class QueryOrder(str, Enum):
    """The order in which listed traces are returned."""

    BY_START_TIME = "BY_START_TIME"
    BY_DURATION = "BY_DURATION"

    def __str__(self) -> str:
        return self.value


_QUERY_ORDERS = {
    "duration": QueryOrder.BY_DURATION,
    "startTime": QueryOrder.BY_START_TIME,
}


def parse_query_order(text: str) -> QueryOrder:
    """Map ``duration`` or ``startTime`` to a trace query order."""
    try:
        return _QUERY_ORDERS[text]
    except KeyError:
        raise ValueError(
            f'invalid order {text}, must be one of "duration" or "startTime"'
        ) from None


@dataclass(frozen=True)
class TimeRange:
    """A time range in milliseconds."""

    start: int
    end: int


def _parse_int64(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r} is not an integer")
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return number


def parse_time_ranges(text: str) -> Optional[list[TimeRange]]:
    """Parse ``start-end,start-end`` into time ranges; an empty string gives ``None``."""
    if text == "":
        return None
    ranges = []
    for item in text.split(","):
        parts = item.split("-")
        if len(parts) < 2:
            raise ValueError(f"invalid time range {item!r}, must be in form of start-end")
        ranges.append(TimeRange(start=_parse_int64(parts[0]), end=_parse_int64(parts[1])))
    return ranges


@dataclass(frozen=True)
class SegmentQuery:
    """A profiled segment together with the time range to analyze in it."""

    segment_id: str
    time_range: TimeRange


def parse_segment_queries(segment_ids: str, time_ranges: str) -> Optional[list[SegmentQuery]]:
    """Pair every time range with every segment id, range by range.

    Returns ``None`` when no time ranges are given.
    """
    ranges = parse_time_ranges(time_ranges)
    if ranges is None:
        return None
    ids = segment_ids.split(",")
    return [SegmentQuery(segment_id=sid, time_range=r) for r in ranges for sid in ids]


def parse_label_mapping(labels: str, relabels: str) -> dict[str, str]:
    """Map each of the comma-separated ``labels`` to the matching ``relabels`` entry."""
    label_list = labels.split(",")
    relabel_list = relabels.split(",")
    if labels == "" and relabels != "":
        raise ValueError('"--labels" cannot be empty when "--relabels" is given')
    if labels != "" and relabels != "" and len(label_list) != len(relabel_list):
        raise ValueError(
            '"--labels" and "--relabels" must be in same size if both specified, '
            f"but was {len(label_list)} != {len(relabel_list)}"
        )
    if relabels == "":
        return {}
    return dict(zip(label_list, relabel_list))