"""Requests built from command options for process scale and profiling tasks."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Optional, Sequence, Union

from .enums import (
    AsyncProfilerEventType,
    EBPFProfilingTargetType,
    EnumValue,
    JFREventType,
    MultiEnumValue,
)

_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE

_UNITS = {
    "ns": _NANOSECOND,
    "us": _MICROSECOND,
    "\u00b5s": _MICROSECOND,
    "\u03bcs": _MICROSECOND,
    "ms": _MILLISECOND,
    "s": _SECOND,
    "m": _MINUTE,
    "h": _HOUR,
}
_NUMBER = re.compile(r"([0-9]*)(\.([0-9]*))?")
_UNIT = re.compile(r"[^0-9.]*")
_MAX_MAGNITUDE = 1 << 63


def split_labels(text: str) -> list[str]:
    """Split comma-separated labels; an empty string gives no labels."""
    if text == "":
        return []
    return text.split(",")


def parse_go_duration(text: str) -> int:
    """Parse a duration such as ``1h30m`` or ``-1.5s`` into nanoseconds."""
    original = text
    negative = False
    if text and text[0] in "+-":
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return 0
    if text == "":
        raise ValueError(f'time: invalid duration "{original}"')

    total = 0
    while text:
        number = _NUMBER.match(text)
        whole, fraction = number.group(1), number.group(3)
        if not whole and not fraction:
            raise ValueError(f'time: invalid duration "{original}"')
        text = text[number.end():]

        unit = _UNIT.match(text).group(0)
        text = text[len(unit):]
        if unit == "":
            raise ValueError(f'time: missing unit in duration "{original}"')
        scale = _UNITS.get(unit)
        if scale is None:
            raise ValueError(f'time: unknown unit "{unit}" in duration "{original}"')

        value = Fraction(int(whole or "0"))
        if fraction:
            value += Fraction(int(fraction), 10 ** len(fraction))
        total += math.floor(value * scale)
        if total > _MAX_MAGNITUDE:
            raise ValueError(f'time: invalid duration "{original}"')

    if negative:
        return -total
    if total > _MAX_MAGNITUDE - 1:
        raise ValueError(f'time: invalid duration "{original}"')
    return total


def _whole_seconds(nanoseconds: int) -> int:
    seconds = abs(nanoseconds) // _SECOND
    return -seconds if nanoseconds < 0 else seconds


def _split_ids(ids: Union[str, Sequence[str]]) -> list[str]:
    if isinstance(ids, str):
        return ids.split(",")
    return list(ids)


# Async profiler ------------------------------------------------------------


@dataclass(frozen=True)
class AsyncProfilerTaskCreationRequest:
    """A request to start an async-profiler task on some instances."""

    service_id: str
    service_instance_ids: list[str]
    duration: int
    events: list[AsyncProfilerEventType]
    exec_args: Optional[str] = None


def build_async_task_creation(
    service_id: str,
    instance_ids: Union[str, Sequence[str]],
    duration: int,
    events: Union[str, Sequence[AsyncProfilerEventType]],
    exec_args: str = "",
) -> AsyncProfilerTaskCreationRequest:
    """Build an async-profiler task; events may be given as ``cpu,alloc``."""
    if isinstance(events, str):
        holder = MultiEnumValue(AsyncProfilerEventType)
        holder.set(events)
        selected = list(holder.selected or ())
    else:
        selected = list(events)
    return AsyncProfilerTaskCreationRequest(
        service_id=service_id,
        service_instance_ids=_split_ids(instance_ids),
        duration=duration,
        events=selected,
        exec_args=exec_args or None,
    )


@dataclass(frozen=True)
class AsyncProfilerTaskListRequest:
    """A query for async-profiler tasks of a service."""

    service_id: str
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    limit: Optional[int] = None


def build_async_task_list(
    service_id: str, start_time: int = 0, end_time: int = 0, limit: int = 0
) -> AsyncProfilerTaskListRequest:
    """Build a task list query; zero values mean the option was not given."""
    return AsyncProfilerTaskListRequest(
        service_id=service_id,
        start_time=start_time or None,
        end_time=end_time or None,
        limit=limit or None,
    )


@dataclass(frozen=True)
class AsyncProfilerAnalyzationRequest:
    """A query for the analysis of one event type of an async-profiler task."""

    task_id: str
    instance_ids: list[str]
    event_type: JFREventType


def build_async_analysis(
    task_id: str,
    instance_ids: Union[str, Sequence[str]],
    event: Union[str, JFREventType],
) -> AsyncProfilerAnalyzationRequest:
    """Build an analysis query; the event may be named case-insensitively."""
    if isinstance(event, JFREventType):
        event_type = event
    else:
        holder = EnumValue(JFREventType)
        holder.set(event)
        event_type = holder.selected
    return AsyncProfilerAnalyzationRequest(
        task_id=task_id,
        instance_ids=_split_ids(instance_ids),
        event_type=event_type,
    )


# eBPF fixed time task --------------------------------------------------------


@dataclass(frozen=True)
class FixedTimeTaskRequest:
    """A request to profile the processes of a service for a fixed time."""

    service_id: str
    process_labels: list[str] = field(default_factory=list)
    start_time: int = 0
    duration: int = 0
    target_type: EBPFProfilingTargetType = EBPFProfilingTargetType.ON_CPU


def build_fixed_time_task(
    service_id: str,
    labels: str,
    duration: str,
    start_time: int = 0,
    target_type: Union[str, EBPFProfilingTargetType] = EBPFProfilingTargetType.ON_CPU,
) -> FixedTimeTaskRequest:
    """Build a fixed time task; ``duration`` such as ``1m`` becomes whole seconds."""
    seconds = _whole_seconds(parse_go_duration(duration))
    if isinstance(target_type, EBPFProfilingTargetType):
        target = target_type
    else:
        holder = EnumValue(EBPFProfilingTargetType, default=EBPFProfilingTargetType.ON_CPU)
        holder.set(target_type)
        target = holder.selected
    return FixedTimeTaskRequest(
        service_id=service_id,
        process_labels=labels.split(","),
        start_time=start_time,
        duration=seconds,
        target_type=target,
    )