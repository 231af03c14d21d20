"""Enumerations accepted by command options, and option holders that parse them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, Sequence, Type, TypeVar


class _NamedEnum(str, Enum):
    """String enumeration whose text form is its value."""

    def __str__(self) -> str:
        return self.value


class Step(_NamedEnum):
    DAY = "DAY"
    HOUR = "HOUR"
    MINUTE = "MINUTE"
    SECOND = "SECOND"


class Scope(_NamedEnum):
    ALL = "All"
    SERVICE = "Service"
    SERVICE_INSTANCE = "ServiceInstance"
    ENDPOINT = "Endpoint"
    SERVICE_RELATION = "ServiceRelation"
    SERVICE_INSTANCE_RELATION = "ServiceInstanceRelation"
    ENDPOINT_RELATION = "EndpointRelation"
    PROCESS = "Process"
    PROCESS_RELATION = "ProcessRelation"


class Order(_NamedEnum):
    ASC = "ASC"
    DES = "DES"


class EventType(_NamedEnum):
    NORMAL = "Normal"
    ERROR = "Error"


class EBPFProfilingTargetType(_NamedEnum):
    ON_CPU = "ON_CPU"
    OFF_CPU = "OFF_CPU"
    NETWORK = "NETWORK"


class EBPFProfilingTriggerType(_NamedEnum):
    FIXED_TIME = "FIXED_TIME"
    CONTINUOUS_PROFILING = "CONTINUOUS_PROFILING"


class EBPFProfilingAnalyzeAggregateType(_NamedEnum):
    DURATION = "DURATION"
    COUNT = "COUNT"


class JFREventType(_NamedEnum):
    EXECUTION_SAMPLE = "EXECUTION_SAMPLE"
    LOCK = "LOCK"
    OBJECT_ALLOCATION_IN_NEW_TLAB = "OBJECT_ALLOCATION_IN_NEW_TLAB"
    OBJECT_ALLOCATION_OUTSIDE_TLAB = "OBJECT_ALLOCATION_OUTSIDE_TLAB"
    THREAD_PARK = "THREAD_PARK"
    JAVA_MONITOR_ENTER = "JAVA_MONITOR_ENTER"
    JAVA_MONITOR_WAIT = "JAVA_MONITOR_WAIT"
    PROFILER_LIVE_OBJECT = "PROFILER_LIVE_OBJECT"


class AsyncProfilerEventType(_NamedEnum):
    CPU = "CPU"
    WALL = "WALL"
    LOCK = "LOCK"
    ALLOC = "ALLOC"
    CTIMER = "CTIMER"
    ITIMER = "ITIMER"


_ALLOWED_NOUNS = {
    Step: "steps",
    Scope: "scopes",
    Order: "orders",
    EventType: "types",
    EBPFProfilingTargetType: "target type",
    EBPFProfilingTriggerType: "trigger type",
    EBPFProfilingAnalyzeAggregateType: "analysis aggregate type",
    JFREventType: "analysis aggregate type",
    AsyncProfilerEventType: "analysis aggregate type",
}

E = TypeVar("E", bound=_NamedEnum)


def _not_allowed(enum_type: Type[Enum]) -> ValueError:
    noun = _ALLOWED_NOUNS.get(enum_type, "values")
    allowed = ", ".join(member.value for member in enum_type)
    return ValueError(f"allowed {noun} are {allowed}")


def _match(choices: Sequence[E], text: str) -> Optional[E]:
    wanted = text.casefold()
    return next((c for c in choices if c.value.casefold() == wanted), None)


@dataclass
class EnumValue(Generic[E]):
    """A single-choice option value, matched case-insensitively."""

    enum_type: Type[E]
    default: Optional[E] = None
    choices: Sequence[E] = ()
    selected: Optional[E] = field(default=None)

    def __post_init__(self) -> None:
        if not self.choices:
            self.choices = tuple(self.enum_type)
        if self.selected is None:
            self.selected = self.default

    def set(self, value: str) -> None:
        """Select the choice named by ``value``; raise ValueError if none matches."""
        found = _match(self.choices, value)
        if found is None:
            raise _not_allowed(self.enum_type)
        self.selected = found

    def __str__(self) -> str:
        return "" if self.selected is None else self.selected.value


@dataclass
class MultiEnumValue(Generic[E]):
    """A comma-separated multi-choice option value."""

    enum_type: Type[E]
    default: Sequence[E] = ()
    choices: Sequence[E] = ()
    selected: Optional[list] = field(default=None)

    def __post_init__(self) -> None:
        if not self.choices:
            self.choices = tuple(self.enum_type)
        if self.selected is None:
            self.selected = list(self.default)

    def set(self, value: str) -> None:
        """Select every known choice in ``value``; raise ValueError if none is known."""
        found = [
            match
            for match in (_match(self.choices, part) for part in value.split(","))
            if match is not None
        ]
        if not found:
            raise _not_allowed(self.enum_type)
        self.selected = found

    def __str__(self) -> str:
        return ",".join(item.value for item in self.selected or ())