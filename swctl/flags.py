"""Command-line option definitions shared across commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from .enums import EnumValue, Scope, Step


class FlagKind(Enum):
    """The kind of value an option carries."""

    STRING = "string"
    INT = "int"
    INT64 = "int64"
    GENERIC = "generic"


@dataclass(frozen=True)
class Flag:
    """A single command-line option."""

    name: str
    usage: str = ""
    kind: FlagKind = FlagKind.STRING
    required: bool = False
    hidden: bool = False
    default: Any = None
    value_factory: Optional[Callable[[], Any]] = None

    def initial_value(self) -> Any:
        """Return a fresh value the option holds before it is given on the command line."""
        if self.kind is FlagKind.GENERIC:
            if self.value_factory is None:
                raise ValueError(f"generic flag {self.name!r} has no value factory")
            return self.value_factory()
        if self.default is not None:
            return self.default
        if self.kind is FlagKind.STRING:
            return ""
        return 0


def combine_flags(*args: Iterable[Flag]) -> list[Flag]:
    """Concatenate several flag sets into one list, keeping their order."""
    return [flag for flags in args for flag in flags]


START_END_USAGE = """"start" and "end" specify a time range during which the query is preformed,
		they can be absolute time like "2019-01-01 12", "2019-01-01 1213", or relative time (to the
		current time) like "-30m", "30m". They are both optional and their default values follow the rules below: 
		1. when "start" and "end" are both absent, "start = now - 30 minutes" and "end = now", 
		namely past 30 minutes; 
		2. when "start" and "end" are both present, they are aligned to the same precision by 
		truncating the more precise one, e.g. if "start = 2019-01-01 1234, end = 2019-01-01 18", 
		then "start" is truncated (because it's more precise) to "2019-01-01 12", and "end = 2019-01-01 18"; 
		3. when "start" is absent and "end" is present, will determine the precision of "end" 
		and then use the precision to calculate "start" (minus 30 units), e.g. "end = 2019-11-09 1234", 
		the precision is "MINUTE",  so "start = end - 30 minutes = 2019-11-09 1204", 
		and if "end = 2019-11-09 12", the precision is "HOUR", so "start = end - 30HOUR = 2019-11-08 06"; 
		4. when "start" is present and "end" is absent, will determine the precision of "start" 
		and then use the precision to calculate "end" (plus 30 units), e.g. "start = 2019-11-09 1204", 
		the precision is "MINUTE", so "end = start + 30 minutes = 2019-11-09 1234", 
		and if "start = 2019-11-08 06", the precision is "HOUR", so "end = start + 30HOUR = 2019-11-09 12".
		Examples:
		1. Query the metrics from 20 minutes ago to 10 minutes ago
		$ swctl metrics linear --name=service_resp_time --service-name business-zone::projectB --start "-20m" --end "-10m"
		2. Query the metrics from 1 hour ago to 10 minutes ago
		$ swctl metrics linear --name=service_resp_time --service-name business-zone::projectB --start "-1h" --end "-10m"
		3. Query the metrics from 1 hour ago to now
		$ swctl metrics linear --name=service_resp_time --service-name business-zone::projectB --start "-1h" --end "0m"
		4. Query the metrics from "2021-10-26 1047" to "2021-10-26 1127"
		$ swctl metrics linear --name=service_resp_time --service-name business-zone::projectB --start "2021-10-26 1047" --end "2021-10-26 1127\""""


def _step_value() -> EnumValue:
    return EnumValue(Step, default=Step.MINUTE)


def _scope_value() -> EnumValue:
    return EnumValue(Scope, default=Scope.SERVICE)


DURATION_FLAGS: tuple[Flag, ...] = (
    Flag(name="start", usage=START_END_USAGE),
    Flag(name="end", usage='end time of the query duration. Check the usage of "start"'),
    Flag(
        name="step",
        usage="time step between start time and end time, should be one of SECOND, MINUTE, HOUR, DAY",
        kind=FlagKind.GENERIC,
        value_factory=_step_value,
    ),
    Flag(name="duration-type", usage="the type of duration", hidden=True),
)

SERVICE_FLAGS: tuple[Flag, ...] = (
    Flag(
        name="service-id",
        usage="`service id`, if you don't have service id, use `--service-name` instead",
    ),
    Flag(
        name="service-name",
        usage="`service name`, if you already have service id, prefer to use `--service-id`",
    ),
)

SERVICE_RELATION_FLAGS: tuple[Flag, ...] = SERVICE_FLAGS + (
    Flag(
        name="dest-service-id",
        usage="`destination` service id, if you don't have service id, use `--dest-service-name` instead",
    ),
    Flag(
        name="dest-service-name",
        usage="`destination` service name, if you already have service id, prefer to use `--dest-service-id`",
    ),
)

_ENDPOINT_ONLY_FLAGS: tuple[Flag, ...] = (
    Flag(
        name="endpoint-id",
        usage="`endpoint id`, if you don't have endpoint id, use `--endpoint-name` instead",
    ),
    Flag(
        name="endpoint-name",
        usage="`endpoint name`, if you already have endpoint id, prefer to use `--endpoint-id`",
    ),
)

# The endpoint level requires the service level by default.
ENDPOINT_FLAGS: tuple[Flag, ...] = SERVICE_FLAGS + _ENDPOINT_ONLY_FLAGS

ENDPOINT_RELATION_FLAGS: tuple[Flag, ...] = (
    _ENDPOINT_ONLY_FLAGS
    + SERVICE_RELATION_FLAGS
    + (
        Flag(
            name="dest-endpoint-id",
            usage="`destination` service endpoint id, if you don't have service endpoint id, "
            "use `--dest-endpoint-name` instead",
        ),
        Flag(
            name="dest-endpoint-name",
            usage="`destination` service endpoint name, if you already have endpoint id, "
            "prefer to use `--dest-endpoint-id`",
        ),
    )
)

INSTANCE_FLAGS: tuple[Flag, ...] = (
    Flag(
        name="instance-id",
        usage="`instance id`, if you don't have instance id, use `--instance-name` instead",
    ),
    Flag(
        name="instance-name",
        usage="`instance name`, if you already have instance id, prefer to use `--instance-id`",
    ),
)

INSTANCE_RELATION_FLAGS: tuple[Flag, ...] = INSTANCE_FLAGS + (
    Flag(
        name="dest-instance-id",
        usage="`destination` instance id, if you don't have instance id, use `--dest-instance-name` instead",
    ),
    Flag(
        name="dest-instance-name",
        usage="`destination` instance name, if you already have instance id, prefer to use `--dest-instance-id`",
    ),
)

INSTANCE_LIST_FLAGS: tuple[Flag, ...] = (
    Flag(
        name="instance-id-list",
        usage="`instance id list`, if you don't have instance id list, use `--instances-name` instead",
    ),
    Flag(
        name="instance-name-list",
        usage="`instance name list`, if you already have instance id list, prefer to use `--instances-id`",
    ),
)

METRICS_FLAGS: tuple[Flag, ...] = (
    Flag(
        name="name",
        usage="`metrics` name, which should be defined in OAL files",
        required=True,
    ),
    Flag(
        name="scope",
        usage="the `scope` of the metrics entity",
        kind=FlagKind.GENERIC,
        value_factory=_scope_value,
    ),
)

PROCESS_FLAGS: tuple[Flag, ...] = (
    Flag(
        name="process-id",
        usage="`process id`, if you don't have process id, use `--process-name` instead",
    ),
    Flag(name="process-name", usage="`process name`"),
)

PROCESS_RELATION_FLAGS: tuple[Flag, ...] = PROCESS_FLAGS + (
    Flag(name="dest-process-name", usage="`destination` process name"),
)