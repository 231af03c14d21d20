"""Continuous profiling policies and eBPF network sampling rules read from YAML files."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

import yaml


class ContinuousProfilingTargetType(str, Enum):
    """What a continuous profiling policy profiles."""

    ON_CPU = "ON_CPU"
    OFF_CPU = "OFF_CPU"
    NETWORK = "NETWORK"

    def __str__(self) -> str:
        return self.value


class ContinuousProfilingMonitorType(str, Enum):
    """What a continuous profiling checker watches."""

    PROCESS_CPU = "PROCESS_CPU"
    PROCESS_THREAD_COUNT = "PROCESS_THREAD_COUNT"
    SYSTEM_LOAD = "SYSTEM_LOAD"
    HTTP_ERROR_RATE = "HTTP_ERROR_RATE"
    HTTP_AVG_RESPONSE_TIME = "HTTP_AVG_RESPONSE_TIME"

    def __str__(self) -> str:
        return self.value


def _mapping(data: Any, what: str) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _sequence(data: Any, what: str) -> list:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"{what} must be a list, got {type(data).__name__}")
    return data


def _as_str(value: Any, what: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"{what} must be a scalar, got {type(value).__name__}")


def _as_int(value: Any, what: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    return value


def _as_optional_int(value: Any, what: str) -> Optional[int]:
    return None if value is None else _as_int(value, what)


def _as_optional_bool(value: Any, what: str) -> Optional[bool]:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValueError(f"{what} must be a boolean, got {value!r}")
    return value


def _as_optional_str(value: Any, what: str) -> Optional[str]:
    return None if value is None else _as_str(value, what)


def _read_yaml(path: Union[str, Path]) -> Any:
    text = Path(path).read_text(encoding="utf-8")
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid YAML in {path}: {exc}") from exc


# Continuous profiling policy ------------------------------------------------


@dataclass
class PolicyItem:
    """One checker of a policy target, as written in the config file."""

    type: str = ""
    threshold: str = ""
    period: int = 0
    count: int = 0
    uri_list: list[str] = field(default_factory=list)
    uri_regex: str = ""

    @classmethod
    def _from_dict(cls, data: Any) -> "PolicyItem":
        data = _mapping(data, "checker")
        return cls(
            type=_as_str(data.get("type"), "type"),
            threshold=_as_str(data.get("threshold"), "threshold"),
            period=_as_int(data.get("period"), "period"),
            count=_as_int(data.get("count"), "count"),
            uri_list=[_as_str(u, "uriList") for u in _sequence(data.get("uriList"), "uriList")],
            uri_regex=_as_str(data.get("uriRegex"), "uriRegex"),
        )


@dataclass
class PolicyTarget:
    """One target of the policy with its checkers, as written in the config file."""

    type: str = ""
    checkers: list[PolicyItem] = field(default_factory=list)

    @classmethod
    def _from_dict(cls, data: Any) -> "PolicyTarget":
        data = _mapping(data, "policy")
        return cls(
            type=_as_str(data.get("type"), "type"),
            checkers=[PolicyItem._from_dict(c) for c in _sequence(data.get("checkers"), "checkers")],
        )


@dataclass
class PolicyConfig:
    """The whole policy file: a list of targets under the ``policy`` key."""

    policies: list[PolicyTarget] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "PolicyConfig":
        """Build the config from parsed YAML; ``None`` gives an empty config."""
        data = _mapping(data, "policy config")
        return cls(
            policies=[PolicyTarget._from_dict(p) for p in _sequence(data.get("policy"), "policy")]
        )


@dataclass(frozen=True)
class PolicyItemCreation:
    """A checker as sent to the backend."""

    type: ContinuousProfilingMonitorType
    threshold: str
    period: int
    count: int
    uri_list: list[str] = field(default_factory=list)
    uri_regex: Optional[str] = None


@dataclass(frozen=True)
class PolicyTargetCreation:
    """A policy target as sent to the backend."""

    target_type: ContinuousProfilingTargetType
    check_items: list[PolicyItemCreation] = field(default_factory=list)


def load_policy_config(path: Union[str, Path]) -> PolicyConfig:
    """Read a policy config from a YAML file."""
    return PolicyConfig.from_dict(_read_yaml(path))


def _exact_member(enum_type, text: str):
    return next((m for m in enum_type if m.value == text), None)


def parse_policy_config(config: PolicyConfig) -> list[PolicyTargetCreation]:
    """Turn a policy config into backend requests; names must match exactly."""
    result = []
    for target in config.policies:
        target_type = _exact_member(ContinuousProfilingTargetType, target.type)
        if target_type is None:
            raise ValueError(f"cannot found the target: {target.type}")
        items = []
        for checker in target.checkers:
            monitor_type = _exact_member(ContinuousProfilingMonitorType, checker.type)
            if monitor_type is None:
                raise ValueError(f"cannot fount the monitor type: {checker.type}")
            items.append(
                PolicyItemCreation(
                    type=monitor_type,
                    threshold=checker.threshold,
                    period=checker.period,
                    count=checker.count,
                    uri_list=list(checker.uri_list),
                    uri_regex=checker.uri_regex or None,
                )
            )
        result.append(PolicyTargetCreation(target_type=target_type, check_items=items))
    return result


def parse_continuous_target(text: str) -> ContinuousProfilingTargetType:
    """Match a policy target type case-insensitively."""
    wanted = text.casefold()
    for member in ContinuousProfilingTargetType:
        if member.value.casefold() == wanted:
            return member
    raise ValueError(f"unknown target type: {text}")


# eBPF network sampling ------------------------------------------------------


@dataclass
class SamplingSetting:
    """How much of the request and response to collect, as written in the config file."""

    require_request: Optional[bool] = None
    max_request_size: Optional[int] = None
    require_response: Optional[bool] = None
    max_response_size: Optional[int] = None

    @classmethod
    def _from_dict(cls, data: Any) -> Optional["SamplingSetting"]:
        if data is None:
            return None
        data = _mapping(data, "setting")
        return cls(
            require_request=_as_optional_bool(data.get("require_request"), "require_request"),
            max_request_size=_as_optional_int(data.get("max_request_size"), "max_request_size"),
            require_response=_as_optional_bool(data.get("require_response"), "require_response"),
            max_response_size=_as_optional_int(data.get("max_response_size"), "max_response_size"),
        )


@dataclass
class SamplingRule:
    """One sampling rule, as written in the config file."""

    uri_pattern: Optional[str] = None
    min_duration: Optional[int] = None
    when_4xx: Optional[bool] = None
    when_5xx: Optional[bool] = None
    setting: Optional[SamplingSetting] = None

    @classmethod
    def _from_dict(cls, data: Any) -> "SamplingRule":
        data = _mapping(data, "sampling")
        return cls(
            uri_pattern=_as_optional_str(data.get("uri_pattern"), "uri_pattern"),
            min_duration=_as_optional_int(data.get("min_duration"), "min_duration"),
            when_4xx=_as_optional_bool(data.get("when_4xx"), "when_4xx"),
            when_5xx=_as_optional_bool(data.get("when_5xx"), "when_5xx"),
            setting=SamplingSetting._from_dict(data.get("setting")),
        )


@dataclass
class SamplingConfig:
    """The whole sampling file: a list of rules under the ``samplings`` key."""

    samplings: list[SamplingRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "SamplingConfig":
        """Build the config from parsed YAML; ``None`` gives an empty config."""
        data = _mapping(data, "sampling config")
        return cls(
            samplings=[SamplingRule._from_dict(s) for s in _sequence(data.get("samplings"), "samplings")]
        )


@dataclass(frozen=True)
class DataCollectingSettings:
    """Collecting settings as sent to the backend."""

    require_complete_request: bool
    max_request_size: Optional[int]
    require_complete_response: bool
    max_response_size: Optional[int]


@dataclass(frozen=True)
class NetworkSamplingRule:
    """A sampling rule as sent to the backend."""

    uri_regex: Optional[str]
    min_duration: Optional[int]
    when_4xx: bool
    when_5xx: bool
    settings: DataCollectingSettings


def load_sampling_config(path: Union[str, Path]) -> SamplingConfig:
    """Read a network sampling config from a YAML file."""
    return SamplingConfig.from_dict(_read_yaml(path))


def parse_network_sampling(config: Optional[SamplingConfig]) -> list[NetworkSamplingRule]:
    """Turn a sampling config into backend rules, checking the required fields."""
    if config is None:
        return []
    rules = []
    for conf in config.samplings:
        if conf.when_4xx is None:
            raise ValueError("the when_4xx is required")
        if conf.when_5xx is None:
            raise ValueError("the when_5xx is required")
        setting = conf.setting
        if setting is None:
            raise ValueError("the sampling settings is required")
        if setting.require_request is None:
            raise ValueError("the sampling request is required")
        if setting.require_response is None:
            raise ValueError("the sampling response is required")
        rules.append(
            NetworkSamplingRule(
                uri_regex=conf.uri_pattern,
                min_duration=conf.min_duration,
                when_4xx=conf.when_4xx,
                when_5xx=conf.when_5xx,
                settings=DataCollectingSettings(
                    require_complete_request=setting.require_request,
                    max_request_size=setting.max_request_size,
                    require_complete_response=setting.require_response,
                    max_response_size=setting.max_response_size,
                ),
            )
        )
    return rules