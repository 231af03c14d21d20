import pytest

from swctl.enums import EnumValue, Scope, Step
from swctl.flags import (
    DURATION_FLAGS,
    ENDPOINT_FLAGS,
    ENDPOINT_RELATION_FLAGS,
    INSTANCE_FLAGS,
    INSTANCE_LIST_FLAGS,
    INSTANCE_RELATION_FLAGS,
    METRICS_FLAGS,
    PROCESS_FLAGS,
    PROCESS_RELATION_FLAGS,
    SERVICE_FLAGS,
    SERVICE_RELATION_FLAGS,
    START_END_USAGE,
    Flag,
    FlagKind,
    combine_flags,
)


def _names(flags):
    return [flag.name for flag in flags]


def _by_name(flags, name):
    return next(flag for flag in flags if flag.name == name)


def test_combine_flags_keeps_order():
    combined = combine_flags(SERVICE_FLAGS, INSTANCE_FLAGS)
    assert _names(combined) == ["service-id", "service-name", "instance-id", "instance-name"]


def test_combine_flags_empty():
    assert combine_flags() == []


def test_combine_flags_length_is_sum():
    combined = combine_flags(DURATION_FLAGS, METRICS_FLAGS, PROCESS_RELATION_FLAGS)
    assert len(combined) == len(DURATION_FLAGS) + len(METRICS_FLAGS) + len(PROCESS_RELATION_FLAGS)


def test_duration_flags_names():
    combined = combine_flags(DURATION_FLAGS)
    assert _names(combined) == ["start", "end", "step", "duration-type"]


def test_duration_type_is_hidden():
    combined = combine_flags(DURATION_FLAGS)
    assert _by_name(combined, "duration-type").hidden is True
    assert _by_name(combined, "start").hidden is False


def test_step_default_is_minute():
    step = _by_name(combine_flags(DURATION_FLAGS), "step")
    value = step.initial_value()
    assert value.selected is Step.MINUTE
    assert str(value) == "MINUTE"


def test_step_initial_value_is_fresh_each_time():
    step = _by_name(combine_flags(DURATION_FLAGS), "step")
    first = step.initial_value()
    first.set("hour")
    second = step.initial_value()
    assert first.selected is Step.HOUR
    assert second.selected is Step.MINUTE


def test_step_rejects_unknown():
    step = _by_name(combine_flags(DURATION_FLAGS), "step")
    value = step.initial_value()
    with pytest.raises(ValueError, match="allowed steps are"):
        value.set("WEEK")


def test_start_usage_mentions_default_window():
    start = _by_name(combine_flags(DURATION_FLAGS), "start")
    assert "past 30 minutes" in start.usage
    assert start.usage == START_END_USAGE


def test_string_initial_value_is_empty():
    start = _by_name(combine_flags(DURATION_FLAGS), "start")
    assert start.initial_value() == ""


def test_int_initial_value_is_zero():
    assert Flag(name="duration", kind=FlagKind.INT).initial_value() == 0


def test_explicit_default_is_returned():
    assert Flag(name="order", default="duration").initial_value() == "duration"


def test_generic_without_factory_raises():
    with pytest.raises(ValueError):
        Flag(name="broken", kind=FlagKind.GENERIC).initial_value()


def test_metrics_flags():
    combined = combine_flags(METRICS_FLAGS)
    name = _by_name(combined, "name")
    assert name.required is True
    scope = _by_name(combined, "scope").initial_value()
    assert scope.selected is Scope.SERVICE
    scope.set("all")
    assert scope.selected is Scope.ALL


def test_endpoint_flags_include_service_flags():
    assert _names(combine_flags(ENDPOINT_FLAGS)) == [
        "service-id",
        "service-name",
        "endpoint-id",
        "endpoint-name",
    ]


def test_endpoint_relation_flags_order():
    assert _names(combine_flags(ENDPOINT_RELATION_FLAGS)) == [
        "endpoint-id",
        "endpoint-name",
        "service-id",
        "service-name",
        "dest-service-id",
        "dest-service-name",
        "dest-endpoint-id",
        "dest-endpoint-name",
    ]


def test_service_relation_extends_service():
    combined = combine_flags(SERVICE_RELATION_FLAGS)
    assert combined[: len(SERVICE_FLAGS)] == SERVICE_FLAGS
    assert _names(combined)[2:] == ["dest-service-id", "dest-service-name"]


def test_instance_relation_extends_instance():
    combined = combine_flags(INSTANCE_RELATION_FLAGS)
    assert combined[: len(INSTANCE_FLAGS)] == INSTANCE_FLAGS
    assert _names(combined)[2:] == ["dest-instance-id", "dest-instance-name"]


def test_instance_list_flags():
    assert _names(combine_flags(INSTANCE_LIST_FLAGS)) == ["instance-id-list", "instance-name-list"]


def test_process_relation_flags():
    combined = combine_flags(PROCESS_RELATION_FLAGS)
    assert _names(combined) == ["process-id", "process-name", "dest-process-name"]
    assert combined[:2] == PROCESS_FLAGS


def test_entity_flags_are_optional():
    combined = combine_flags(
        SERVICE_RELATION_FLAGS,
        INSTANCE_RELATION_FLAGS,
        ENDPOINT_RELATION_FLAGS,
        PROCESS_RELATION_FLAGS,
        INSTANCE_LIST_FLAGS,
    )
    assert all(not flag.required for flag in combined)


def test_generic_flags_produce_enum_values():
    combined = combine_flags(DURATION_FLAGS, METRICS_FLAGS)
    kinds = {flag.name: flag.kind for flag in combined}
    assert kinds["step"] is FlagKind.GENERIC
    assert kinds["scope"] is FlagKind.GENERIC
    assert isinstance(_by_name(combined, "scope").initial_value(), EnumValue)
    assert kinds["name"] is FlagKind.STRING