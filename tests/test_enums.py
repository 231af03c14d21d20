import pytest

from swctl.enums import (
    AsyncProfilerEventType,
    EBPFProfilingAnalyzeAggregateType,
    EBPFProfilingTargetType,
    EBPFProfilingTriggerType,
    EnumValue,
    EventType,
    JFREventType,
    MultiEnumValue,
    Order,
    Scope,
    Step,
)

ALL_TYPES = [
    Step,
    Scope,
    Order,
    EventType,
    EBPFProfilingTargetType,
    EBPFProfilingTriggerType,
    EBPFProfilingAnalyzeAggregateType,
    JFREventType,
    AsyncProfilerEventType,
]


def test_default_is_selected_initially():
    value = EnumValue(Step, default=Step.MINUTE)
    assert value.selected is Step.MINUTE
    assert str(value) == "MINUTE"


def test_no_default_gives_empty_text():
    value = EnumValue(JFREventType)
    assert str(value) == ""


@pytest.mark.parametrize("enum_type", ALL_TYPES)
def test_set_is_case_insensitive_for_every_member(enum_type):
    for member in enum_type:
        holder = EnumValue(enum_type)
        holder.set(member.value.lower())
        assert holder.selected is member
        holder.set(member.value.upper())
        assert holder.selected is member
        assert str(holder) == member.value


@pytest.mark.parametrize(
    "enum_type, prefix",
    [
        (Order, "allowed orders are "),
        (Scope, "allowed scopes are "),
        (Step, "allowed steps are "),
        (EventType, "allowed types are "),
        (EBPFProfilingTargetType, "allowed target type are "),
        (EBPFProfilingTriggerType, "allowed trigger type are "),
        (EBPFProfilingAnalyzeAggregateType, "allowed analysis aggregate type are "),
        (JFREventType, "allowed analysis aggregate type are "),
    ],
)
def test_unknown_value_raises_listing_all_members(enum_type, prefix):
    holder = EnumValue(enum_type)
    with pytest.raises(ValueError) as info:
        holder.set("no-such-value")
    message = str(info.value)
    assert message.startswith(prefix)
    assert message[len(prefix):].split(", ") == [m.value for m in enum_type]


def test_failed_set_keeps_previous_selection():
    holder = EnumValue(Order, default=Order.DES)
    with pytest.raises(ValueError):
        holder.set("sideways")
    assert holder.selected is Order.DES


def test_restricted_choices_reject_others():
    holder = EnumValue(Step, choices=(Step.HOUR,))
    with pytest.raises(ValueError):
        holder.set(Step.DAY.value)
    holder.set("hour")
    assert holder.selected is Step.HOUR


def test_scope_text_form():
    assert str(Scope.SERVICE_INSTANCE) == Scope.SERVICE_INSTANCE.value
    assert Scope("Service") is Scope.SERVICE


def test_multi_set_keeps_known_in_order():
    holder = MultiEnumValue(AsyncProfilerEventType)
    holder.set("cpu,bogus,alloc")
    assert holder.selected == [AsyncProfilerEventType.CPU, AsyncProfilerEventType.ALLOC]
    assert str(holder) == "CPU,ALLOC"


def test_multi_round_trip():
    holder = MultiEnumValue(AsyncProfilerEventType)
    members = list(AsyncProfilerEventType)
    holder.set(",".join(m.value.lower() for m in members))
    again = MultiEnumValue(AsyncProfilerEventType)
    again.set(str(holder))
    assert again.selected == members


def test_multi_all_unknown_raises():
    holder = MultiEnumValue(AsyncProfilerEventType, default=[AsyncProfilerEventType.WALL])
    with pytest.raises(ValueError, match="allowed analysis aggregate type are"):
        holder.set("x,y")
    assert holder.selected == [AsyncProfilerEventType.WALL]


def test_multi_empty_text():
    holder = MultiEnumValue(AsyncProfilerEventType)
    assert str(holder) == ""
    assert holder.selected == []