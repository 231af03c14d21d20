# swctl

This package provides the building blocks for a command line client that queries an
observability backend. It includes enumerated option values, reusable flag
sets, parsers that turn option text into query conditions, and builders for
profiling requests.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `swctl.enums`

This module holds the enumerations that options accept: `Step`, `Scope`, `Order`, `EventType`,
`EBPFProfilingTargetType`, `EBPFProfilingTriggerType`,
`EBPFProfilingAnalyzeAggregateType`, `JFREventType` and
`AsyncProfilerEventType`. The text form of each member is its value.

- `EnumValue(enum_type, default=None, choices=())` holds one selected member.
  `set(text)` matches the text against the choices without regard to case.
  If nothing matches, it raises `ValueError` with a message such as
  `allowed steps are DAY, HOUR, MINUTE, SECOND`. `str()` gives the selected
  value, or an empty string when nothing is selected.
- `MultiEnumValue(enum_type, default=(), choices=())` holds several members.
  `set("cpu,alloc")` keeps every part that matches and skips the parts that
  do not. It raises `ValueError` only when no part matches. `str()` joins the
  selection with commas.

### `swctl.flags`

- `Flag` describes one option: its name, usage text, `FlagKind`, and whether
  it is required or hidden. It also carries a default or a value factory.
  `Flag.initial_value()` returns a value for an option that was not given.
  For a generic flag this is a fresh value built by the factory. For a string
  flag it is `""` and for an integer flag it is `0`, unless the flag has a
  default.
- `combine_flags(*flag_sets)` concatenates flag sets into one list and keeps
  their order.
- The shared flag sets are `DURATION_FLAGS`, `SERVICE_FLAGS`,
  `SERVICE_RELATION_FLAGS`, `ENDPOINT_FLAGS`, `ENDPOINT_RELATION_FLAGS`,
  `INSTANCE_FLAGS`, `INSTANCE_RELATION_FLAGS`, `INSTANCE_LIST_FLAGS`,
  `METRICS_FLAGS`, `PROCESS_FLAGS` and `PROCESS_RELATION_FLAGS`.
  The `step` flag defaults to `Step.MINUTE` and the `scope` flag defaults to
  `Scope.SERVICE`.

### `swctl.conditions`

- `parse_tags("k1=v1,k2=v2")` returns a list of `SpanTag`. An empty string
  gives `None`, and an item without `=` raises `ValueError`.
- `parse_query_order("duration" | "startTime")` returns a `QueryOrder`. Any
  other text raises `ValueError`.
- `parse_time_ranges("1-2,3-4")` returns a list of `TimeRange`. The bounds
  are 64-bit integers. An empty string gives `None`.
- `parse_segment_queries(segment_ids, time_ranges)` returns one
  `SegmentQuery` for every segment id within every time range.
- `parse_label_mapping(labels, relabels)` maps each label to the relabel in
  the same position. It raises `ValueError` in two cases: when relabels are
  given without labels, and when the two lists differ in length.

### `swctl.log`

`get_logger()` returns the shared `swctl` logger. The logger is set up on
first use and writes lines such as `level=info msg=hello` to standard output,
with no timestamps.

### `swctl.policy`

- **Continuous profiling.** `load_policy_config(path)` reads a YAML file into
  a `PolicyConfig`, taking the targets from its `policy` key.
  `parse_policy_config(config)` turns the config into a list of
  `PolicyTargetCreation`. Target and monitor type names must match
  `ContinuousProfilingTargetType` and `ContinuousProfilingMonitorType`
  exactly, including case. `parse_continuous_target(text)` matches a target
  type without regard to case.
- **Network sampling.** `load_sampling_config(path)` reads a YAML file into a
  `SamplingConfig`, taking the rules from its `samplings` key.
  `parse_network_sampling(config)` builds a list of `NetworkSamplingRule`. It
  raises `ValueError` when any of these is missing: `when_4xx`, `when_5xx`,
  `setting`, `require_request` or `require_response`.

### `swctl.requests`

- `split_labels(text)` splits comma-separated labels. An empty string gives
  an empty list.
- `parse_go_duration(text)` parses durations such as `"1h30m"`, `"-1.5s"` or
  `"300ms"` into nanoseconds.
- `build_async_task_creation`, `build_async_task_list` and
  `build_async_analysis` build async-profiler requests. Event names may be
  given as text and are matched without regard to case. In a task list
  request, zero values become `None`.
- `build_fixed_time_task(service_id, labels, duration, start_time=0,
  target_type=EBPFProfilingTargetType.ON_CPU)` builds a
  `FixedTimeTaskRequest`. The duration text becomes whole seconds.

## Example

```python
from swctl.enums import EnumValue, Step
from swctl.conditions import parse_tags, parse_time_ranges
from swctl.requests import build_fixed_time_task

step = EnumValue(Step, default=Step.MINUTE)
step.set("hour")
print(step)                       # HOUR

tags = parse_tags("http.method=GET,status=200")
ranges = parse_time_ranges("1648020042869-1648020100764")

task = build_fixed_time_task("service-id", "l1,l2", "1m")
print(task.duration)              # 60
```

Loading a continuous profiling policy:

```python
from swctl.policy import load_policy_config, parse_policy_config

targets = parse_policy_config(load_policy_config("policy.yaml"))
```

## What this package does not do

The package prepares options, conditions and requests, and stops there. It
has no command line program, and it does not connect to a backend or send
any queries. It does not display results either. To run queries, pass the
objects it builds to your own client code.