"""Pipeline inputs: user-editable values bound to filter conditions.

A condition whose value type is ``"input"`` is exposed on the strategy canvas as
an editable field. Each one is identified by ``<node id>_<condition index>``;
the key is positional, so reordering or inserting conditions changes it.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from strategy_core.types import FilterNodeData, PipelineGraph, PipelineInputDef

GraphLike = Union[PipelineGraph, Mapping[str, Any], None]


def format_value(value: Any) -> str:
    """Render a condition value the way the editor displays it (e.g. "true", "10")."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_graph(graph: GraphLike) -> PipelineGraph:
    if isinstance(graph, PipelineGraph):
        return graph
    return PipelineGraph.from_dict(graph)


def extract_inputs(graph: GraphLike) -> list[PipelineInputDef]:
    """Return one input definition per input-bound filter condition.

    Ordered by node, then by condition index within the node. Accepts a parsed
    ``PipelineGraph``, the raw editor JSON, or ``None``.
    """
    inputs: list[PipelineInputDef] = []

    for node in _as_graph(graph).nodes:
        if not node.is_filter:
            continue
        data: FilterNodeData = node.data  # type: ignore[assignment]
        for index, condition in enumerate(data.conditions):
            if condition is None or condition.value_type != "input":
                continue
            inputs.append(
                PipelineInputDef(
                    input_key=f"{node.id}_{index}",
                    label=condition.input_label
                    if condition.input_label is not None
                    else f"Filter {index + 1}",
                    default_value=format_value(condition.value),
                    node_id=node.id,
                    cond_index=index,
                )
            )

    return inputs


def resolve_input_values(
    inputs: list[PipelineInputDef],
    input_values: Optional[Mapping[str, Any]] = None,
) -> dict[str, str]:
    """Effective value per input key: the user's value if set, else the default.

    Values stored under keys that no longer match an input are ignored.
    """
    values = input_values or {}
    resolved: dict[str, str] = {}
    for inp in inputs:
        raw = values.get(inp.input_key)
        resolved[inp.input_key] = format_value(raw) if raw is not None else inp.default_value
    return resolved
