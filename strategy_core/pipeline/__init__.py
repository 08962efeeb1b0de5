"""Pipeline graph helpers."""

from strategy_core.pipeline.inputs import extract_inputs, resolve_input_values

__all__ = ["extract_inputs", "resolve_input_values"]
