from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional

logger = logging.getLogger(__name__)

ValueType = Literal["static", "input"]
PriceMap = dict[str, float]

FILTER_NODE_TYPE = "filter"


@dataclass(frozen=True)
class Condition:
    """One filter predicate: a literal value or one bound to a runtime input."""

    value_type: ValueType = "static"
    value: Any = None
    input_label: Optional[str] = None
    field: Optional[str] = None
    operator: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Condition":
        value_type = raw.get("valueType") or "static"
        if value_type not in ("static", "input"):
            value_type = "static"
        label = raw.get("inputLabel")
        return cls(
            value_type=value_type,
            value=raw.get("value"),
            input_label=str(label) if label is not None else None,
            field=raw.get("field"),
            operator=raw.get("operator"),
        )


@dataclass(frozen=True)
class FilterNodeData:
    conditions: tuple[Optional[Condition], ...] = ()


@dataclass(frozen=True)
class PipelineNode:
    """A pipeline node.

    Only filter nodes carry typed data (``FilterNodeData``); every other node
    kind keeps its payload as an opaque mapping.
    """

    id: str
    type: str
    data: FilterNodeData | Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_filter(self) -> bool:
        return self.type == FILTER_NODE_TYPE and isinstance(self.data, FilterNodeData)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "PipelineNode":
        node_id = str(raw.get("id", ""))
        node_type = str(raw.get("type", ""))
        data = raw.get("data")

        if node_type != FILTER_NODE_TYPE:
            return cls(id=node_id, type=node_type, data=data if isinstance(data, Mapping) else {})

        raw_conditions = data.get("conditions") if isinstance(data, Mapping) else None
        if not isinstance(raw_conditions, (list, tuple)):
            if raw_conditions is not None or not isinstance(data, Mapping):
                logger.debug("Filter node %s has no usable conditions payload", node_id)
            raw_conditions = []

        # Non-mapping entries keep their slot so indices line up with the editor
        conditions = tuple(
            Condition.from_dict(c) if isinstance(c, Mapping) else None for c in raw_conditions
        )
        return cls(id=node_id, type=node_type, data=FilterNodeData(conditions=conditions))


@dataclass(frozen=True)
class PipelineGraph:
    nodes: tuple[PipelineNode, ...] = ()

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> "PipelineGraph":
        """Parse the editor's JSON graph; missing or mis-shaped parts become empty."""
        if not isinstance(raw, Mapping):
            return cls()
        raw_nodes = raw.get("nodes")
        if not isinstance(raw_nodes, (list, tuple)):
            return cls()
        return cls(
            nodes=tuple(PipelineNode.from_dict(n) for n in raw_nodes if isinstance(n, Mapping))
        )


@dataclass(frozen=True)
class PipelineInputDef:
    input_key: str  # f"{node_id}_{cond_index}", positional
    label: str
    default_value: str
    node_id: str
    cond_index: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "inputKey": self.input_key,
            "label": self.label,
            "defaultValue": self.default_value,
            "nodeId": self.node_id,
            "condIndex": self.cond_index,
        }


@dataclass(frozen=True)
class Transaction:
    instrument_symbol: Optional[str] = None
    option: Optional[Mapping[str, Any]] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Transaction":
        symbol = raw.get("instrumentSymbol")
        option = raw.get("option")
        return cls(
            instrument_symbol=str(symbol) if symbol else None,
            option=option if isinstance(option, Mapping) else None,
        )


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: float
    previous_close: Optional[float] = None
    change: Optional[float] = None
    change_percent: Optional[float] = None
