from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List

UNIT_BITS_PER_SECOND = "bits/sec"
UNIT_INTEGER = "integer"

_WORD_START = re.compile(r"(?<!\w)\w")


@dataclass(frozen=True)
class GraphMetric:
    name: str
    label: str
    stacked: bool = False


@dataclass(frozen=True)
class Graph:
    label: str
    unit: str
    metrics: List[GraphMetric] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "unit": self.unit,
            "metrics": [
                {"name": m.name, "label": m.label, "stacked": m.stacked}
                for m in self.metrics
            ],
        }


def label_prefix(prefix: str) -> str:
    """
    'dx-vif' -> 'Dx Vif', 'dx.vif' -> 'Dx.Vif'. Every letter that follows a
    non-word character is upper-cased, the rest is left alone; dashes then
    become spaces.
    """
    titled = _WORD_START.sub(lambda m: m.group(0).upper(), prefix)
    return titled.replace("-", " ")


def graph_definition(prefix: str) -> Dict[str, Graph]:
    label = label_prefix(prefix)
    return {
        "Bps": Graph(
            label=f"{label} bps",
            unit=UNIT_BITS_PER_SECOND,
            metrics=[
                GraphMetric("VirtualInterfaceBpsEgress", "bps out"),
                GraphMetric("VirtualInterfaceBpsIngress", "bps in"),
            ],
        ),
        "Pps": Graph(
            label=f"{label} pps",
            unit=UNIT_INTEGER,
            metrics=[
                GraphMetric("VirtualInterfacePpsEgress", "pps out"),
                GraphMetric("VirtualInterfacePpsIngress", "pps in"),
            ],
        ),
    }
