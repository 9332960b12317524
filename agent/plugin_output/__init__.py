from .graphs import Graph, GraphMetric, graph_definition, label_prefix
from .helper import PluginHelper, is_meta_request

__all__ = [
    "Graph",
    "GraphMetric",
    "PluginHelper",
    "graph_definition",
    "is_meta_request",
    "label_prefix",
]
