from __future__ import annotations

import json
import os
import sys
import time
from typing import Callable, Dict, Mapping, Optional, TextIO

from common.utils.logging_setup import setup_logger

from .graphs import Graph

logger = setup_logger(__name__)

ENV_PLUGIN_META = "MACKEREL_AGENT_PLUGIN_META"
META_HEADER = "# mackerel-agent-plugin"


def is_meta_request() -> bool:
    return bool(os.getenv(ENV_PLUGIN_META))


class PluginHelper:
    """
    Prints graph definitions or metric values in the Mackerel agent plugin
    format. Values are written as ``<prefix>.<graph>.<metric>\\t<value>\\t<epoch>``.
    """

    def __init__(
        self,
        prefix: str,
        graphs: Mapping[str, Graph],
        fetch: Callable[[], Dict[str, float]],
    ) -> None:
        self._prefix = prefix
        self._graphs = graphs
        self._fetch = fetch

    def graph_name(self, key: str) -> str:
        return f"{self._prefix}.{key}" if key else self._prefix

    def output_definitions(self, stream: Optional[TextIO] = None) -> None:
        stream = stream or sys.stdout
        payload = {
            "graphs": {
                self.graph_name(key): graph.to_dict()
                for key, graph in self._graphs.items()
            }
        }
        stream.write(META_HEADER + "\n")
        stream.write(json.dumps(payload) + "\n")

    def output_values(
        self, stream: Optional[TextIO] = None, now: Optional[float] = None
    ) -> int:
        """Returns the number of lines written."""
        stream = stream or sys.stdout
        epoch = int(now if now is not None else time.time())
        stat = self._fetch()

        written = 0
        for key, graph in self._graphs.items():
            for metric in graph.metrics:
                if metric.name not in stat:
                    logger.debug("No value for %s, skipped.", metric.name)
                    continue
                name = f"{self.graph_name(key)}.{metric.name}"
                stream.write(f"{name}\t{float(stat[metric.name]):f}\t{epoch}\n")
                written += 1
        return written

    def run(self, stream: Optional[TextIO] = None) -> None:
        if is_meta_request():
            self.output_definitions(stream)
        else:
            self.output_values(stream)
