"""
Tests for graph definitions and Mackerel plugin output.
"""

import io
import json

from agent.plugin_output import PluginHelper, graph_definition, label_prefix

REPORT = {
    "VirtualInterfaceBpsEgress": 100.0,
    "VirtualInterfaceBpsIngress": 250.5,
    "VirtualInterfacePpsEgress": 12.0,
    "VirtualInterfacePpsIngress": 0.0,
}


class TestGraphDefinition:

    def test_two_groups_with_two_metrics_each(self):
        graphs = graph_definition("DxVif")

        assert sorted(graphs) == ["Bps", "Pps"]
        assert [m.name for m in graphs["Bps"].metrics] == [
            "VirtualInterfaceBpsEgress",
            "VirtualInterfaceBpsIngress",
        ]
        assert [m.label for m in graphs["Pps"].metrics] == ["pps out", "pps in"]
        assert graphs["Bps"].unit == "bits/sec"
        assert graphs["Pps"].unit == "integer"

    def test_labels_use_prefix(self):
        graphs = graph_definition("dx-vif")
        assert graphs["Bps"].label == "Dx Vif bps"
        assert graphs["Pps"].label == "Dx Vif pps"

    def test_label_prefix_keeps_inner_case(self):
        assert label_prefix("DxVif") == "DxVif"
        assert label_prefix("tokyo-dxVif") == "Tokyo DxVif"

    def test_label_prefix_capitalises_after_any_separator(self):
        assert label_prefix("dx.vif") == "Dx.Vif"
        assert label_prefix("dx vif/tokyo") == "Dx Vif/Tokyo"
        assert label_prefix("dx_vif") == "Dx_vif"


class TestPluginHelper:

    def helper(self, report=None):
        return PluginHelper("DxVif", graph_definition("DxVif"), lambda: dict(report or REPORT))

    def test_output_values_lines(self):
        stream = io.StringIO()

        written = self.helper().output_values(stream, now=1714564800)

        assert written == 4
        assert stream.getvalue().splitlines() == [
            "DxVif.Bps.VirtualInterfaceBpsEgress\t100.000000\t1714564800",
            "DxVif.Bps.VirtualInterfaceBpsIngress\t250.500000\t1714564800",
            "DxVif.Pps.VirtualInterfacePpsEgress\t12.000000\t1714564800",
            "DxVif.Pps.VirtualInterfacePpsIngress\t0.000000\t1714564800",
        ]

    def test_missing_metric_is_skipped(self):
        stream = io.StringIO()
        report = {"VirtualInterfaceBpsEgress": 1.0}

        written = PluginHelper("DxVif", graph_definition("DxVif"), lambda: report).output_values(stream, now=0)

        assert written == 1
        assert stream.getvalue().startswith("DxVif.Bps.VirtualInterfaceBpsEgress\t")

    def test_output_definitions(self):
        stream = io.StringIO()

        self.helper().output_definitions(stream)

        header, body = stream.getvalue().splitlines()
        assert header == "# mackerel-agent-plugin"
        graphs = json.loads(body)["graphs"]
        assert sorted(graphs) == ["DxVif.Bps", "DxVif.Pps"]
        assert graphs["DxVif.Bps"]["metrics"][0] == {
            "name": "VirtualInterfaceBpsEgress",
            "label": "bps out",
            "stacked": False,
        }

    def test_run_prints_definitions_in_meta_mode(self, monkeypatch):
        monkeypatch.setenv("MACKEREL_AGENT_PLUGIN_META", "1")
        stream = io.StringIO()

        self.helper().run(stream)

        assert stream.getvalue().startswith("# mackerel-agent-plugin\n")

    def test_any_non_empty_meta_value_selects_definitions(self, monkeypatch):
        monkeypatch.setenv("MACKEREL_AGENT_PLUGIN_META", "true")
        stream = io.StringIO()

        self.helper().run(stream)

        assert stream.getvalue().startswith("# mackerel-agent-plugin\n")

    def test_empty_meta_value_selects_values(self, monkeypatch):
        monkeypatch.setenv("MACKEREL_AGENT_PLUGIN_META", "")
        stream = io.StringIO()

        self.helper().run(stream)

        assert not stream.getvalue().startswith("#")

    def test_run_prints_values_otherwise(self):
        stream = io.StringIO()

        self.helper().run(stream)

        assert len(stream.getvalue().splitlines()) == 4
