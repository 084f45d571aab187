from conftest import FTA_REPLY
from gensafe.diagram import FTA_STYLE_BLOCK, apply_fta_styling, diagram_node_ids, unresolved_node_ids
from gensafe.models import FTAReport


class TestStyling:
    def test_block_appended_verbatim(self):
        for source in ("flowchart TD\n    A([Top])", "", "not even a diagram"):
            styled = apply_fta_styling(source)
            assert styled.startswith(source)
            assert styled.endswith(FTA_STYLE_BLOCK)

    def test_block_contents(self):
        assert "classDef gate" in FTA_STYLE_BLOCK
        assert "class G1,G2,G3,G4,G5,G6 gate;" in FTA_STYLE_BLOCK
        assert FTA_STYLE_BLOCK.endswith("class A top;")


class TestNodeIds:
    def test_collects_declared_and_linked_ids(self):
        diagram = (
            "flowchart TD\n"
            "    A([Loss of braking])\n"
            "    G1{OR}\n"
            "    A --> G1\n"
            "    G1 --> B([Hydraulic leak])\n"
            "    G1 --> C[Pedal failure]\n"
            "    %% comment with Z\n"
            "    classDef gate fill:#000;\n"
            "    class G1 gate;"
        )
        assert diagram_node_ids(diagram) == ["A", "G1", "B", "C"]

    def test_labels_are_not_ids(self):
        assert diagram_node_ids("flowchart LR\n    X([Sensor AND Wiring]) --> Y{AND}") == ["X", "Y"]

    def test_unresolved(self):
        report = FTAReport.model_validate(FTA_REPLY)
        assert unresolved_node_ids(report) == []

        events = [e for e in FTA_REPLY["events"] if e["id"] != "C"]
        report = FTAReport.model_validate({**FTA_REPLY, "events": events})
        assert unresolved_node_ids(report) == ["C"]
