from gensafe.models import StructuredDescription
from gensafe.prompts import (
    build_fmeca_prompt,
    build_fta_prompt,
    build_structure_prompt,
    describe_system,
)


class TestDescribeSystem:
    def test_structured_lists_components_in_order(self, structured_desc):
        text = describe_system(structured_desc)
        assert text.splitlines()[0] == "System: Automotive Brake System"
        assert (
            "Components: Brake Pedal: Receives driver input force, "
            "Master Cylinder: Converts pedal force to hydraulic pressure, "
            "ABS Controller: Prevents wheel lockup during braking"
        ) in text
        assert "Safety Standards" not in text

    def test_structured_with_standards(self, structured_desc):
        text = describe_system(structured_desc, include_standards=True)
        assert text.endswith("Safety Standards: ISO 26262, IEC 61508")

    def test_missing_standards_default(self):
        desc = StructuredDescription.model_validate({
            "systemName": "Lidar Unit",
            "description": "Scans environment to detect obstacles",
            "components": [{"name": "Laser Emitter", "function": "Emits laser pulses"}],
        })
        assert "Safety Standards: General Safety Principles" in describe_system(desc, include_standards=True)

    def test_simple_description(self, simple_desc):
        assert describe_system(simple_desc) == f"System Description: {simple_desc.description}"


class TestBuilders:
    def test_fmeca_prompt_contains_every_component(self, structured_desc):
        prompt = build_fmeca_prompt(structured_desc)
        positions = []
        for c in structured_desc.components:
            assert c.name in prompt
            assert c.function in prompt
            positions.append(prompt.index(c.name))
        assert positions == sorted(positions)

    def test_fta_prompt_contains_every_component(self, structured_desc):
        prompt = build_fta_prompt(structured_desc)
        for c in structured_desc.components:
            assert f"{c.name}: {c.function}" in prompt
        # Standards are an FMECA-only input
        assert "Safety Standards:" not in prompt

    def test_fmeca_prompt_states_schema_and_ranges(self, simple_desc):
        prompt = build_fmeca_prompt(simple_desc)
        assert "5-8 critical failure modes" in prompt
        assert '"fmecaTable"' in prompt
        assert "RPN = Severity × Occurrence × Detection" in prompt

    def test_fta_prompt_states_schema_and_depth(self, simple_desc):
        prompt = build_fta_prompt(simple_desc)
        assert "3-4 levels of decomposition" in prompt
        assert '"mermaidDiagram": "flowchart TD\\n' in prompt

    def test_structure_prompt(self):
        prompt = build_structure_prompt("Infusion Pump", "Delivers medication to patients")
        assert "System Name: Infusion Pump" in prompt
        assert "Description: Delivers medication to patients" in prompt
        assert '"safetyStandards"' in prompt

    def test_prompts_are_idempotent(self, structured_desc, simple_desc):
        for desc in (structured_desc, simple_desc):
            assert build_fmeca_prompt(desc) == build_fmeca_prompt(desc)
            assert build_fta_prompt(desc) == build_fta_prompt(desc)
        assert build_structure_prompt("A", "B") == build_structure_prompt("A", "B")
