"""Prompt text for the three generation calls.

Every builder is a pure function of its input: no timestamps or other
per-call state end up in the prompt.
"""

from gensafe.models import StructuredDescription, SystemDescription

FMECA_SYSTEM = (
    "You are an expert safety engineer specializing in FMECA analysis. Provide detailed, "
    "accurate, and professional safety analysis following industry standards."
)

FTA_SYSTEM = (
    "You are an expert safety engineer specializing in Fault Tree Analysis. Create logical, "
    "comprehensive fault trees following industry standards."
)

STRUCTURE_SYSTEM = (
    "You are an expert system engineer specializing in system architecture and safety analysis. "
    "Generate accurate, industry-standard system structures."
)

_FMECA_INTRO = """\
You are a senior safety engineer with expertise in FMECA (Failure Mode, Effects, and Criticality \
Analysis). Analyze the following system and generate a comprehensive FMECA.
"""

_FMECA_REQUIREMENTS = """\
Generate a detailed FMECA analysis with the following requirements:

1. Identify 5-8 critical failure modes across the system components
2. For each failure mode, provide:
   - Component/Function name
   - Specific failure mode
   - Root cause(s)
   - Local effects (component level)
   - System-level effects
   - End effects (system/mission level)
   - Severity rating (1-10, where 10 is catastrophic)
   - Occurrence probability (1-10, where 10 is very frequent)
   - Detection rating (1-10, where 10 is cannot detect)
   - Risk Priority Number (RPN = Severity × Occurrence × Detection)
   - Recommended actions/mitigations

3. Consider relevant safety standards and best practices
4. Focus on safety-critical failure modes that could lead to hazardous conditions

Return the response as a valid JSON object with this exact structure:
{
  "fmecaTable": [
    {
      "itemFunction": "Component/Function Name",
      "failureMode": "Specific failure mode",
      "failureCause": "Root cause(s)",
      "localEffect": "Component-level effect",
      "systemEffect": "System-level effect",
      "endEffect": "Mission/safety-level effect",
      "severity": 9,
      "occurrence": 3,
      "detection": 4,
      "rpn": 108,
      "recommendedAction": "Specific mitigation strategy"
    }
  ],
  "summary": {
    "totalFailureModes": 6,
    "highRiskItems": 3,
    "averageRPN": 85,
    "keyRecommendations": ["Priority recommendation 1", "Priority recommendation 2"]
  }
}

Ensure all numeric ratings follow standard FMECA scales and the analysis is thorough and professional."""

_FTA_INTRO = """\
You are a senior safety engineer expert in Fault Tree Analysis (FTA). Create a comprehensive \
fault tree for the most critical hazard of the following system:
"""

_FTA_REQUIREMENTS = """\
Generate an FTA with these requirements:

1. Identify the most critical top-level hazard/undesired event
2. Create a logical fault tree with:
   - Top event (the critical hazard)
   - Intermediate events (system-level failures)
   - Basic events (component-level failures)
   - Appropriate logic gates (AND, OR)
   - 3-4 levels of decomposition

3. Use proper FTA symbology and ensure logical consistency
4. Focus on the most safety-critical failure path
5. Use clear "AND" and "OR" labels in gates for readability

Return the response as a valid JSON object with this structure:
{
  "topEvent": "Description of the critical hazard",
  "mermaidDiagram": "flowchart TD\\n    A([Top Event])\\n    G1{OR}\\n    A --> G1\\n    G1 --> B([Intermediate Event 1])\\n    G1 --> C([Intermediate Event 2])\\n    ...",
  "events": [
    {
      "id": "A",
      "type": "top",
      "description": "Critical system hazard",
      "probability": "1E-6 per hour"
    },
    {
      "id": "B",
      "type": "intermediate",
      "description": "System failure mode",
      "probability": "5E-5 per hour"
    }
  ],
  "gates": [
    {
      "id": "G1",
      "type": "OR",
      "description": "Either failure path can cause top event"
    }
  ],
  "analysis": {
    "criticalPath": "Most likely failure sequence",
    "recommendations": ["Key mitigation 1", "Key mitigation 2"]
  }
}

Ensure the Mermaid diagram uses proper syntax with appropriate styling for FTA elements."""

_STRUCTURE_INTRO = """\
You are a system engineering expert. Based on the system name and description provided, \
generate a detailed system structure including components, connections, and applicable \
safety standards.
"""

_STRUCTURE_REQUIREMENTS = """\
Generate a JSON response with the following structure:
{
  "components": [
    {
      "name": "Component Name",
      "function": "Detailed description of what this component does"
    }
  ],
  "connections": [
    {
      "from": "Source Component",
      "to": "Target Component",
      "type": "Type of connection (e.g., electrical, mechanical, data, hydraulic)"
    }
  ],
  "safetyStandards": [
    {
      "standard": "Standard Name (e.g., ISO 26262, DO-178C, IEC 61508)",
      "requirement": "Specific requirement or description"
    }
  ]
}

Requirements:
- Generate 3-8 realistic components that would be part of this system
- Create logical connections between components
- Include 2-5 relevant safety standards for this type of system
- Use industry-standard terminology
- Make sure all components are interconnected logically
- Focus on the most critical components for safety analysis

Respond ONLY with valid JSON, no additional text."""


def describe_system(desc: SystemDescription, include_standards: bool = False) -> str:
    """Render the system block shared by the FMECA and FTA prompts."""
    if not isinstance(desc, StructuredDescription):
        return f"System Description: {desc.description}"

    components = ", ".join(f"{c.name}: {c.function}" for c in desc.components)
    lines = [
        f"System: {desc.system_name}",
        f"Description: {desc.description}",
        f"Components: {components}",
    ]
    if include_standards:
        standards = ", ".join(desc.safety_standards or []) or "General Safety Principles"
        lines.append(f"Safety Standards: {standards}")
    return "\n".join(lines)


def build_fmeca_prompt(desc: SystemDescription) -> str:
    return "\n".join([_FMECA_INTRO, describe_system(desc, include_standards=True), "", _FMECA_REQUIREMENTS])


def build_fta_prompt(desc: SystemDescription) -> str:
    return "\n".join([_FTA_INTRO, describe_system(desc), "", _FTA_REQUIREMENTS])


def build_structure_prompt(system_name: str, description: str) -> str:
    parts = [
        _STRUCTURE_INTRO,
        f"System Name: {system_name}",
        f"Description: {description}",
        "",
        _STRUCTURE_REQUIREMENTS,
    ]
    return "\n".join(parts)
