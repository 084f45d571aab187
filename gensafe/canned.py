"""Hand-authored reports returned when live generation is unavailable or unusable.

The numbers here are illustrative. They satisfy rpn = S x O x D but are not
the product of any real analysis.
"""

import logging

from gensafe.models import (
    FMECAEntry,
    FMECAReport,
    FMECASummary,
    FTAAnalysis,
    FTAEvent,
    FTAGate,
    FTAReport,
    StructuredDescription,
    SystemDescription,
    SystemStructure,
)

log = logging.getLogger(__name__)

_GENERIC_NAME = "System"


def system_label(desc: SystemDescription | None) -> str:
    if isinstance(desc, StructuredDescription):
        return desc.system_name
    return _GENERIC_NAME


def canned_fmeca(desc: SystemDescription | None) -> FMECAReport:
    name = system_label(desc)
    entries = [
        FMECAEntry(
            item_function=f"{name} - Primary Component",
            failure_mode="Complete failure",
            failure_cause="Component degradation, environmental stress",
            local_effect="Loss of component function",
            system_effect="Reduced system capability",
            end_effect="Potential safety hazard",
            severity=8,
            occurrence=3,
            detection=4,
            rpn=96,
            recommended_action="Implement redundancy and monitoring",
        ),
        FMECAEntry(
            item_function=f"{name} - Control Unit",
            failure_mode="Intermittent operation",
            failure_cause="Software fault, electrical interference",
            local_effect="Erratic control behavior",
            system_effect="System instability",
            end_effect="Degraded performance",
            severity=6,
            occurrence=4,
            detection=3,
            rpn=72,
            recommended_action="Improve software validation and EMI protection",
        ),
        FMECAEntry(
            item_function=f"{name} - Sensor",
            failure_mode="False readings",
            failure_cause="Calibration drift, contamination",
            local_effect="Incorrect data output",
            system_effect="Poor decision making",
            end_effect="System malfunction",
            severity=7,
            occurrence=5,
            detection=2,
            rpn=70,
            recommended_action="Regular calibration and self-diagnostics",
        ),
    ]
    summary = FMECASummary.from_entries(
        entries,
        [
            "Implement comprehensive monitoring system",
            "Add redundancy for critical components",
            "Establish regular maintenance schedule",
        ],
    )
    return FMECAReport(fmeca_table=entries, summary=summary)


def canned_fta(desc: SystemDescription | None) -> FTAReport:
    name = system_label(desc)
    diagram = f"""flowchart TD
    A([{name} Critical Failure])
    G1{{OR}}
    A --> G1
    G1 --> B([Hardware Subsystem Failure])
    G1 --> C([Software Subsystem Failure])
    G2{{AND}}
    B --> G2
    G2 --> D([Primary Component Failure])
    G2 --> E([Backup Component Failure])
    G3{{OR}}
    C --> G3
    G3 --> F([Logic Error])
    G3 --> G([Data Corruption])
    G4{{AND}}
    D --> G4
    G4 --> H([Mechanical Wear])
    G4 --> I([Environmental Stress])

    %% Professional FTA Styling
    classDef gate fill:#2c3e50,stroke:#34495e,stroke-width:3px,color:#ffffff,font-weight:700;
    classDef event fill:#ecf0f1,stroke:#2c3e50,stroke-width:2px,color:#2c3e50,font-weight:600;
    classDef top fill:#e74c3c,stroke:#c0392b,stroke-width:3px,color:#ffffff,font-weight:700;
    classDef intermediate fill:#3498db,stroke:#2980b9,stroke-width:2px,color:#ffffff,font-weight:600;
    classDef basic fill:#f39c12,stroke:#e67e22,stroke-width:2px,color:#ffffff,font-weight:600;

    class G1,G2,G3,G4 gate;
    class B,C intermediate;
    class D,E,F,G basic;
    class H,I basic;
    class A top;"""

    return FTAReport(
        top_event=f"{name} fails to perform critical function",
        mermaid_diagram=diagram,
        events=[
            FTAEvent(id="A", type="top", description=f"{name} critical failure", probability="1E-6 per hour"),
            FTAEvent(id="B", type="intermediate", description="Hardware subsystem failure",
                     probability="5E-5 per hour"),
            FTAEvent(id="C", type="intermediate", description="Software subsystem failure",
                     probability="2E-5 per hour"),
            FTAEvent(id="D", type="basic", description="Primary component failure", probability="1E-4 per hour"),
        ],
        gates=[
            FTAGate(id="G1", type="OR", description="Either hardware or software failure causes system failure"),
            FTAGate(id="G2", type="AND", description="Both components must fail for hardware failure"),
        ],
        analysis=FTAAnalysis(
            critical_path="Hardware failure through component degradation",
            recommendations=[
                "Implement hardware redundancy",
                "Add comprehensive diagnostics",
                "Establish preventive maintenance program",
            ],
        ),
    )


# ── System structure templates ──

# Evaluated in order; first rule with a matching keyword wins.
SYSTEM_TYPE_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("aerospace", ("aircraft", "aviation", "flight", "aerospace")),
    ("automotive", ("automotive", "vehicle", "car", "brake")),
    ("medical", ("patient", "medical", "hospital", "health")),
]
DEFAULT_SYSTEM_TYPE = "industrial"


def classify_system(system_name: str, description: str) -> str:
    """Pick a structure template by case-insensitive substring match."""
    text = f"{system_name} {description}".lower()
    for system_type, keywords in SYSTEM_TYPE_RULES:
        if any(k in text for k in keywords):
            return system_type
    return DEFAULT_SYSTEM_TYPE


_STRUCTURES: dict[str, dict] = {
    "automotive": {
        "components": [
            {"name": "Electronic Control Unit", "function": "Controls overall system operation and decision making"},
            {"name": "Sensor Array", "function": "Collects environmental and operational data"},
            {"name": "Actuator System", "function": "Executes control commands and physical actions"},
            {"name": "Communication Interface", "function": "Handles data exchange with other vehicle systems"},
            {"name": "Power Management Unit", "function": "Manages electrical power distribution and conditioning"},
        ],
        "connections": [
            {"from": "Sensor Array", "to": "Electronic Control Unit", "type": "Data signals"},
            {"from": "Electronic Control Unit", "to": "Actuator System", "type": "Control signals"},
            {"from": "Power Management Unit", "to": "Electronic Control Unit", "type": "Electrical power"},
            {"from": "Electronic Control Unit", "to": "Communication Interface", "type": "Data bus"},
        ],
        "safetyStandards": [
            {"standard": "ISO 26262", "requirement": "Functional safety for automotive systems"},
            {"standard": "ISO 21448", "requirement": "Safety of the intended functionality (SOTIF)"},
            {"standard": "IEC 61508", "requirement": "Functional safety of electrical systems"},
        ],
    },
    "aerospace": {
        "components": [
            {"name": "Flight Control Computer", "function": "Primary flight control processing and decision making"},
            {"name": "Navigation Sensors", "function": "Provides position, attitude, and velocity information"},
            {"name": "Communication System",
             "function": "Handles air traffic control and data link communications"},
            {"name": "Display System", "function": "Presents flight information to pilots"},
            {"name": "Backup Systems", "function": "Provides redundant functionality for critical operations"},
        ],
        "connections": [
            {"from": "Navigation Sensors", "to": "Flight Control Computer", "type": "Sensor data"},
            {"from": "Flight Control Computer", "to": "Display System", "type": "Display data"},
            {"from": "Communication System", "to": "Flight Control Computer", "type": "Communication data"},
            {"from": "Backup Systems", "to": "Flight Control Computer", "type": "Redundant control"},
        ],
        "safetyStandards": [
            {"standard": "DO-178C", "requirement": "Software considerations in airborne systems"},
            {"standard": "DO-254", "requirement": "Design assurance guidance for airborne electronic hardware"},
            {"standard": "ARP4754A", "requirement": "Guidelines for development of civil aircraft systems"},
        ],
    },
    "industrial": {
        "components": [
            {"name": "Process Controller", "function": "Controls industrial process parameters and sequences"},
            {"name": "Monitoring Sensors", "function": "Monitors process conditions and equipment status"},
            {"name": "Safety Interlock System", "function": "Provides emergency shutdown and safety protection"},
            {"name": "Human Machine Interface", "function": "Allows operator interaction and monitoring"},
            {"name": "Data Logging System", "function": "Records process data for analysis and compliance"},
        ],
        "connections": [
            {"from": "Monitoring Sensors", "to": "Process Controller", "type": "Process data"},
            {"from": "Process Controller", "to": "Safety Interlock System", "type": "Safety signals"},
            {"from": "Process Controller", "to": "Human Machine Interface", "type": "Status information"},
            {"from": "Process Controller", "to": "Data Logging System", "type": "Historical data"},
        ],
        "safetyStandards": [
            {"standard": "IEC 61508", "requirement": "Functional safety of electrical/electronic systems"},
            {"standard": "IEC 61511", "requirement": "Functional safety - Safety instrumented systems"},
            {"standard": "ISO 13849",
             "requirement": "Safety of machinery - Safety-related parts of control systems"},
        ],
    },
    "medical": {
        "components": [
            {"name": "Patient Monitoring Unit", "function": "Continuously monitors patient vital signs and parameters"},
            {"name": "Alarm System", "function": "Alerts medical staff to critical patient conditions"},
            {"name": "Data Recording System", "function": "Stores patient data for medical records and analysis"},
            {"name": "Communication Interface", "function": "Interfaces with hospital information systems"},
            {"name": "Power Backup System", "function": "Ensures continuous operation during power failures"},
        ],
        "connections": [
            {"from": "Patient Monitoring Unit", "to": "Alarm System", "type": "Alert signals"},
            {"from": "Patient Monitoring Unit", "to": "Data Recording System", "type": "Patient data"},
            {"from": "Data Recording System", "to": "Communication Interface", "type": "Medical records"},
            {"from": "Power Backup System", "to": "Patient Monitoring Unit", "type": "Backup power"},
        ],
        "safetyStandards": [
            {"standard": "IEC 60601", "requirement": "Medical electrical equipment safety requirements"},
            {"standard": "ISO 14971", "requirement": "Medical devices - Application of risk management"},
            {"standard": "IEC 62304", "requirement": "Medical device software - Software life cycle processes"},
        ],
    },
}


def canned_structure(system_name: str, description: str) -> SystemStructure:
    system_type = classify_system(system_name, description)
    log.info("Using %s structure template for '%s'", system_type, system_name)
    return SystemStructure.model_validate(_STRUCTURES[system_type])
