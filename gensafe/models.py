import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

log = logging.getLogger(__name__)

# RPN at or above which an entry counts as high risk in the summary.
HIGH_RISK_RPN = 80

SafetyStandardName = Literal["ISO 26262", "MIL-STD-882E", "IEC 61508", "DO-178C", "ARP4754A"]


class _Report(BaseModel):
    """Immutable, camelCase on the wire."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


def compute_rpn(severity: int, occurrence: int, detection: int) -> int:
    return severity * occurrence * detection


# ── FMECA ──


class FMECAEntry(_Report):
    item_function: str
    failure_mode: str
    failure_cause: str
    local_effect: str
    system_effect: str
    end_effect: str
    severity: int = Field(ge=1, le=10)
    occurrence: int = Field(ge=1, le=10)
    detection: int = Field(ge=1, le=10)
    rpn: int = Field(ge=1, le=1000)
    recommended_action: str

    @model_validator(mode="before")
    @classmethod
    def _recompute_rpn(cls, data: Any) -> Any:
        """Force rpn to severity x occurrence x detection; models often get it wrong."""
        if not isinstance(data, dict):
            return data
        try:
            expected = compute_rpn(int(data["severity"]), int(data["occurrence"]), int(data["detection"]))
        except (KeyError, TypeError, ValueError):
            return data
        if data.get("rpn") != expected:
            if "rpn" in data:
                log.debug("Correcting rpn %r -> %d", data["rpn"], expected)
            data = {**data, "rpn": expected}
        return data


class FMECASummary(_Report):
    total_failure_modes: int
    high_risk_items: int
    average_rpn: float = Field(alias="averageRPN")
    key_recommendations: list[str] = []

    @classmethod
    def from_entries(cls, entries: list[FMECAEntry], recommendations: list[str]) -> "FMECASummary":
        if not entries:
            return cls(total_failure_modes=0, high_risk_items=0, average_rpn=0.0,
                       key_recommendations=recommendations)
        rpns = [e.rpn for e in entries]
        return cls(
            total_failure_modes=len(entries),
            high_risk_items=sum(1 for r in rpns if r >= HIGH_RISK_RPN),
            average_rpn=round(sum(rpns) / len(rpns), 2),
            key_recommendations=recommendations,
        )


class FMECAReport(_Report):
    fmeca_table: list[FMECAEntry] = Field(min_length=1)
    summary: FMECASummary


# ── FTA ──


def _as_text(v: Any) -> Any:
    """Free-text fields: models often send null, or a bare number for a probability."""
    if v is None:
        return ""
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


class FTAEvent(_Report):
    id: str
    type: Literal["top", "intermediate", "basic"]
    description: str
    probability: str = ""

    @field_validator("probability", mode="before")
    @classmethod
    def probability_as_text(cls, v: Any) -> Any:
        return _as_text(v)


class FTAGate(_Report):
    id: str
    type: Literal["AND", "OR"]
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def description_as_text(cls, v: Any) -> Any:
        return _as_text(v)


class FTAAnalysis(_Report):
    critical_path: str
    recommendations: list[str] = []


class FTAReport(_Report):
    top_event: str
    mermaid_diagram: str
    events: list[FTAEvent]
    gates: list[FTAGate]
    analysis: FTAAnalysis


# ── System structure ──


class StructureComponent(_Report):
    name: str
    function: str


class StructureConnection(_Report):
    from_: str = Field(alias="from")
    to: str
    type: str


class SafetyStandardRef(_Report):
    standard: str
    requirement: str


class SystemStructure(_Report):
    components: list[StructureComponent]
    connections: list[StructureConnection]
    safety_standards: list[SafetyStandardRef]


# ── Requests ──


class ComponentIn(_Request):
    name: str = Field(min_length=2, max_length=50)
    function: str = Field(min_length=5, max_length=200)


class ConnectionIn(_Request):
    from_: str = Field(alias="from")
    to: str
    description: str = Field(min_length=5, max_length=200)


class OperatingConditions(_Request):
    temperature: str | None = None
    pressure: str | None = None
    environment: str | None = None
    power_requirements: str | None = None


class StructuredDescription(_Request):
    system_name: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=10, max_length=1000)
    components: list[ComponentIn] = Field(min_length=1, max_length=20)
    connections: list[ConnectionIn] | None = None
    operating_conditions: OperatingConditions | None = None
    safety_standards: list[SafetyStandardName] | None = None


class SimpleDescription(_Request):
    description: str = Field(min_length=20, max_length=2000)


SystemDescription = StructuredDescription | SimpleDescription


class StructureRequest(_Request):
    model_config = ConfigDict(extra="ignore")

    system_name: str = Field(min_length=1)
    description: str = Field(min_length=1)


# ── Responses ──


class AnalysisInput(_Report):
    type: Literal["structured", "simple"]
    system_name: str


class AnalysisResults(_Report):
    fmeca: FMECAReport
    fta: FTAReport


class AnalysisMetadata(_Report):
    processing_time: int  # milliseconds
    components_analyzed: int | str
    safety_standards: list[str]


class AnalysisResponse(_Report):
    success: bool = True
    timestamp: str
    input: AnalysisInput
    results: AnalysisResults
    metadata: AnalysisMetadata


class ValidationResponse(_Report):
    valid: bool
    format: Literal["structured", "simple"] | None = None
    message: str
    errors: dict[str, list[dict[str, str]]] | None = None
