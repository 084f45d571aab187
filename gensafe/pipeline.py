"""Prompt -> completion -> extraction -> (report | canned report).

All three outputs go through the same pipeline; a ReportKind holds what
differs between them. Failures are handled in one place:

  - quota exhausted, invalid credential and rate limiting are raised to the
    caller for kinds with ``surface_errors`` set,
  - everything else (transport errors, a missing API key, unparseable or
    invalid output) is replaced by the kind's canned report.

Every substitution is logged and counted so a rising fallback rate is visible
even though callers cannot tell canned reports from real ones.
"""

import asyncio
import logging
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from gensafe import llm
from gensafe.canned import canned_fmeca, canned_fta, canned_structure
from gensafe.diagram import apply_fta_styling, unresolved_node_ids
from gensafe.extract import MalformedResponseError, extract_json_object
from gensafe.models import FMECAReport, FTAReport, SystemDescription, SystemStructure
from gensafe.prompts import (
    FMECA_SYSTEM,
    FTA_SYSTEM,
    STRUCTURE_SYSTEM,
    build_fmeca_prompt,
    build_fta_prompt,
    build_structure_prompt,
)

log = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)

_fallbacks: Counter[str] = Counter()


@dataclass(frozen=True)
class ReportKind:
    name: str
    system_prompt: str
    model: type[BaseModel]
    temperature: float
    max_tokens: int
    surface_errors: bool = True
    postprocess: Callable[[BaseModel], BaseModel] | None = None


def _finish_fta(report: FTAReport) -> FTAReport:
    missing = unresolved_node_ids(report)
    if missing:
        log.warning("FTA diagram nodes missing from events/gates: %s", ", ".join(missing))
    return report.model_copy(update={"mermaid_diagram": apply_fta_styling(report.mermaid_diagram)})


FMECA = ReportKind(
    name="fmeca",
    system_prompt=FMECA_SYSTEM,
    model=FMECAReport,
    temperature=0.3,
    max_tokens=2500,
)

FTA = ReportKind(
    name="fta",
    system_prompt=FTA_SYSTEM,
    model=FTAReport,
    temperature=0.3,
    max_tokens=2000,
    postprocess=_finish_fta,
)

STRUCTURE = ReportKind(
    name="structure",
    system_prompt=STRUCTURE_SYSTEM,
    model=SystemStructure,
    temperature=0.7,
    max_tokens=2000,
    surface_errors=False,
)


def fallback_counts() -> dict[str, int]:
    """Canned substitutions since startup, keyed by '<kind>.<reason>'."""
    return dict(_fallbacks)


def _record_fallback(kind: ReportKind, reason: str) -> None:
    _fallbacks[f"{kind.name}.{reason}"] += 1


def parse_report(kind: ReportKind, raw: str) -> BaseModel:
    """Extract and validate a report from completion text, then post-process it.

    Raises MalformedResponseError if the text holds no usable report.
    """
    try:
        report = kind.model.model_validate(extract_json_object(raw))
    except ValidationError as e:
        raise MalformedResponseError(f"{kind.name} response failed validation: {e.error_count()} errors") from e
    if kind.postprocess is not None:
        report = kind.postprocess(report)
    return report


async def run(
    kind: ReportKind,
    prompt: str,
    on_error: Callable[[], R],
    on_malformed: Callable[[], R],
) -> R:
    """Run one generation. Never fails except with a surfaced AIServiceError."""
    log.info("Generating %s analysis...", kind.name)
    try:
        raw = await llm.chat(
            kind.system_prompt,
            prompt,
            temperature=kind.temperature,
            max_tokens=kind.max_tokens,
        )
    except Exception as e:
        surfaced = llm.classify_error(e) if kind.surface_errors else None
        if surfaced is not None:
            log.error("%s generation failed: %s", kind.name, surfaced)
            raise surfaced from e
        log.warning("%s generation failed (%s: %s), using fallback data", kind.name, type(e).__name__, e)
        _record_fallback(kind, type(e).__name__)
        return on_error()

    log.info("Raw %s response received (%d chars), parsing...", kind.name, len(raw))
    try:
        report = parse_report(kind, raw)
    except MalformedResponseError as e:
        log.warning("%s response unusable (%s), using fallback data", kind.name, e)
        _record_fallback(kind, "malformed_response")
        return on_malformed()

    log.info("%s analysis generated successfully", kind.name)
    return report  # type: ignore[return-value]


async def generate_fmeca(desc: SystemDescription) -> FMECAReport:
    return await run(
        FMECA,
        build_fmeca_prompt(desc),
        on_error=lambda: canned_fmeca(desc),
        on_malformed=lambda: canned_fmeca(None),
    )


async def generate_fta(desc: SystemDescription) -> FTAReport:
    return await run(
        FTA,
        build_fta_prompt(desc),
        on_error=lambda: canned_fta(desc),
        on_malformed=lambda: canned_fta(None),
    )


async def generate_analysis(desc: SystemDescription) -> tuple[FMECAReport, FTAReport]:
    """Run the FMECA and FTA generations concurrently.

    A surfaced error from either one fails the whole operation; when both
    fail, the FMECA error is raised and the FTA one is only logged.
    """
    fmeca, fta = await asyncio.gather(generate_fmeca(desc), generate_fta(desc), return_exceptions=True)
    if isinstance(fmeca, BaseException):
        if isinstance(fta, BaseException):
            log.error("fta generation also failed: %s", fta)
        raise fmeca
    if isinstance(fta, BaseException):
        raise fta
    return fmeca, fta


async def generate_structure(system_name: str, description: str) -> SystemStructure:
    def fallback() -> SystemStructure:
        return canned_structure(system_name, description)

    return await run(
        STRUCTURE,
        build_structure_prompt(system_name, description),
        on_error=fallback,
        on_malformed=fallback,
    )
