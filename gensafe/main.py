import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from gensafe import llm, pipeline
from gensafe.config import settings
from gensafe.models import (
    AnalysisInput,
    AnalysisMetadata,
    AnalysisResponse,
    AnalysisResults,
    SimpleDescription,
    StructuredDescription,
    StructureRequest,
    SystemDescription,
    SystemStructure,
    ValidationResponse,
)
from gensafe.samples import EXAMPLES, SIMPLE_FORMAT_EXAMPLE, STRUCTURED_FORMAT_EXAMPLE, USAGE

logging.basicConfig(
    level=settings.app.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error_details(err: ValidationError) -> list[dict[str, str]]:
    return [
        {"field": ".".join(str(p) for p in e["loc"]), "message": e["msg"]}
        for e in err.errors()
    ]


def _validate_description(body: Any) -> tuple[SystemDescription | None, dict[str, list[dict[str, str]]]]:
    """Try the structured format first, then free text.

    Returns (description, {}) on success or (None, per-format errors).
    """
    try:
        return StructuredDescription.model_validate(body), {}
    except ValidationError as structured_err:
        try:
            return SimpleDescription.model_validate(body), {}
        except ValidationError as simple_err:
            return None, {
                "structured": _error_details(structured_err),
                "simple": _error_details(simple_err),
            }


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Malformed JSON body")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("Gen-SAFE API starting (environment: %s, model: %s)", settings.app.environment, llm.get_model())
    if not settings.openai.configured:
        log.warning("GENSAFE_OPENAI__API_KEY not set; every report will use fallback data")
    yield


app = FastAPI(title="Gen-SAFE", version=settings.app.version, lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    t0 = time.monotonic()
    response = await call_next(request)
    log.info(
        "%s %s - %d (%.0fms)",
        request.method,
        request.url.path,
        response.status_code,
        (time.monotonic() - t0) * 1000,
    )
    return response


@app.exception_handler(llm.AIServiceError)
async def ai_service_error(request: Request, exc: llm.AIServiceError):
    content: dict[str, Any] = {
        "error": str(exc),
        "timestamp": _now(),
        "path": request.url.path,
        "method": request.method,
    }
    if settings.app.is_development and exc.__cause__ is not None:
        content["details"] = str(exc.__cause__)
    return JSONResponse(status_code=exc.status_code, content=content)


@app.get("/")
async def index():
    return {
        "message": "Gen-SAFE API Server",
        "version": settings.app.version,
        "endpoints": {
            "health": "/api/health",
            "analysis": "/api/analysis/generate",
            "structure": "/api/analysis/generate-structure",
        },
    }


@app.get("/api/health")
async def health():
    return {
        "status": "OK",
        "timestamp": _now(),
        "version": settings.app.version,
        "environment": settings.app.environment,
        "ai_configured": settings.openai.configured,
        "model": llm.get_model(),
        "fallbacks": pipeline.fallback_counts(),
    }


@app.post("/api/analysis/generate", response_model=AnalysisResponse)
async def generate(request: Request):
    t0 = time.monotonic()
    body = await _read_json(request)
    desc, _errors = _validate_description(body)
    if desc is None:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid input format",
                "details": "Please provide either a structured system description or a simple "
                           "text description (minimum 20 characters)",
                "structuredFormatExample": STRUCTURED_FORMAT_EXAMPLE,
                "simpleFormatExample": SIMPLE_FORMAT_EXAMPLE,
            },
        )

    structured = isinstance(desc, StructuredDescription)
    log.info("Starting AI analysis generation (%s input)", "structured" if structured else "simple")
    fmeca, fta = await pipeline.generate_analysis(desc)

    if structured:
        system_name = desc.system_name
        components_analyzed: int | str = len(desc.components)
        standards = list(desc.safety_standards or ["General"])
    else:
        system_name = "System Analysis"
        components_analyzed = "N/A"
        standards = ["General"]

    return AnalysisResponse(
        timestamp=_now(),
        input=AnalysisInput(type="structured" if structured else "simple", system_name=system_name),
        results=AnalysisResults(fmeca=fmeca, fta=fta),
        metadata=AnalysisMetadata(
            processing_time=round((time.monotonic() - t0) * 1000),
            components_analyzed=components_analyzed,
            safety_standards=standards,
        ),
    )


@app.post("/api/analysis/validate", response_model=ValidationResponse, response_model_exclude_none=True)
async def validate(request: Request):
    """Check a system description against both input formats without generating anything."""
    body = await _read_json(request)
    desc, errors = _validate_description(body)
    if desc is None:
        resp = ValidationResponse(
            valid=False,
            errors=errors,
            message="Input does not match either structured or simple format",
        )
        return JSONResponse(status_code=400, content=resp.model_dump(by_alias=True, exclude_none=True))
    if isinstance(desc, StructuredDescription):
        return ValidationResponse(valid=True, format="structured", message="Structured system description is valid")
    return ValidationResponse(valid=True, format="simple", message="Simple text description is valid")


@app.post("/api/analysis/generate-structure", response_model=SystemStructure)
async def generate_structure(request: Request):
    body = await _read_json(request)
    try:
        req = StructureRequest.model_validate(body)
    except ValidationError:
        return JSONResponse(status_code=400, content={"error": "System name and description are required"})

    log.info("Structure generation request for '%s'", req.system_name)
    return await pipeline.generate_structure(req.system_name, req.description)


@app.get("/api/analysis/examples")
async def examples():
    return {"success": True, "examples": EXAMPLES, "usage": USAGE}
