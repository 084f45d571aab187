import json

import httpx
import openai
import pytest

from gensafe import pipeline
from gensafe.models import SimpleDescription, StructuredDescription

FMECA_REPLY = {
    "fmecaTable": [
        {
            "itemFunction": "Master Cylinder",
            "failureMode": "Internal seal leak",
            "failureCause": "Seal wear from fluid contamination",
            "localEffect": "Pressure loss in primary circuit",
            "systemEffect": "Reduced braking force",
            "endEffect": "Increased stopping distance",
            "severity": 9,
            "occurrence": 3,
            "detection": 4,
            "rpn": 108,
            "recommendedAction": "Add pressure differential switch with dashboard warning",
        },
        {
            "itemFunction": "ABS Controller",
            "failureMode": "Stuck valve command",
            "failureCause": "Firmware watchdog fault",
            "localEffect": "Valve held open",
            "systemEffect": "Wheel lockup on one axle",
            "endEffect": "Loss of directional control",
            "severity": 8,
            "occurrence": 2,
            "detection": 5,
            "rpn": 80,
            "recommendedAction": "Independent watchdog and valve position feedback",
        },
    ],
    "summary": {
        "totalFailureModes": 2,
        "highRiskItems": 1,
        "averageRPN": 94,
        "keyRecommendations": ["Monitor hydraulic pressure", "Harden ABS firmware"],
    },
}

FTA_REPLY = {
    "topEvent": "Total loss of braking",
    "mermaidDiagram": (
        "flowchart TD\n    A([Total loss of braking])\n    G1{OR}\n    A --> G1\n"
        "    G1 --> B([Hydraulic failure])\n    G1 --> C([Pedal linkage failure])"
    ),
    "events": [
        {"id": "A", "type": "top", "description": "Total loss of braking", "probability": "1E-7 per hour"},
        {"id": "B", "type": "intermediate", "description": "Hydraulic failure", "probability": "2E-6 per hour"},
        {"id": "C", "type": "basic", "description": "Pedal linkage failure", "probability": "5E-7 per hour"},
    ],
    "gates": [{"id": "G1", "type": "OR", "description": "Either path removes braking"}],
    "analysis": {
        "criticalPath": "Hydraulic failure via master cylinder leak",
        "recommendations": ["Dual-circuit hydraulics"],
    },
}

STRUCTURE_REPLY = {
    "components": [
        {"name": "Reactor Vessel", "function": "Contains the exothermic reaction"},
        {"name": "PID Controller", "function": "Regulates coolant flow"},
    ],
    "connections": [{"from": "PID Controller", "to": "Reactor Vessel", "type": "Control signal"}],
    "safetyStandards": [{"standard": "IEC 61511", "requirement": "Safety instrumented functions"}],
}


def as_reply(data: dict, prefix: str = "", suffix: str = "") -> str:
    return prefix + json.dumps(data) + suffix


def status_error(cls: type[openai.APIStatusError], status: int, code: str | None) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return cls(f"Error code: {status}", response=response, body={"code": code, "message": "test"})


def connection_error() -> openai.APIConnectionError:
    return openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))


def fake_chat(replies: dict[str, object]):
    """Build a stand-in for llm.chat that answers by system prompt.

    A reply that is an exception instance is raised instead of returned.
    """
    calls: list[dict] = []

    async def chat(system_prompt, user_message, *, temperature, max_tokens):
        calls.append({
            "system": system_prompt,
            "user": user_message,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        reply = replies[system_prompt]
        if isinstance(reply, BaseException):
            raise reply
        return reply

    chat.calls = calls
    return chat


@pytest.fixture(autouse=True)
def _reset_fallback_counts():
    pipeline._fallbacks.clear()
    yield
    pipeline._fallbacks.clear()


@pytest.fixture
def structured_desc() -> StructuredDescription:
    return StructuredDescription.model_validate({
        "systemName": "Automotive Brake System",
        "description": "Hydraulic brake system for passenger vehicle with ABS capability",
        "components": [
            {"name": "Brake Pedal", "function": "Receives driver input force"},
            {"name": "Master Cylinder", "function": "Converts pedal force to hydraulic pressure"},
            {"name": "ABS Controller", "function": "Prevents wheel lockup during braking"},
        ],
        "safetyStandards": ["ISO 26262", "IEC 61508"],
    })


@pytest.fixture
def simple_desc() -> SimpleDescription:
    return SimpleDescription(
        description="A chemical reactor temperature control system with sensors, a PID controller and valves."
    )
