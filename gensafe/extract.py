import json
from typing import Any


class MalformedResponseError(ValueError):
    """The completion text did not contain a usable JSON object."""


def extract_json_object(text: str) -> dict[str, Any]:
    """Parse the span from the first '{' to the last '}' of an LLM reply.

    Prose, markdown fences and trailing commentary around the object are
    ignored. If the reply has no such span the whole text is parsed. There is
    no repair of truncated or unbalanced output.
    """
    start = text.find("{")
    end = text.rfind("}")
    candidate = text[start : end + 1] if start != -1 and end > start else text

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Could not parse JSON from LLM output: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(data).__name__}")
    return data
