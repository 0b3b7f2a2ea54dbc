import json
from typing import Any

from .exceptions import UnparsableResponse
from .logging import jlog

def extract_json(raw_text: str) -> Any:
    """
    Parse a model reply as JSON in two stages:

    1. the whole reply, trimmed;
    2. the slice from the first "{" to the last "}" (inclusive), which recovers
       JSON wrapped in prose or code fences.

    No other repair is attempted. Raises UnparsableResponse if both stages fail.
    """
    text = raw_text if isinstance(raw_text, str) else ""

    try:
        return json.loads(text.strip())
    except (ValueError, RecursionError):
        pass

    a = text.find("{")
    b = text.rfind("}")
    if a == -1 or b == -1 or b <= a:
        raise UnparsableResponse("No JSON object found in model reply")

    try:
        data = json.loads(text[a:b + 1])
    except (ValueError, RecursionError) as e:
        raise UnparsableResponse(f"Non-JSON model reply: {e}") from e
    jlog(event="extraction_fallback", prefix_len=a, suffix_len=len(text) - b - 1)
    return data
