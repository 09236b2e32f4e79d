# appbuilder/utils/parser.py
"""
JSON response parser for generator output.

Gemini is asked for `application/json`, but models still occasionally wrap
the payload in a markdown fence or add a sentence before it. We accept:

- a bare JSON document
- a single ```json ... ``` (or bare ```) fenced block

Anything else raises ParseError. No partial-JSON salvage: a truncated
document is a failed extraction and the caller falls back.
"""
import json
import re
from typing import Any

from appbuilder.core.exceptions import ParseError


FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def strip_code_fence(raw_output: str) -> str:
    """Return the body of the first fenced block, or the stripped input."""
    match = FENCED_BLOCK_PATTERN.search(raw_output)
    if match:
        return match.group(1).strip()
    return raw_output.strip()


def parse_json_response(raw_output: Any) -> Any:
    """
    Parse generator text into a Python value.

    Raises:
        ParseError: empty input, non-string input or invalid JSON
    """
    if not isinstance(raw_output, str):
        raise ParseError(f"Expected text from generator, got {type(raw_output).__name__}")

    body = strip_code_fence(raw_output)
    if not body:
        raise ParseError("Empty response from generator")

    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON from generator: {e}", {"preview": body[:200]})
