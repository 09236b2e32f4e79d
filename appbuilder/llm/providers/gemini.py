# appbuilder/llm/providers/gemini.py
"""
Google Gemini provider implementation.
"""
import json
from typing import Any, Dict, Optional

import aiohttp

from appbuilder.core.exceptions import LLMError
from appbuilder.core.logging import log


DEFAULT_MODEL = "gemini-2.0-flash-exp"
API_URL = "https://generativelanguage.googleapis.com/v1beta/models"


async def call(
    prompt: str,
    api_key: str,
    model: Optional[str] = None,
    temperature: float = 0.2,
    max_tokens: int = 8000,
    response_schema: Optional[Dict[str, Any]] = None,
    timeout: float = 60.0,
) -> Dict[str, Any]:
    """
    Call Google Gemini API with JSON structured output.

    Returns:
        {"text": str, "usage": {"input": int, "output": int, "total": int}}

    Raises:
        LLMError on missing key, HTTP errors or a malformed response envelope
    """
    if not api_key:
        raise LLMError("gemini", "GEMINI_API_KEY not configured")

    model = model or DEFAULT_MODEL
    url = f"{API_URL}/{model}:generateContent?key={api_key}"

    generation_config: Dict[str, Any] = {
        "temperature": temperature,
        "maxOutputTokens": max_tokens,
        "responseMimeType": "application/json",
    }
    if response_schema:
        generation_config["responseSchema"] = response_schema

    payload = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }

    async with aiohttp.ClientSession() as session:
        async with session.post(url, json=payload, timeout=aiohttp.ClientTimeout(total=timeout)) as response:
            text = await response.text()

            if response.status == 429:
                log("GEMINI", f"429 Rate limit response: {text[:500]}")
                raise LLMError("gemini", f"Rate limited (429): {text[:200]}", status=429)

            if response.status == 403:
                log("GEMINI", f"403 Forbidden response: {text[:500]}")
                raise LLMError("gemini", f"API key invalid or quota exceeded (403): {text[:200]}", status=403)

            if response.status == 400:
                log("GEMINI", f"400 Bad request: {text[:500]}")
                raise LLMError("gemini", f"Bad request (400): {text[:200]}", status=400)

            if response.status != 200:
                log("GEMINI", f"Error {response.status}: {text[:500]}")
                raise LLMError("gemini", f"Gemini API error {response.status}: {text[:200]}", status=response.status)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        log("GEMINI", f"Failed to parse JSON envelope: {text[:500]}")
        raise LLMError("gemini", f"Failed to parse Gemini response: {e}")

    candidates = data.get("candidates") or [] if isinstance(data, dict) else []
    if not candidates:
        raise LLMError("gemini", "No candidates in response")

    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts:
        raise LLMError("gemini", "No parts in response")

    usage_metadata = data.get("usageMetadata", {})
    return {
        "text": parts[0].get("text", ""),
        "usage": {
            "input": usage_metadata.get("promptTokenCount", 0),
            "output": usage_metadata.get("candidatesTokenCount", 0),
            "total": usage_metadata.get("totalTokenCount", 0),
        },
    }
