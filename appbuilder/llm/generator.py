# appbuilder/llm/generator.py
"""
Live generator - turns a description into a raw (unrepaired) spec via Gemini.
"""
from typing import Any, Dict, Optional

from appbuilder.core.config import LLMSettings
from appbuilder.core.logging import log
from appbuilder.llm.prompts import RESPONSE_SCHEMA, build_extraction_prompt
from appbuilder.llm.providers import gemini
from appbuilder.utils.parser import parse_json_response


class GeminiGenerator:
    """
    Single-shot Gemini extraction.

    NO RETRIES: a failed call is reported to the orchestrator, which falls
    back to the mock generator.
    """

    name = "gemini"

    def __init__(self, llm_settings: LLMSettings):
        self.settings = llm_settings
        self.last_usage: Optional[Dict[str, int]] = None

    async def generate(self, description: str) -> Any:
        """
        Returns the parsed JSON value exactly as the model produced it.

        Raises:
            LLMError: transport/API failure
            ParseError: response text is not JSON
        """
        prompt = build_extraction_prompt(description)
        log("GEMINI", f"Requesting extraction with {self.settings.gemini_model}")

        result = await gemini.call(
            prompt=prompt,
            api_key=self.settings.gemini_api_key or "",
            model=self.settings.gemini_model,
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
            response_schema=RESPONSE_SCHEMA,
            timeout=self.settings.timeout_seconds,
        )
        self.last_usage = result.get("usage")
        log("GEMINI", f"Response received (tokens: {self.last_usage})")

        return parse_json_response(result.get("text"))
