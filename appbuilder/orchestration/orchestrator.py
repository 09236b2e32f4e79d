# appbuilder/orchestration/orchestrator.py
"""
Extraction orchestrator.

Two-stage pipeline:

    live attempt  ->  ExtractionResult (OK | ERR)
    OK            ->  return the repaired spec
    ERR           ->  explicit fallback to the mock generator

The live attempt runs generate -> parse -> normalize -> enforce -> validate.
Every failure is captured as ERR with the stage that produced it, logged,
and never raised to the caller.
"""
from typing import Any, Dict, Optional

from appbuilder.core.config import LLMSettings
from appbuilder.core.exceptions import AppBuilderError, ParseError, SpecValidationError
from appbuilder.core.extraction_result import (
    ExtractionReport,
    ExtractionResult,
    SpecSource,
    extraction_err,
    extraction_ok,
)
from appbuilder.core.logging import log
from appbuilder.llm.generator import GeminiGenerator
from appbuilder.llm.mock_generator import MockGenerator
from appbuilder.orchestration.enforcer import enforce_permission_safety
from appbuilder.orchestration.normalizer import normalize_response
from appbuilder.validation.spec_validator import collect_spec_issues


class ExtractionOrchestrator:
    """
    Turns a description into a spec that always passes validation.

    Configuration is injected; when `generator` is omitted a GeminiGenerator
    is built from `llm_settings` if an API key is configured.
    """

    def __init__(
        self,
        llm_settings: Optional[LLMSettings] = None,
        generator: Optional[Any] = None,
        mock: Optional[MockGenerator] = None,
    ):
        self.llm_settings = llm_settings or LLMSettings(gemini_api_key=None)
        if generator is None and self.llm_settings.is_configured:
            generator = GeminiGenerator(self.llm_settings)
        self.generator = generator
        self.mock = mock or MockGenerator()

    @property
    def is_configured(self) -> bool:
        """Whether a live generator will be tried."""
        return self.generator is not None

    async def extract(self, description: str) -> Dict[str, Any]:
        """Spec for the description. Never raises."""
        report = await self.run(description)
        return report.spec

    async def run(self, description: str, job_id: Optional[str] = None) -> ExtractionReport:
        """Like extract(), but also reports which generator produced the spec."""
        if self.generator is None:
            log("EXTRACT", "Live generator not configured, using mock data", job_id=job_id)
            return self._fallback(description, reason=None, job_id=job_id)

        result = await self.try_live(description)
        if result.is_ok():
            log("EXTRACT", "✅ Live extraction accepted", job_id=job_id)
            return ExtractionReport(spec=result.spec, source=SpecSource.LIVE)

        log("EXTRACT", f"⚠️ Live extraction rejected ({result.describe()}), falling back to mock data", job_id=job_id)
        return self._fallback(description, reason=result.describe(), job_id=job_id)

    async def try_live(self, description: str) -> ExtractionResult:
        """One live attempt. Returns ERR instead of raising."""
        stage = "generate"
        try:
            data = await self.generator.generate(description)

            stage = "shape"
            if not isinstance(data, dict):
                return extraction_err(f"expected a JSON object, got {type(data).__name__}", stage)

            stage = "normalize"
            normalize_response(data)

            stage = "enforce"
            if not enforce_permission_safety(data):
                log("EXTRACT", "Permission enforcement skipped for malformed spec")

            stage = "validate"
            issues = collect_spec_issues(data)
            if issues:
                raise SpecValidationError(issues)

            return extraction_ok(data)
        except ParseError as e:
            return extraction_err(e.message, "parse")
        except AppBuilderError as e:
            return extraction_err(e.message, stage)
        except Exception as e:
            return extraction_err(f"{type(e).__name__}: {e}", stage)

    def _fallback(self, description: str, reason: Optional[str], job_id: Optional[str] = None) -> ExtractionReport:
        spec = self.mock.generate(description)
        # Templates already satisfy the invariants; re-running is a no-op
        enforce_permission_safety(spec)
        log("EXTRACT", f"Mock spec ready: {spec.get('appName')}", job_id=job_id)
        return ExtractionReport(spec=spec, source=SpecSource.MOCK, fallback_reason=reason)
