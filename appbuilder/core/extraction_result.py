# appbuilder/core/extraction_result.py
"""
Tagged outcome types for the extraction pipeline.

The live attempt yields an ExtractionResult (OK or ERR). The orchestrator
turns that into an ExtractionReport, which always carries a usable spec and
records where it came from.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Dict, Any, Optional


class ExtractionStatus(Enum):
    """Outcome of the live generator attempt."""
    OK = "ok"
    ERR = "err"


class SpecSource(Enum):
    """Which generator produced the final spec."""
    LIVE = "live"
    MOCK = "mock"


@dataclass
class ExtractionResult:
    """Result of one live extraction attempt."""
    status: ExtractionStatus
    spec: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None
    stage: str = ""  # generate | parse | shape | normalize | enforce | validate

    def is_ok(self) -> bool:
        return self.status == ExtractionStatus.OK

    def describe(self) -> str:
        if self.is_ok():
            return "ok"
        return f"{self.stage or 'unknown'}: {self.reason}"


def extraction_ok(spec: Dict[str, Any]) -> ExtractionResult:
    return ExtractionResult(status=ExtractionStatus.OK, spec=spec)


def extraction_err(reason: str, stage: str = "") -> ExtractionResult:
    return ExtractionResult(status=ExtractionStatus.ERR, reason=reason, stage=stage)


@dataclass
class ExtractionReport:
    """Final, always-valid extraction output."""
    spec: Dict[str, Any]
    source: SpecSource
    fallback_reason: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        return self.source == SpecSource.MOCK
