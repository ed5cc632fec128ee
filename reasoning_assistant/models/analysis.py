from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from enum import Enum
import re


class EvaluationStatus(str, Enum):
    SUPPORTED = "SUPPORTED"
    REFUTED = "REFUTED"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    PARTIALLY_SUPPORTED = "PARTIALLY_SUPPORTED"


_BULLET_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")
_SPACE_RE = re.compile(r"\s+")


def normalize_assumption(text: str) -> str:
    """Drop list markers, collapse whitespace and casefold for text matching"""
    text = _BULLET_RE.sub("", text or "")
    return _SPACE_RE.sub(" ", text).strip().casefold()


class AssumptionEvaluation(BaseModel):
    assumption: str = Field(..., description="Assumption as restated by the model")
    status: EvaluationStatus = Field(..., description="Verdict against the data")
    reasoning: str = Field(..., description="Reasoning separating facts from inference")
    supportingFacts: List[str] = Field(default_factory=list, description="Facts from the data supporting the assumption")
    conflictingFacts: List[str] = Field(default_factory=list, description="Facts from the data conflicting with it")
    missingDataPoints: List[str] = Field(default_factory=list, description="Data needed to reach a verdict")

    model_config = ConfigDict(frozen=True)


class AnalysisResult(BaseModel):
    summary: str = Field(..., description="Executive summary of the reasoning process")
    overallConfidence: float = Field(..., ge=0, le=1, description="Data completeness score from 0 to 1")
    keyDecisionRecommendation: str = Field(..., description="Actionable advice for a decision-maker")
    evaluations: List[AssumptionEvaluation] = Field(..., description="One entry per evaluated assumption")

    model_config = ConfigDict(frozen=True)

    def evaluation_for(self, assumption: str) -> Optional[AssumptionEvaluation]:
        """
        Find the evaluation for an assumption by its text.
        The model is not bound to return evaluations in the submitted order.
        """
        wanted = normalize_assumption(assumption)
        for evaluation in self.evaluations:
            if normalize_assumption(evaluation.assumption) == wanted:
                return evaluation
        return None

    def status_counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in EvaluationStatus}
        for evaluation in self.evaluations:
            counts[evaluation.status.value] += 1
        return counts


def split_assumptions(text: str) -> List[str]:
    """Split an assumptions text block into individual non-empty assumptions"""
    assumptions = []
    for line in (text or "").splitlines():
        cleaned = _BULLET_RE.sub("", line).strip()
        if cleaned:
            assumptions.append(cleaned)
    return assumptions
