from .analysis import EvaluationStatus, AssumptionEvaluation, AnalysisResult, split_assumptions
from .document import DocumentFormat, RawDocument
from .session import SessionPhase, SessionState
from .responses import ExtractionResponse, AnalysisRequest, SuggestionRequest, SuggestionResponse

__all__ = [
    "EvaluationStatus",
    "AssumptionEvaluation",
    "AnalysisResult",
    "split_assumptions",
    "DocumentFormat",
    "RawDocument",
    "SessionPhase",
    "SessionState",
    "ExtractionResponse",
    "AnalysisRequest",
    "SuggestionRequest",
    "SuggestionResponse"
]
