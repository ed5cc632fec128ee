from pydantic import BaseModel, Field
from typing import List

from .document import DocumentFormat


class ExtractionResponse(BaseModel):
    file_name: str
    format: DocumentFormat
    characters: int
    text: str

class AnalysisRequest(BaseModel):
    data: str = Field(..., description="Dataset text to reason over")
    assumptions: str = Field(..., description="Assumptions to evaluate, one per line")

class SuggestionRequest(BaseModel):
    data: str = Field(..., description="Dataset text to derive hypotheses from")

class SuggestionResponse(BaseModel):
    suggestions: List[str]
