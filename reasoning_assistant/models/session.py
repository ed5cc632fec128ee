from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .analysis import AnalysisResult


class SessionPhase(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    ANALYZING = "analyzing"
    SUGGESTING = "suggesting"
    RESULT_READY = "result_ready"
    ERRORED = "errored"


@dataclass(frozen=True)
class SessionState:
    data: str = ""
    assumptions: str = ""
    phase: SessionPhase = SessionPhase.IDLE
    is_extracting: bool = False
    is_analyzing: bool = False
    is_suggesting: bool = False
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    epoch: int = 0

    @property
    def is_busy(self) -> bool:
        return self.is_extracting or self.is_analyzing or self.is_suggesting

    @property
    def has_data(self) -> bool:
        return bool(self.data.strip())

    @property
    def can_evaluate(self) -> bool:
        return self.has_data and bool(self.assumptions.strip()) and not self.is_busy

    @property
    def can_suggest(self) -> bool:
        return self.has_data and not self.is_busy
