"""
Session state machine for the assistant UI.

``reduce`` is a pure transition function over an immutable ``SessionState``.
``SessionController`` runs extraction, analysis and suggestion coroutines and
feeds their completions back through the reducer, tagged with the epoch that
was current when the operation started. ``clear`` bumps the epoch, so a
response that arrives after the session was cleared is dropped.
"""
import asyncio
from dataclasses import dataclass, replace
from typing import List, Optional

from reasoning_assistant.utils.logger import get_logger
from reasoning_assistant.utils.exceptions import ReasoningAssistantError, ExtractionError
from reasoning_assistant.models.analysis import AnalysisResult
from reasoning_assistant.models.session import SessionPhase, SessionState
from reasoning_assistant.services.document_extractor import DocumentExtractor
from reasoning_assistant.services.reasoning_client import (
    ReasoningClient,
    ANALYSIS_FAILED_MESSAGE,
    SUGGESTION_FAILED_MESSAGE,
    MISSING_INPUT_MESSAGE,
)

logger = get_logger(__name__)

EXTRACTION_FAILED_MESSAGE = "Error parsing file. Please try a different document."
SUGGESTION_FAILED_PREFIX = "Could not generate suggestions: "


# Actions

@dataclass(frozen=True)
class DataEdited:
    text: str

@dataclass(frozen=True)
class AssumptionsEdited:
    text: str

@dataclass(frozen=True)
class ExtractionStarted:
    pass

@dataclass(frozen=True)
class ExtractionSucceeded:
    text: str
    epoch: int

@dataclass(frozen=True)
class ExtractionFailed:
    message: str
    epoch: int

@dataclass(frozen=True)
class AnalysisRequested:
    pass

@dataclass(frozen=True)
class AnalysisSucceeded:
    result: AnalysisResult
    epoch: int

@dataclass(frozen=True)
class AnalysisFailed:
    message: str
    epoch: int

@dataclass(frozen=True)
class SuggestionStarted:
    pass

@dataclass(frozen=True)
class SuggestionSucceeded:
    suggestions: List[str]
    epoch: int

@dataclass(frozen=True)
class SuggestionFailed:
    message: str
    epoch: int

@dataclass(frozen=True)
class BackToInputs:
    pass

@dataclass(frozen=True)
class ClearSession:
    pass


_COMPLETIONS = (
    ExtractionSucceeded, ExtractionFailed,
    AnalysisSucceeded, AnalysisFailed,
    SuggestionSucceeded, SuggestionFailed,
)


def append_suggestions(assumptions: str, suggestions: List[str]) -> str:
    """Append suggestions as list items, keeping the existing text as prefix"""
    if not suggestions:
        return assumptions
    formatted = "\n".join(f"- {suggestion}" for suggestion in suggestions)
    if assumptions.strip():
        return f"{assumptions}\n{formatted}"
    return formatted


def _resting_phase(state: SessionState) -> SessionPhase:
    return SessionPhase.RESULT_READY if state.result is not None else SessionPhase.IDLE


def reduce(state: SessionState, action) -> SessionState:
    """Apply one action and return the next state"""
    if isinstance(action, _COMPLETIONS) and action.epoch != state.epoch:
        logger.debug(f"Dropping stale {type(action).__name__} (epoch {action.epoch}, current {state.epoch})")
        return state

    if isinstance(action, DataEdited):
        phase = _resting_phase(state) if state.phase == SessionPhase.ERRORED else state.phase
        return replace(state, data=action.text, error=None, phase=phase)

    if isinstance(action, AssumptionsEdited):
        phase = _resting_phase(state) if state.phase == SessionPhase.ERRORED else state.phase
        return replace(state, assumptions=action.text, error=None, phase=phase)

    if isinstance(action, ExtractionStarted):
        if state.is_busy:
            return state
        return replace(state, is_extracting=True, error=None, phase=SessionPhase.EXTRACTING)

    if isinstance(action, ExtractionSucceeded):
        state = replace(state, data=action.text, is_extracting=False)
        return replace(state, phase=_resting_phase(state))

    if isinstance(action, ExtractionFailed):
        return replace(state, is_extracting=False, result=None, error=action.message, phase=SessionPhase.ERRORED)

    if isinstance(action, AnalysisRequested):
        if state.is_busy:
            return state
        if not state.data.strip() or not state.assumptions.strip():
            return replace(state, result=None, error=MISSING_INPUT_MESSAGE, phase=SessionPhase.IDLE)
        return replace(state, is_analyzing=True, result=None, error=None, phase=SessionPhase.ANALYZING)

    if isinstance(action, AnalysisSucceeded):
        return replace(state, is_analyzing=False, result=action.result, phase=SessionPhase.RESULT_READY)

    if isinstance(action, AnalysisFailed):
        return replace(state, is_analyzing=False, result=None, error=action.message, phase=SessionPhase.ERRORED)

    if isinstance(action, SuggestionStarted):
        if state.is_busy or not state.has_data:
            return state
        return replace(state, is_suggesting=True, error=None, phase=SessionPhase.SUGGESTING)

    if isinstance(action, SuggestionSucceeded):
        state = replace(
            state,
            assumptions=append_suggestions(state.assumptions, action.suggestions),
            is_suggesting=False,
        )
        return replace(state, phase=_resting_phase(state))

    if isinstance(action, SuggestionFailed):
        return replace(
            state,
            is_suggesting=False,
            result=None,
            error=SUGGESTION_FAILED_PREFIX + action.message,
            phase=SessionPhase.ERRORED,
        )

    if isinstance(action, BackToInputs):
        if state.phase != SessionPhase.RESULT_READY:
            return state
        return replace(state, result=None, phase=SessionPhase.IDLE)

    if isinstance(action, ClearSession):
        return SessionState(epoch=state.epoch + 1)

    raise TypeError(f"Unknown session action: {action!r}")


class SessionController:
    """
    Owns one SessionState and drives it through the reducer
    """

    def __init__(self, reasoning_client: Optional[ReasoningClient] = None,
                 extractor: Optional[DocumentExtractor] = None):
        self.logger = logger
        self.reasoning_client = reasoning_client or ReasoningClient()
        self.extractor = extractor or DocumentExtractor()
        self.state = SessionState()

    def dispatch(self, action) -> SessionState:
        previous = self.state.phase
        self.state = reduce(self.state, action)
        self.logger.debug(f"{type(action).__name__}: {previous.value} -> {self.state.phase.value}")
        return self.state

    def edit_data(self, text: str) -> SessionState:
        return self.dispatch(DataEdited(text))

    def edit_assumptions(self, text: str) -> SessionState:
        return self.dispatch(AssumptionsEdited(text))

    def back_to_inputs(self) -> SessionState:
        return self.dispatch(BackToInputs())

    def clear(self) -> SessionState:
        self.logger.info("Clearing session")
        return self.dispatch(ClearSession())

    async def upload(self, file_name: str, content: bytes) -> SessionState:
        if self.state.is_busy:
            return self.state
        self.dispatch(ExtractionStarted())
        epoch = self.state.epoch

        try:
            text = await asyncio.to_thread(self.extractor.extract, file_name, content)
        except ReasoningAssistantError as e:
            self.logger.error(f"File processing error: {str(e)}")
            return self.dispatch(ExtractionFailed(self._extraction_message(e), epoch))
        except Exception as e:
            self.logger.error(f"Unexpected error processing {file_name}: {str(e)}")
            return self.dispatch(ExtractionFailed(EXTRACTION_FAILED_MESSAGE, epoch))

        return self.dispatch(ExtractionSucceeded(text, epoch))

    async def evaluate(self) -> SessionState:
        if self.state.is_busy:
            return self.state
        self.dispatch(AnalysisRequested())
        if not self.state.is_analyzing:
            return self.state
        epoch = self.state.epoch

        try:
            result = await self.reasoning_client.analyze(self.state.data, self.state.assumptions)
        except ReasoningAssistantError as e:
            return self.dispatch(AnalysisFailed(str(e), epoch))
        except Exception as e:
            self.logger.error(f"Unexpected analysis error: {str(e)}")
            return self.dispatch(AnalysisFailed(ANALYSIS_FAILED_MESSAGE, epoch))

        return self.dispatch(AnalysisSucceeded(result, epoch))

    async def suggest(self) -> SessionState:
        if self.state.is_busy:
            return self.state
        self.dispatch(SuggestionStarted())
        if not self.state.is_suggesting:
            return self.state
        epoch = self.state.epoch

        try:
            suggestions = await self.reasoning_client.suggest_assumptions(self.state.data)
        except ReasoningAssistantError as e:
            return self.dispatch(SuggestionFailed(str(e), epoch))
        except Exception as e:
            self.logger.error(f"Unexpected suggestion error: {str(e)}")
            return self.dispatch(SuggestionFailed(SUGGESTION_FAILED_MESSAGE, epoch))

        return self.dispatch(SuggestionSucceeded(suggestions, epoch))

    def _extraction_message(self, error: ReasoningAssistantError) -> str:
        if isinstance(error, ExtractionError):
            return EXTRACTION_FAILED_MESSAGE
        return str(error)
