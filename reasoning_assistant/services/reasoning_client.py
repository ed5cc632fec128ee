from typing import List

from pydantic import TypeAdapter, ValidationError as SchemaValidationError

from reasoning_assistant.utils.logger import get_logger
from reasoning_assistant.utils.validators import validate_required_text
from reasoning_assistant.utils.exceptions import AnalysisError, SuggestionError
from reasoning_assistant.models.analysis import AnalysisResult
from reasoning_assistant.services.llm_backends import create_backend, ANALYSIS_TASK, SUGGESTION_TASK
from reasoning_assistant.services.prompts import (
    ANALYSIS_RESPONSE_SCHEMA,
    SUGGESTION_RESPONSE_SCHEMA,
    build_analysis_prompt,
    build_suggestion_prompt,
)

logger = get_logger(__name__)

ANALYSIS_FAILED_MESSAGE = "Failed to analyze data reasoning. Please check your inputs and try again."
SUGGESTION_FAILED_MESSAGE = "Failed to generate suggestions. Please check your data."
MISSING_INPUT_MESSAGE = "Please provide both data and assumptions to begin evaluation."
MISSING_DATA_MESSAGE = "Please provide data before requesting suggestions."

_suggestions_adapter = TypeAdapter(List[str])


class ReasoningClient:
    """
    Evaluates assumptions against a dataset through a schema-constrained LLM call.
    Provider failures and schema violations are reported the same way: one
    opaque error per call, no retry, no partial salvage.
    """

    def __init__(self, backend=None):
        self.logger = logger
        self.backend = backend or create_backend()

    async def analyze(self, data: str, assumptions: str) -> AnalysisResult:
        validate_required_text(data, MISSING_INPUT_MESSAGE)
        validate_required_text(assumptions, MISSING_INPUT_MESSAGE)

        prompt = build_analysis_prompt(data, assumptions)
        try:
            self.logger.info(f"Evaluating assumptions with {self.backend.name} ({len(data):,} characters of data)")
            result_text = await self.backend.generate_json(prompt, ANALYSIS_RESPONSE_SCHEMA, ANALYSIS_TASK)
            result = AnalysisResult.model_validate_json(result_text, strict=True)
        except SchemaValidationError as e:
            self.logger.error(f"Analysis response violated the schema: {str(e)}")
            raise AnalysisError(ANALYSIS_FAILED_MESSAGE) from e
        except Exception as e:
            self.logger.error(f"Analysis error: {str(e)}")
            raise AnalysisError(ANALYSIS_FAILED_MESSAGE) from e

        self.logger.info(
            f"✅ Analysis complete: {len(result.evaluations)} evaluations, confidence {result.overallConfidence:.2f}"
        )
        return result

    async def suggest_assumptions(self, data: str) -> List[str]:
        validate_required_text(data, MISSING_DATA_MESSAGE)

        prompt = build_suggestion_prompt(data)
        try:
            self.logger.info(f"Requesting assumption suggestions with {self.backend.name}")
            result_text = await self.backend.generate_json(prompt, SUGGESTION_RESPONSE_SCHEMA, SUGGESTION_TASK)
            suggestions = _suggestions_adapter.validate_json(result_text, strict=True)
        except SchemaValidationError as e:
            self.logger.error(f"Suggestion response violated the schema: {str(e)}")
            raise SuggestionError(SUGGESTION_FAILED_MESSAGE) from e
        except Exception as e:
            self.logger.error(f"Suggestion error: {str(e)}")
            raise SuggestionError(SUGGESTION_FAILED_MESSAGE) from e

        self.logger.info(f"✅ Received {len(suggestions)} suggestions")
        return suggestions
