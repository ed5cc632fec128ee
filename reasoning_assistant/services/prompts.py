"""
Prompt templates and response schemas for the reasoning calls.

Schemas use the Gemini schema vocabulary (upper-case type names); the Groq
backend embeds the same dictionaries in its prompt.
"""
from reasoning_assistant.models.analysis import EvaluationStatus

ANALYSIS_PROMPT = """As a Data Reasoning Assistant, evaluate the following assumptions against the provided dataset.

RULES:
1. Do not invent data. Never state a fact that is not present in the dataset.
2. If data is insufficient for an assumption, explicitly mark it as INSUFFICIENT_DATA instead of guessing.
3. Separate facts (directly in data) from opinions/inferences in your reasoning.
4. Be critical but neutral. Do not hedge and do not flatter.
5. Provide one clear, concrete decision-making recommendation.

DATASET:
{data}

ASSUMPTIONS TO EVALUATE:
{assumptions}
"""

SUGGESTION_PROMPT = """Analyze the following dataset and suggest 3-5 critical, testable assumptions or hypotheses that a decision-maker should evaluate.
Focus on potential patterns, anomalies, risks, or growth opportunities.
Output the suggestions as a simple JSON array of strings.

DATASET:
{data}
"""

_STRING_LIST = {"type": "ARRAY", "items": {"type": "STRING"}}

ANALYSIS_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING", "description": "Executive summary of the reasoning process."},
        "overallConfidence": {"type": "NUMBER", "description": "A score from 0 to 1 representing data completeness."},
        "keyDecisionRecommendation": {"type": "STRING", "description": "Actionable advice based on the evaluation."},
        "evaluations": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "assumption": {"type": "STRING"},
                    "status": {"type": "STRING", "enum": [status.value for status in EvaluationStatus]},
                    "reasoning": {"type": "STRING"},
                    "supportingFacts": _STRING_LIST,
                    "conflictingFacts": _STRING_LIST,
                    "missingDataPoints": _STRING_LIST,
                },
                "required": ["assumption", "status", "reasoning"],
            },
        },
    },
    "required": ["summary", "evaluations", "overallConfidence", "keyDecisionRecommendation"],
}

SUGGESTION_RESPONSE_SCHEMA = _STRING_LIST


def build_analysis_prompt(data: str, assumptions: str) -> str:
    return ANALYSIS_PROMPT.format(data=data, assumptions=assumptions)


def build_suggestion_prompt(data: str) -> str:
    return SUGGESTION_PROMPT.format(data=data)
