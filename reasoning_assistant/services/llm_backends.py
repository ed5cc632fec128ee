import json
from typing import Any, Dict, Optional

import google.generativeai as genai
from groq import AsyncGroq

from reasoning_assistant.config import Settings, settings as default_settings
from reasoning_assistant.utils.logger import get_logger
from reasoning_assistant.utils.exceptions import ConfigurationError

logger = get_logger(__name__)

ANALYSIS_TASK = "analysis"
SUGGESTION_TASK = "suggestion"


def to_gemini_schema(schema: Dict[str, Any]) -> "genai.protos.Schema":
    """Convert a schema dictionary into the Gemini proto representation"""
    fields: Dict[str, Any] = {"type_": getattr(genai.protos.Type, schema["type"])}
    if "description" in schema:
        fields["description"] = schema["description"]
    if "enum" in schema:
        fields["format_"] = "enum"
        fields["enum"] = list(schema["enum"])
    if "items" in schema:
        fields["items"] = to_gemini_schema(schema["items"])
    if "properties" in schema:
        fields["properties"] = {
            name: to_gemini_schema(value) for name, value in schema["properties"].items()
        }
    if "required" in schema:
        fields["required"] = list(schema["required"])
    return genai.protos.Schema(**fields)


class GeminiBackend:
    """
    Schema-constrained generation through the Gemini API
    """
    name = "gemini"

    def __init__(self, api_key: str, models: Dict[str, str], temperature: float, max_tokens: int):
        self.api_key = api_key
        self.models = models
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logger

    async def generate_json(self, prompt: str, schema: Dict[str, Any], task: str) -> str:
        model_name = self.models[task]
        self.logger.debug(f"Using Gemini model {model_name} for {task}")

        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(model_name)
        response = await model.generate_content_async(
            prompt,
            generation_config=genai.types.GenerationConfig(
                temperature=self.temperature,
                max_output_tokens=self.max_tokens,
                response_mime_type="application/json",
                response_schema=to_gemini_schema(schema),
            )
        )
        return response.text.strip()


class GroqBackend:
    """
    JSON-mode generation through Groq. Groq only guarantees a JSON object,
    so the schema goes into the prompt and top-level arrays are wrapped.
    """
    name = "groq"
    WRAPPER_KEY = "items"

    def __init__(self, api_key: str, model: str, temperature: float, max_tokens: int):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logger

    async def generate_json(self, prompt: str, schema: Dict[str, Any], task: str) -> str:
        self.logger.debug(f"Using Groq model {self.model} for {task}")

        wrapped = schema.get("type") != "OBJECT"
        if wrapped:
            schema = {"type": "OBJECT", "properties": {self.WRAPPER_KEY: schema}, "required": [self.WRAPPER_KEY]}

        full_prompt = (
            f"{prompt}\n"
            f"Respond only with a JSON object that matches this schema:\n"
            f"{json.dumps(schema, indent=2)}"
        )

        client = AsyncGroq(api_key=self.api_key)
        response = await client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": full_prompt}],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            response_format={"type": "json_object"}
        )

        result_text = response.choices[0].message.content
        if wrapped:
            return json.dumps(json.loads(result_text)[self.WRAPPER_KEY])
        return result_text.strip()


def create_backend(config: Optional[Settings] = None):
    """Build the backend named by LLM_PROVIDER"""
    config = config or default_settings
    provider = config.LLM_PROVIDER.lower()

    if provider == GeminiBackend.name:
        return GeminiBackend(
            api_key=config.GEMINI_API_KEY,
            models={ANALYSIS_TASK: config.ANALYSIS_MODEL, SUGGESTION_TASK: config.SUGGESTION_MODEL},
            temperature=config.AI_TEMPERATURE,
            max_tokens=config.AI_MAX_TOKENS,
        )
    if provider == GroqBackend.name:
        return GroqBackend(
            api_key=config.GROQ_API_KEY,
            model=config.GROQ_MODEL,
            temperature=config.AI_TEMPERATURE,
            max_tokens=config.AI_MAX_TOKENS,
        )
    raise ConfigurationError(f"Unknown LLM provider: {config.LLM_PROVIDER}")
