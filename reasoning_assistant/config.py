from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    # AI Configuration
    LLM_PROVIDER: str = "gemini"  # gemini | groq
    GEMINI_API_KEY: str = ""
    API_KEY: str = ""  # Generic credential name, used when GEMINI_API_KEY is empty
    ANALYSIS_MODEL: str = "gemini-3-pro-preview"
    SUGGESTION_MODEL: str = "gemini-3-flash-preview"
    GROQ_API_KEY: str = ""
    GROQ_MODEL: str = "llama-3.3-70b-versatile"
    AI_MAX_TOKENS: int = 8000
    AI_TEMPERATURE: float = 0.2

    # File Configuration
    MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_EXTENSIONS: List[str] = ['.csv', '.txt', '.xlsx', '.xls', '.pdf']

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/reasoning_assistant.log"  # Empty string disables file logging

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Use the generic key if the Gemini key is empty
        if not self.GEMINI_API_KEY and self.API_KEY:
            self.GEMINI_API_KEY = self.API_KEY

    @property
    def has_api_key(self) -> bool:
        if self.LLM_PROVIDER.lower() == "groq":
            return bool(self.GROQ_API_KEY)
        return bool(self.GEMINI_API_KEY)


settings = Settings()
