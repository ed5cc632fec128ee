from .document_extractor import DocumentExtractor
from .reasoning_client import ReasoningClient
from .session_controller import SessionController
from .llm_backends import GeminiBackend, GroqBackend, create_backend

__all__ = [
    "DocumentExtractor",
    "ReasoningClient",
    "SessionController",
    "GeminiBackend",
    "GroqBackend",
    "create_backend"
]
