from reasoning_assistant.services.document_extractor import DocumentExtractor
from reasoning_assistant.services.reasoning_client import ReasoningClient

def get_document_extractor() -> DocumentExtractor:
    """Dependency to get DocumentExtractor instance"""
    return DocumentExtractor()

def get_reasoning_client() -> ReasoningClient:
    """Dependency to get ReasoningClient instance"""
    return ReasoningClient()
