from .routes import router
from .dependencies import get_document_extractor, get_reasoning_client

__all__ = ["router", "get_document_extractor", "get_reasoning_client"]
