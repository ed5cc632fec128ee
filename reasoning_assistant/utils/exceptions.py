class ReasoningAssistantError(Exception):
    """Base exception for the Data Reasoning Assistant"""
    pass

class ValidationError(ReasoningAssistantError):
    """Missing or invalid user input, raised before any I/O"""
    pass

class UnsupportedFormatError(ReasoningAssistantError):
    """Uploaded file extension is not an accepted format"""
    pass

class ExtractionError(ReasoningAssistantError):
    """Parsing a recognized document format failed"""
    pass

class AnalysisError(ReasoningAssistantError):
    """Assumption evaluation call or response validation failed"""
    pass

class SuggestionError(ReasoningAssistantError):
    """Assumption suggestion call or response validation failed"""
    pass

class ConfigurationError(ReasoningAssistantError):
    """Configuration related errors"""
    pass
