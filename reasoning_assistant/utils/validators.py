from pathlib import Path
from reasoning_assistant.config import settings
from .exceptions import ValidationError, UnsupportedFormatError

UNSUPPORTED_FORMAT_MESSAGE = "Unsupported file format. Please upload CSV, TXT, PDF, or Excel."

def validate_file_size(file_size: int) -> bool:
    """Validate that file size is within limits"""
    if file_size > settings.MAX_FILE_SIZE:
        raise ValidationError(f"File size {file_size} exceeds maximum allowed size {settings.MAX_FILE_SIZE}")
    return True

def validate_file_extension(file_name: str) -> str:
    """Validate the extension against the accepted formats and return it without the dot"""
    file_extension = Path(file_name or "").suffix.lower()
    if file_extension not in settings.ALLOWED_EXTENSIONS:
        raise UnsupportedFormatError(UNSUPPORTED_FORMAT_MESSAGE)
    return file_extension.lstrip('.')

def validate_required_text(value: str, message: str) -> str:
    """Reject empty or whitespace-only input"""
    if value is None or not value.strip():
        raise ValidationError(message)
    return value
