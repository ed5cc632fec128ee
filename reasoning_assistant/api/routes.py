from fastapi import APIRouter, Depends, File, UploadFile, HTTPException
from pathlib import Path

from reasoning_assistant import __version__
from reasoning_assistant.config import settings
from reasoning_assistant.models.analysis import AnalysisResult
from reasoning_assistant.models.document import DocumentFormat
from reasoning_assistant.models.responses import (
    ExtractionResponse,
    AnalysisRequest,
    SuggestionRequest,
    SuggestionResponse,
)
from reasoning_assistant.services.document_extractor import DocumentExtractor
from reasoning_assistant.services.reasoning_client import ReasoningClient
from reasoning_assistant.api.dependencies import get_document_extractor, get_reasoning_client
from reasoning_assistant.utils.logger import get_logger
from reasoning_assistant.utils.exceptions import (
    ValidationError,
    UnsupportedFormatError,
    ExtractionError,
    AnalysisError,
    SuggestionError,
)

logger = get_logger(__name__)
router = APIRouter()

@router.post("/extract", response_model=ExtractionResponse)
async def extract_document(
    file: UploadFile = File(...),
    extractor: DocumentExtractor = Depends(get_document_extractor)
):
    """
    Extract a normalized text blob from an uploaded CSV, TXT, Excel or PDF file
    """
    try:
        logger.info(f"Extracting uploaded file: {file.filename}")
        text = await extractor.extract_upload(file)

        return ExtractionResponse(
            file_name=file.filename,
            format=DocumentFormat(Path(file.filename).suffix.lower().lstrip('.')),
            characters=len(text),
            text=text
        )

    except UnsupportedFormatError as e:
        logger.warning(f"Rejected upload {file.filename}: {str(e)}")
        raise HTTPException(status_code=415, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except ExtractionError as e:
        logger.error(f"Extraction error for {file.filename}: {str(e)}")
        raise HTTPException(status_code=422, detail="Error parsing file. Please try a different document.")
    except Exception as e:
        logger.error(f"Unexpected error during extraction: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error during file extraction")

@router.post("/analyze", response_model=AnalysisResult)
async def analyze_assumptions(
    request: AnalysisRequest,
    client: ReasoningClient = Depends(get_reasoning_client)
):
    """
    Evaluate each assumption against the data
    - Marks assumptions without evidence as INSUFFICIENT_DATA
    - Returns supporting/conflicting facts and one decision recommendation
    """
    try:
        return await client.analyze(request.data, request.assumptions)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AnalysisError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error during analysis: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error during analysis")

@router.post("/suggestions", response_model=SuggestionResponse)
async def suggest_assumptions(
    request: SuggestionRequest,
    client: ReasoningClient = Depends(get_reasoning_client)
):
    """
    Suggest 3-5 testable assumptions for the data
    """
    try:
        suggestions = await client.suggest_assumptions(request.data)
        return SuggestionResponse(suggestions=suggestions)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SuggestionError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error during suggestion: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error during suggestion")

@router.get("/health")
async def health_check():
    """
    API health check endpoint
    """
    return {
        "status": "healthy",
        "message": "Data Reasoning Assistant is running",
        "version": __version__,
        "provider": settings.LLM_PROVIDER,
        "api_key_configured": settings.has_api_key
    }

@router.get("/")
async def root():
    """
    Root endpoint with API information
    """
    return {
        "message": "Data Reasoning Assistant API",
        "version": __version__,
        "endpoints": {
            "extract": "POST /extract - Extract text from CSV, TXT, Excel or PDF",
            "analyze": "POST /analyze - Evaluate assumptions against data",
            "suggestions": "POST /suggestions - Suggest assumptions for data",
            "health": "GET /health - Health check"
        }
    }
