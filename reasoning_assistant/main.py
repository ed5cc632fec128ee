from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import uvicorn

from reasoning_assistant import __version__
from reasoning_assistant.api.routes import router
from reasoning_assistant.config import settings
from reasoning_assistant.utils.logger import setup_logger, get_logger

# Setup logging
setup_logger()
logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting Data Reasoning Assistant...")

    # Log configuration
    logger.info(f"LLM provider: {settings.LLM_PROVIDER}")
    logger.info(f"Analysis model: {settings.ANALYSIS_MODEL}")
    logger.info(f"Suggestion model: {settings.SUGGESTION_MODEL}")
    logger.info(f"Max file size: {settings.MAX_FILE_SIZE} bytes")
    logger.info(f"Accepted extensions: {', '.join(settings.ALLOWED_EXTENSIONS)}")

    # The key is not validated here; calls fail at the provider instead
    if not settings.has_api_key:
        logger.warning("No API key configured. Analysis and suggestion calls will fail.")

    yield

    # Shutdown
    logger.info("Shutting down Data Reasoning Assistant...")

# Create FastAPI application
app = FastAPI(
    title="Data Reasoning Assistant",
    description="Evaluates assumptions against uploaded data with an LLM",
    version=__version__,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify actual origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router, prefix="/api/v1", tags=["Reasoning"])

# Root endpoint
@app.get("/")
async def root():
    """Welcome endpoint"""
    return {
        "message": "Welcome to the Data Reasoning Assistant",
        "version": __version__,
        "docs": "/docs",
        "api_base": "/api/v1"
    }

if __name__ == "__main__":
    uvicorn.run(
        "reasoning_assistant.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
