#!/usr/bin/env python3
"""
Data Reasoning Assistant - Main Entry Point
Evaluates assumptions against uploaded data with LLM reasoning
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Import after path setup
from reasoning_assistant.main import app
from reasoning_assistant.config import settings
import uvicorn

def main():
    """Main entry point for the application"""
    print("=" * 60)
    print("🧠 Data Reasoning Assistant - Assumption Evaluation API")
    print("=" * 60)
    print(f"📄 Accepted files: {', '.join(settings.ALLOWED_EXTENSIONS)}")
    print(f"🤖 Provider: {settings.LLM_PROVIDER}")
    print(f"🌐 Server: http://{settings.API_HOST}:{settings.API_PORT}")
    print(f"📚 API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")
    print("=" * 60)

    if not settings.has_api_key:
        print("⚠️  WARNING: no API key configured for the selected provider!")
        print("   Analysis and suggestion requests will fail until one is set.")
        print("   Configure GEMINI_API_KEY (or GROQ_API_KEY) in the .env file.")
        print()
    else:
        print("✅ API key configured - AI reasoning available")
        print(f"   Analysis model: {settings.ANALYSIS_MODEL}")
        print(f"   Suggestion model: {settings.SUGGESTION_MODEL}")
        print()

    # Run the application
    uvicorn.run(
        "reasoning_assistant.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )

if __name__ == "__main__":
    main()
