"""Main FastAPI application"""
from fastapi import FastAPI
from legal_navigator.config import get_settings
from legal_navigator.middleware.cors import setup_cors
from legal_navigator.middleware.error_handler import setup_error_handlers
import logging

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Legal Navigator API",
    description="Guided conversation that fills out the Indiana Appearance form",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Setup CORS
setup_cors(app, settings)

# Error responses are always {"error": ...}
setup_error_handlers(app)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "legal-navigator",
        "mode": settings.conversation_mode,
        "persistence": "configured" if settings.supabase_configured else "not configured"
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Legal Navigator API",
        "version": "1.0.0",
        "docs": "/docs"
    }

# Import and include routers
from legal_navigator.routers import chat, forms

app.include_router(chat.router, prefix="/api/chat", tags=["Chat"])
app.include_router(forms.router, prefix="/api/generate-pdf", tags=["Forms"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
