"""
Strategy Analyst API - FastAPI application entry point
Document upload, grounded chat and multi-document comparison
"""

import logging

# Configure logging to show INFO level
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s"
)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from analyst.config import settings
from analyst.database import create_tables, check_database
from analyst.middleware.rate_limiter import setup_rate_limiting
from analyst.utils.error_handlers import setup_error_handlers
from analyst.api.deps import get_ai_service, get_verifier
from analyst.storage import get_storage_backend

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Upload business documents, chat with them and compare them",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "user", "description": "Current user profile"},
        {"name": "documents", "description": "Document upload and management"},
        {"name": "chat", "description": "Questions answered from one document"},
        {"name": "comparison", "description": "Multi-document comparison"},
        {"name": "health", "description": "Service health"},
    ]
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_rate_limiting(app)
setup_error_handlers(app)


@app.on_event("startup")
async def startup_event():
    """Create tables and report unconfigured dependencies"""
    create_tables()

    if not get_storage_backend().is_available():
        logger.error(f"STORAGE UNAVAILABLE ({settings.STORAGE_BACKEND}): uploads will be rejected with 503")
    if not get_ai_service().is_configured():
        logger.error("AI SERVICE UNCONFIGURED: set LLM_API_KEY to enable chat and comparison")
    if not get_verifier().is_configured():
        logger.error("AUTHENTICATION UNCONFIGURED: set AUTH_JWT_SECRET or AUTH_JWKS_URL, every request will get 401")

    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} started")
    logger.info(f"API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")


@app.get("/api/health", tags=["health"])
async def health_check():
    """
    Service health

    healthy: everything available
    degraded: storage or AI unavailable (uploads or chat fail)
    critical: database unreachable
    """
    services = {
        "database": "connected" if check_database() else "unavailable",
        "storage": "available" if get_storage_backend().is_available() else "unavailable",
        "ai": "configured" if get_ai_service().is_configured() else "unconfigured",
    }

    if services["database"] != "connected":
        overall = "critical"
    elif services["storage"] != "available" or services["ai"] != "configured":
        overall = "degraded"
    else:
        overall = "healthy"

    return JSONResponse(
        status_code=503 if overall == "critical" else 200,
        content={
            "status": overall,
            "version": settings.APP_VERSION,
            "services": services,
        },
    )


# Import and register routers
from analyst.api import users, comparison, documents, chat

app.include_router(users.router, prefix="/api")
app.include_router(comparison.router, prefix="/api")
app.include_router(documents.router, prefix="/api")
app.include_router(chat.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "analyst.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD
    )
