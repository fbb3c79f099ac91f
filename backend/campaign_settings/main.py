"""
FastAPI main application module for the campaign settings API
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
import uuid
import logging

from campaign_settings.core.config import settings
from campaign_settings.core.context import TenantNotResolvedError
from campaign_settings.core.database_utils import create_all_tables, check_database_connection
from campaign_settings.api.api_v1.api import api_router
from campaign_settings.api.deps import parse_tenant_id

VERSION = "1.0.0"

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Campaign Settings API",
    description="Per-tenant integration settings for the campaign tool",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Tenant resolution middleware
@app.middleware("http")
async def attach_request_state(request: Request, call_next):
    request.state.tenant_id = parse_tenant_id(request.headers.get(settings.TENANT_HEADER))
    request.state.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response

# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response

# Include API routes
app.include_router(api_router, prefix=settings.API_V1_PREFIX)

# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": VERSION
    }

# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Campaign Settings API",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health"
    }

@app.exception_handler(TenantNotResolvedError)
async def tenant_not_resolved_handler(request: Request, exc: TenantNotResolvedError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Tenant not identified"}
    )

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())) or "body",
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid data", "errors": errors}
    )

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error"}
    )

# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    logger.info("Starting Campaign Settings API...")

    if not check_database_connection():
        logger.error("Failed to connect to database")
        raise RuntimeError("Database connection failed")

    # Note: In production, use Alembic migrations instead
    if settings.ENVIRONMENT == "development":
        create_all_tables()
        logger.info("Database tables created/verified successfully")

    logger.info("Application startup complete")

# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on application shutdown"""
    logger.info("Shutting down Campaign Settings API...")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "campaign_settings.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
