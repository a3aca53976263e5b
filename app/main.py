# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Portfolio API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import PortfolioException, portfolio_exception_handler
from app.routers import health, projects, uploads
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Nothing to start: the Supabase client is created on first use.
    """
    logger.info(f"Starting Portfolio API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Portfolio API")


# Create FastAPI application
app = FastAPI(
    title="Portfolio API",
    description="""
## Personal Portfolio Backend

Serves the public project list for the landing page and the admin panel's
project editor. Records live in a Supabase table, screenshots in a Supabase
Storage bucket, and sign-in goes through Supabase Auth.

### Admin access

Admin routes need a Supabase access token for the single configured admin
address. Any other account is signed out and gets 403.

### Quick Start

```bash
# 1. List projects (public)
curl http://localhost:8000/api/v1/projects

# 2. Upload screenshots
curl -X POST http://localhost:8000/api/v1/uploads/images \\
  -H "Authorization: Bearer $TOKEN" \\
  -F "files=@shot1.png" -F "files=@shot2.png"

# 3. Create a project
curl -X POST http://localhost:8000/api/v1/projects \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"title": "A", "description": "d", "tech_stack": ["Go"], "screenshots": []}'
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Admin identity and sign-out",
        },
        {
            "name": "Projects",
            "description": "Public project list and admin CRUD",
        },
        {
            "name": "Uploads",
            "description": "Screenshot upload and discard",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(PortfolioException)
async def handle_portfolio_exception(request: Request, exc: PortfolioException):
    """Handle custom Portfolio exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.details}")
    return await portfolio_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

app.include_router(
    projects.router,
    prefix="/api/v1/projects",
    tags=["Projects"]
)

app.include_router(
    uploads.router,
    prefix="/api/v1/uploads",
    tags=["Uploads"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint - returns API info."""
    return {
        "name": "Portfolio API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
