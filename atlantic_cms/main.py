"""
FastAPI application entry point
Main application initialization
"""
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from atlantic_cms.config import DEBUG, MODE
from atlantic_cms.middleware.cors import setup_cors
from atlantic_cms.database import close_db
import logging

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Atlantic Creators CMS API",
    description="Content backend for the Atlantic Creators marketing site and admin panel",
    version="0.1.0",
    debug=DEBUG,
)

# Setup CORS
setup_cors(app)


@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting application in {MODE} mode")


@app.on_event("shutdown")
async def shutdown_event():
    """Close database connections on shutdown"""
    logger.info("Shutting down application")
    await close_db()
    logger.info("Application shut down successfully")


@app.get("/")
async def root():
    """Root endpoint - health check"""
    return JSONResponse({
        "message": "Atlantic Creators CMS API",
        "version": "0.1.0",
        "mode": MODE,
        "status": "running"
    })


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return JSONResponse({
        "status": "healthy",
        "mode": MODE
    })


from atlantic_cms.apps.authentication.router import router as auth_router
app.include_router(auth_router, prefix="/api/auth", tags=["authentication"])

from atlantic_cms.apps.cms.router import public_router as content_router, router as cms_router
app.include_router(content_router, prefix="/api/content", tags=["content"])
app.include_router(cms_router, prefix="/api/cms", tags=["cms"])

from atlantic_cms.apps.blog.router import router as blog_router
app.include_router(blog_router, prefix="/api/blog", tags=["blog"])

from atlantic_cms.apps.portfolio.router import router as portfolio_router
app.include_router(portfolio_router, prefix="/api/portfolio", tags=["portfolio"])

from atlantic_cms.apps.images.router import router as images_router
app.include_router(images_router, prefix="/api/images", tags=["images"])

from atlantic_cms.apps.uploads.router import router as uploads_router
app.include_router(uploads_router, prefix="/api/uploads", tags=["uploads"])

from atlantic_cms.apps.recycle_bin.router import router as recycle_bin_router
app.include_router(recycle_bin_router, prefix="/api/recycle-bin", tags=["recycle-bin"])

from atlantic_cms.apps.forms.router import router as forms_router
app.include_router(forms_router, prefix="/api/forms", tags=["forms"])

from atlantic_cms.apps.dashboard.router import router as dashboard_router
app.include_router(dashboard_router, prefix="/api/dashboard", tags=["dashboard"])


if __name__ == "__main__":
    import uvicorn
    import os
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(
        "atlantic_cms.main:app",
        host="0.0.0.0",
        port=port,
        reload=DEBUG,
        log_level="debug" if DEBUG else "info"
    )
