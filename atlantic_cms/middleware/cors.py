"""
CORS middleware configuration
"""
from fastapi.middleware.cors import CORSMiddleware
from atlantic_cms.config import CORS_ALLOWED_ORIGINS, CORS_ALLOW_CREDENTIALS


def setup_cors(app):
    """
    Setup CORS middleware for FastAPI app

    The public site and the admin area are served from different origins
    during development, so both need to be allowed.

    Usage:
        from atlantic_cms.middleware.cors import setup_cors
        setup_cors(app)
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOWED_ORIGINS,
        allow_credentials=CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        expose_headers=["Cache-Control"],
    )
