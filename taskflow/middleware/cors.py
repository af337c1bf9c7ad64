"""CORS configuration for browser clients of the RPC API."""
from fastapi.middleware.cors import CORSMiddleware
import os

# Get environment configuration
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")


def allowed_origins(raw: str = CORS_ORIGINS) -> list[str]:
    """Split the comma separated origin list, dropping blanks and duplicates."""
    origins: list[str] = []
    for origin in raw.split(","):
        origin = origin.strip()
        if origin and origin not in origins:
            origins.append(origin)
    return origins


def add_cors_middleware(app):
    """Add CORS middleware to the FastAPI application."""
    origins = allowed_origins()
    # Development also accepts any localhost port
    origin_regex = None if ENVIRONMENT == "production" else r"http://(localhost|127\.0\.0\.1)(:\d+)?"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_origin_regex=origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
