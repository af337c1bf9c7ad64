"""Main FastAPI application for the taskflow backend."""
from fastapi import FastAPI
import os

from taskflow import __version__
from taskflow.db.init import init_db
from taskflow.middleware.cors import add_cors_middleware
from taskflow.routers import rpc_router
from taskflow.rpc.procedures import register_procedures
from taskflow.rpc.server import get_rpc_server
from taskflow.utils.logger import get_logger
from taskflow.utils.timeutils import utcnow

logger = get_logger("taskflow.api")

SERVER_HOST = os.environ.get("SERVER_HOST", "0.0.0.0")
SERVER_PORT = int(os.environ.get("SERVER_PORT", "2022"))

# Create FastAPI application
app = FastAPI(
    title="taskflow API",
    description="Tasks, pomodoro sessions and user preferences over named RPC procedures",
    version=__version__,
)

# Add CORS middleware
add_cors_middleware(app)

register_procedures(get_rpc_server())


@app.on_event("startup")
async def startup_event():
    """Create database tables on startup."""
    init_db()
    logger.info("Application startup complete", procedures=get_rpc_server().list_procedures())


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "timestamp": utcnow().isoformat(), "version": __version__}


@app.get("/")
async def root():
    """Root endpoint - API welcome message."""
    return {
        "title": "taskflow API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "rpc": "/rpc",
    }


app.include_router(rpc_router, prefix="/rpc")  # RPC endpoints: /rpc/{procedure}


if __name__ == "__main__":
    import uvicorn
    logger.info("Starting server", host=SERVER_HOST, port=SERVER_PORT)
    uvicorn.run(
        "taskflow.main:app",
        host=SERVER_HOST,
        port=SERVER_PORT,
    )
