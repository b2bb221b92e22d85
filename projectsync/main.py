"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from projectsync.config import settings
from projectsync.routers import dashboard, goals, projects
from projectsync.workspace import workspace


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    # Startup
    workspace.open()
    yield
    # Shutdown
    workspace.close()


app = FastAPI(
    title="ProjectSync API",
    description="Local project and task tracker with AI roadmaps",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(projects.router)
app.include_router(goals.router)
app.include_router(dashboard.router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"status": "ok", "message": "ProjectSync API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
