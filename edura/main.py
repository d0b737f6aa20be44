# /edura/main.py

import logging
from contextlib import asynccontextmanager

# --- Core FastAPI Imports ---
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core import config
from .core.exceptions import StoreUnavailable
from .db.base import Base
from .db.database import engine

# --- Application-specific Router Imports ---
from .routers import assignments_router, manager_router, student_router

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at startup: make sure every registered table exists.
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="Edura Backend API",
    description="Assignments, grading and tenant scoping for learning centers.",
    version="1.0.0",
    lifespan=lifespan,
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    logger.warning("Store unavailable while serving %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": exc.message},
        headers={"Retry-After": "1"},
    )


# --- API Router Inclusion ---
app.include_router(assignments_router.router, prefix="/api/assignments", tags=["Assignments"])
app.include_router(student_router.router, prefix="/api/student", tags=["Student"])
app.include_router(manager_router.router, prefix="/api/manager", tags=["Manager"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Edura Backend is running!", "version": app.version}
