"""
MAIN APPLICATION - FastAPI app initialization and configuration

This is the entry point for the Prompt Strength service.
It sets up:
1. FastAPI app with metadata and documentation
2. CORS, rate limiting and request logging middleware
3. Database table creation and default rubric seeding
4. Route registration (public scoring/analysis, admin-guarded configuration)
5. Health check endpoint
"""

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
import uuid
from collections import defaultdict
from prompt_strength.auth import require_admin
from prompt_strength.config import CORS_ORIGIN, RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW
from prompt_strength.db import Base, SessionLocal, engine
from prompt_strength import models   # must be imported before create_all to register tables
from prompt_strength.routes import analyze, evaluate, levers, models as model_routes, system
from prompt_strength.services.config_service import ConfigService
from prompt_strength.utils import get_logger, setup_logging

VERSION = "1.0.0"

setup_logging()
logger = get_logger(__name__)

# STEP 1: Create FastAPI application with metadata
app = FastAPI(
    title="Prompt Strength",
    version=VERSION,
    docs_url="/swagger",
    redoc_url="/docs",
    swagger_ui_parameters={
        "defaultModelsExpandDepth": -1,
        "defaultModelExpandDepth": -1,
    },
)

# STEP 2: Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in CORS_ORIGIN.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Simple in-process rate limiting (per client IP, sliding window)
rate_limit_store = defaultdict(list)

@app.middleware("http")
async def rate_limit_middleware(request: Request, call_next):
    client_ip = request.client.host if request.client else "unknown"
    now = time.time()

    rate_limit_store[client_ip] = [
        req_time for req_time in rate_limit_store[client_ip]
        if now - req_time < RATE_LIMIT_WINDOW
    ]

    if len(rate_limit_store[client_ip]) >= RATE_LIMIT_REQUESTS:
        logger.warning(f"Rate limit exceeded for {client_ip}")
        return JSONResponse(status_code=429, content={"detail": "Rate limit exceeded"})

    rate_limit_store[client_ip].append(now)

    return await call_next(request)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = str(uuid.uuid4())[:8]
    start_time = time.time()

    logger.info(f"[{request_id}] {request.method} {request.url.path}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(f"[{request_id}] {response.status_code} - {process_time:.3f}s")

    return response

# STEP 3: Database initialization and default rubric
def init_db() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ConfigService.seed_defaults(db)
    finally:
        db.close()

init_db()

# STEP 4: Health check
@app.get("/health")
def health():
    """
    Simple health check endpoint.

    Returns: {"status": "ok"} if the service is running
    """
    return {"status": "ok", "version": VERSION}

# STEP 5: Register API route modules
admin = [Depends(require_admin)]
app.include_router(evaluate.router,     prefix="/evaluate", tags=["evaluate"])  # Heuristic scoring
app.include_router(analyze.router,      prefix="/analyze",  tags=["analyze"])   # Deep analysis (caller's API key)
app.include_router(levers.router,       prefix="/levers",   tags=["admin"], dependencies=admin)
app.include_router(model_routes.router, prefix="/models",   tags=["admin"], dependencies=admin)
app.include_router(system.router,       prefix="/system",   tags=["admin"], dependencies=admin)
