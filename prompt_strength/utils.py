"""
UTILITIES - Shared functions and decorators

This module provides common utilities used across the application:
1. Structured JSON logging configuration
2. Route error handling decorator
3. Prompt text validation
4. Constants and score helpers
"""

import logging
import json
import math
from functools import wraps
from typing import Callable
from datetime import datetime, timezone
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)

def setup_logging(level: int = logging.INFO):
    """Setup structured JSON logging on the root logger (idempotent)."""
    logger = logging.getLogger()
    logger.setLevel(level)
    if any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)

def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance with consistent formatting."""
    return logging.getLogger(name)

def handle_db_errors(func: Callable) -> Callable:
    """
    Decorator to handle database errors consistently across all routes.

    Usage:
    @handle_db_errors
    def my_route(db: Session = Depends(get_db)):
        # Your route logic here
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger = get_logger(func.__module__)
            logger.error(f"Database error in {func.__name__}: {e}")
            raise HTTPException(status_code=500, detail="Database error")
        except HTTPException:
            raise
        except Exception as e:
            logger = get_logger(func.__module__)
            logger.error(f"Unexpected error in {func.__name__}: {format_error_message(e)}")
            raise HTTPException(status_code=500, detail="Internal server error")
    return wrapper

def safe_db_commit(db: Session, *objects) -> None:
    """
    Safely commit database objects with proper error handling.

    Args:
        db: Database session
        *objects: SQLAlchemy objects to add and commit
    """
    try:
        for obj in objects:
            if obj is not None:
                db.add(obj)
        db.commit()
    except Exception as e:
        db.rollback()
        raise e

class Constants:
    """Application constants in one place."""

    # Rate limiting
    DEFAULT_RATE_LIMIT = 100  # requests per minute
    RATE_LIMIT_WINDOW = 60  # seconds

    # Validation limits
    MAX_PROMPT_LENGTH = 20000
    MAX_API_KEY_LENGTH = 512
    MAX_MODEL_ID_LENGTH = 64

    # Length lever defaults (characters)
    DEFAULT_MIN_LENGTH = 50
    DEFAULT_MAX_LENGTH = 4000

    # Aggregation
    SUGGESTION_SCORE_CUTOFF = 70
    TIP_SCORE_CUTOFF = 60
    MAX_SUGGESTIONS = 5
    MAX_MODEL_TIPS = 3

    # Deep analysis
    DEFAULT_MODEL_ID = "claude"
    DEFAULT_PROVIDER_ID = "anthropic"
    DEFAULT_MAX_TOKENS = 1500
    DEFAULT_TIMEOUT = 60
    ANALYSIS_CACHE_TTL = 1800  # 30 minutes

def validate_prompt_text(text: str) -> str:
    """Validate prompt text; surrounding whitespace is kept since it counts toward length."""
    if not text or not text.strip():
        raise ValueError("Prompt text cannot be empty")
    if len(text) > Constants.MAX_PROMPT_LENGTH:
        raise ValueError(f"Prompt text too long (max {Constants.MAX_PROMPT_LENGTH} chars)")
    return text

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, unlike round())."""
    return int(math.floor(value + 0.5))

def format_error_message(error: Exception) -> str:
    """Format error message for logging."""
    return f"{type(error).__name__}: {str(error)}"
