"""
CONFIGURATION - Environment-based settings management

This file loads configuration from environment variables with sensible defaults.
It handles:
1. Database URL for the rubric store (SQLite default, Postgres optional)
2. Admin access and CORS settings
3. Rate limiting
4. Deep analysis gateway settings (timeouts, token limits, Redis cache)

All settings can be overridden via environment variables or .env file.
"""

import os
from dotenv import load_dotenv
from prompt_strength.utils import Constants

# Load environment variables from .env file if it exists
load_dotenv()

# STEP 1: Database configuration
DEFAULT_DATABASE_URL = "sqlite:///./prompt_strength.db"
_raw_database_url = os.getenv("DATABASE_URL", "").strip()
DATABASE_URL = _raw_database_url or DEFAULT_DATABASE_URL

# STEP 2: Admin and HTTP settings
ADMIN_SECRET = os.getenv("ADMIN_SECRET", "")  # Required for non-localhost admin access
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "*")

# STEP 3: Rate limiting settings
RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", str(Constants.DEFAULT_RATE_LIMIT)))
RATE_LIMIT_WINDOW = int(os.getenv("RATE_LIMIT_WINDOW", str(Constants.RATE_LIMIT_WINDOW)))

# STEP 4: Evaluation and deep analysis settings
DEFAULT_MODEL_ID = os.getenv("DEFAULT_MODEL_ID", Constants.DEFAULT_MODEL_ID)
ANALYSIS_TIMEOUT = float(os.getenv("ANALYSIS_TIMEOUT", str(Constants.DEFAULT_TIMEOUT)))
ANALYSIS_MAX_TOKENS = int(os.getenv("ANALYSIS_MAX_TOKENS", str(Constants.DEFAULT_MAX_TOKENS)))
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
