# /edura/core/config.py

"""
Runtime configuration for the Edura backend.

Every value is read from the environment once at import time, with a default
that is suitable for local development.
"""

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated list of allowed CORS origins.
CORS_ORIGINS: List[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

# Late-submission policy is a product decision owned by the API layer.
# The content engine only receives the resulting boolean.
ALLOW_LATE_SUBMISSIONS = os.getenv("ALLOW_LATE_SUBMISSIONS", "true").lower() == "true"
