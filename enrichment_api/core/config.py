"""Environment-driven settings for the enrichment API.

Values are read once at import time. ``enrichment_api.main`` calls
``load_dotenv()`` before anything imports this module, so a local ``.env``
file is honoured during development.
"""

import os

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated list; empty means allow every origin.
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "").split(",")
    if origin.strip()
]

# OpenRouter is OpenAI-compatible; an empty key disables the AI path.
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY", "")
OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "google/gemini-2.5-flash")
OPENROUTER_TIMEOUT = float(os.getenv("OPENROUTER_TIMEOUT", "30"))

# Optional app attribution headers (recommended by OpenRouter)
OPENROUTER_SITE_URL = os.getenv("OPENROUTER_SITE_URL", "")
OPENROUTER_APP_NAME = os.getenv("OPENROUTER_APP_NAME", "")
