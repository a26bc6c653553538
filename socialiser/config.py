import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./socialiser.db")

# Firebase Configuration (ID tokens issued by the frontend sign-in)
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Key used to encrypt the admin-managed Google API key at rest
# (generate with: python -c "from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())")
SETTINGS_ENCRYPTION_KEY = os.getenv("SETTINGS_ENCRYPTION_KEY")

# Frontend base URL for invite links
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# Gemini Configuration
# GOOGLE_API_KEY is only used when no admin key has been saved through /settings
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_DEFAULT_MODEL = os.getenv("GEMINI_DEFAULT_MODEL", "gemini-2.5-flash")
GEMINI_SMART_FALLBACK_MODEL = os.getenv("GEMINI_SMART_FALLBACK_MODEL", "gemini-1.5-pro")
GEMINI_FINAL_FALLBACK_MODEL = os.getenv("GEMINI_FINAL_FALLBACK_MODEL", "gemini-1.5-flash-latest")

# AI chat behaviour
AI_CHAT_HISTORY_TURNS = int(os.getenv("AI_CHAT_HISTORY_TURNS", "10"))
AI_CHAT_RATE_LIMIT_PER_MINUTE = int(os.getenv("AI_CHAT_RATE_LIMIT_PER_MINUTE", "20"))

# Redis (rate limiting only)
REDIS_URL = os.getenv("REDIS_URL")
