import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name, default):
    """Read an integer env var, falling back to the default on bad input."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


class Config:
    # OpenAI (report generation)
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    OPENAI_REPORT_MODEL = os.getenv("OPENAI_REPORT_MODEL", "gpt-4o-mini")  # lightweight model
    OPENAI_TIMEOUT_SECONDS = _int_env("OPENAI_TIMEOUT_SECONDS", 60)
    OPENAI_GENERATION_CONFIG = {
        "temperature": 0.4,
        "max_tokens": 4096,
    }

    # Gemini (advisor chat + titles)
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    GEMINI_API_URL = os.getenv(
        "GEMINI_API_URL",
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent",
    )
    GEMINI_TIMEOUT_SECONDS = _int_env("GEMINI_TIMEOUT_SECONDS", 60)
    GEMINI_GENERATION_CONFIG = {
        "temperature": 0.7,
        "topP": 0.95,
        "maxOutputTokens": 2048,
    }

    # Chunked report flow
    REPORT_THRESHOLD_COUNT = _int_env("REPORT_THRESHOLD_COUNT", 60)
    REPORT_MAX_PARTS = _int_env("REPORT_MAX_PARTS", 4)

    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME = os.getenv("MONGO_DB_NAME", "advisor_ai")
    FLASK_DEBUG = os.getenv("FLASK_DEBUG", "false").lower() == "true"
    # Reverse proxies in front of the app whose X-Forwarded-For hop is trusted (0 = none)
    TRUSTED_PROXY_COUNT = _int_env("TRUSTED_PROXY_COUNT", 0)

    # JWT Configuration
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
    JWT_EXPIRES_DAYS = _int_env("JWT_EXPIRES_DAYS", 30)

    # CORS Configuration
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    CORS_METHODS = os.getenv("CORS_METHODS", "GET,POST,OPTIONS").split(",")
