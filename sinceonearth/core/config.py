import os
from dotenv import load_dotenv
from loguru import logger

load_dotenv()

def _get_env(key: str, default: str | None = None) -> str:
    val = os.getenv(key, default)
    if val is None:
        raise RuntimeError(f"Missing required env var: {key}")
    return val

APP_ENV = _get_env("APP_ENV", "local")
DATABASE_URL = _get_env("DATABASE_URL", "postgresql+psycopg2://localhost:5432/sinceonearth")
LOG_LEVEL = _get_env("LOG_LEVEL", "DEBUG")
LOG_FILE = _get_env("LOG_FILE", "logs/app.log")

# JWT_SECRET wins, SESSION_SECRET is the legacy name
JWT_SECRET = _get_env("JWT_SECRET", os.getenv("SESSION_SECRET"))
JWT_ALGORITHM = "HS256"
JWT_EXPIRES_DAYS = int(_get_env("JWT_EXPIRES_DAYS", "7"))

CORS_ORIGINS = [o.strip() for o in _get_env("CORS_ORIGINS", "*").split(",") if o.strip()]

logger.debug(f"Config loaded: APP_ENV={APP_ENV}, LOG_LEVEL={LOG_LEVEL}, JWT_EXPIRES_DAYS={JWT_EXPIRES_DAYS}")
