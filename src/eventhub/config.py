# robust .env loading
import os
from pathlib import Path

from dotenv import load_dotenv

# 1) load from CWD (project root when you run commands there)
load_dotenv(override=False)
# 2) also try repo root even if code runs from src/
_repo_root = Path(__file__).resolve().parents[2]
_env_path = _repo_root / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=_env_path, override=False)

# --- Flask / server ---
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
FLASK_ENV = os.getenv("FLASK_ENV", "production")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- MongoDB ---
MONGODB_URI = os.getenv("MONGODB_URI")
MONGO_DB = os.getenv("MONGO_DB", "eventhub")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

# --- Pages ---
SIMILAR_EVENTS_LIMIT = int(os.getenv("SIMILAR_EVENTS_LIMIT", "3"))
EVENT_LIST_LIMIT = int(os.getenv("EVENT_LIST_LIMIT", "50"))
