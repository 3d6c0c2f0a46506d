import os
import multiprocessing as mp

from dotenv import load_dotenv

load_dotenv()  # read .env before anything looks at the environment


def _optional_float(name):
    value = os.getenv(name)
    return float(value) if value else None


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "0") == "1"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()]

# Worker pool hosting the search (default to CPU count - 1, min 1)
AI_MAX_WORKERS = max(1, int(os.getenv("AI_MAX_WORKERS", str(max(1, mp.cpu_count() - 1)))))
AI_EXECUTOR = os.getenv("AI_EXECUTOR", "process").lower()
AI_DEFAULT_DIFFICULTY = int(os.getenv("AI_DEFAULT_DIFFICULTY", "2"))
AI_RESULT_TIMEOUT = _optional_float("AI_RESULT_TIMEOUT")
