import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Storage backend: memory, file, redis, github, r2 or sql
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "file").lower()

# Local file backend
DATA_DIR = os.getenv("DATA_DIR", "data")

# Schedule windows
DEFAULT_WINDOW_DAYS = int(os.getenv("DEFAULT_WINDOW_DAYS", "7"))
INIT_WINDOW_DAYS = int(os.getenv("INIT_WINDOW_DAYS", "60"))

# Redis Configuration (Upstash or self-hosted)
REDIS_URL = os.getenv("REDIS_URL")
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD")
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_SSL = os.getenv("REDIS_SSL", "false").lower() == "true"
REDIS_KEY_PREFIX = os.getenv("REDIS_KEY_PREFIX", "data/")

# GitHub contents API (each write becomes a commit)
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")
GITHUB_OWNER = os.getenv("GITHUB_OWNER")
GITHUB_REPO = os.getenv("GITHUB_REPO", "abra")
GITHUB_BRANCH = os.getenv("GITHUB_BRANCH", "main")
GITHUB_DATA_PATH = os.getenv("GITHUB_DATA_PATH", "data")

# Cloudflare R2 Configuration
R2_ACCOUNT_ID = os.getenv("R2_ACCOUNT_ID")
R2_ACCESS_KEY_ID = os.getenv("R2_ACCESS_KEY_ID")
R2_SECRET_ACCESS_KEY = os.getenv("R2_SECRET_ACCESS_KEY")
R2_BUCKET_NAME = os.getenv("R2_BUCKET_NAME", "abra-data")
R2_KEY_PREFIX = os.getenv("R2_KEY_PREFIX", "")

# SQL backend
DATABASE_URL = os.getenv("DATABASE_URL")

# CORS - comma separated list of origins
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:8888,http://localhost:5173,http://localhost:3000",
).split(",")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "8000"))
