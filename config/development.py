import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:3000/api"),
    "timeout": float(os.getenv("API_TIMEOUT", "10")),
    "token": os.getenv("API_TOKEN") or None,
}

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
