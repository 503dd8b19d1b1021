import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:3000/api"),
    "timeout": float(os.getenv("API_TIMEOUT", "10")),
    "token": os.getenv("API_TOKEN") or None,
}

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
