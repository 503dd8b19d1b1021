SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": "http://api.test/api",
    "timeout": 2.0,
    "token": None,
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
