from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

import requests
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_setup import configure_logging
from .container import build_container

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).resolve().parents[3]


def create_app(settings_module: Optional[str] = None, *, session: Optional[requests.Session] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(_ROOT / "templates"), static_folder=str(_ROOT / "static"))

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    api_config = getattr(settings, "API_CONFIG")

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("lesson-tracker settings=%s api=%s", settings_module, api_config.get("base_url"))

    container = build_container(api_config=api_config, session=session)
    app.extensions["lesson_tracker.container"] = container

    register_attendance(app, container)

    return app
