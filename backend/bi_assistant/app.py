"""Backend application factory.

Returns a small dependency container (a plain dict) that the Streamlit
UI, or any other front end, wires itself against.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from .ai.openai_client import OpenAIClient
from .config import Settings, load_settings
from .logging_config import setup_logging
from .orchestrator import GenerationOrchestrator
from .tasks import TASKS

logger = logging.getLogger(__name__)

# Ensure local `.env` values are available when running via Streamlit/CLI.
load_dotenv(Path(__file__).resolve().parents[2] / ".env", override=False)


def create_app(settings: Settings | None = None) -> Dict[str, Any]:
    """Create the backend dependency container."""
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    if not settings.configured:
        logger.warning(
            "API_KEY environment variable not found. The app will not be able to reach the AI service."
        )

    ai_client = OpenAIClient(
        api_key=settings.api_key,
        base_url=settings.base_url,
        text_model=settings.text_model,
        image_model=settings.image_model,
    )
    return {
        "settings": settings,
        "ai_client": ai_client,
        "orchestrator": GenerationOrchestrator(
            ai_client,
            media_timeout_seconds=settings.media_timeout_seconds,
        ),
        "tasks": TASKS,
    }
