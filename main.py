"""
Tool Registry - FastAPI application entrypoint.

Run locally:
  uvicorn main:app --host 127.0.0.1 --port 8000 --reload

Environment: see .env.example and registry.config.Settings.
"""

import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the app root (directory containing main.py) regardless of the working directory
_APP_DIR = Path(__file__).resolve().parent
load_dotenv(_APP_DIR / ".env")

from registry.config import get_settings  # noqa: E402
from registry.server import create_app  # noqa: E402

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("registry")

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
