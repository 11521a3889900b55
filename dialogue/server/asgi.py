"""
ASGI entry point for running the audio server on its own.

Used by uvicorn: uvicorn server.asgi:app --port 8000
"""

from dotenv import load_dotenv

load_dotenv()

from config import AppConfig  # pylint: disable=wrong-import-position
from server.app import create_app  # pylint: disable=wrong-import-position

app = create_app(AppConfig.load_from_env().audio_dir)
