# backend/eventcal/__init__.py
"""
Package init: load environment variables from a .env file if present.
This runs before the config module reads os.getenv for settings.
"""

from dotenv import load_dotenv

load_dotenv()
