"""
Configuration for the expense tracker.
Reads settings from environment variables (and a local .env file).
"""

import logging
import os
from dotenv import load_dotenv

load_dotenv()

_repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Storage
_env_data_path = os.getenv("EXPENSE_TRACKER_DATA", os.path.join("data", "expenses.json"))
DATA_PATH = _env_data_path if os.path.isabs(_env_data_path) else os.path.join(_repo_root, _env_data_path)

# Display
CURRENCY = os.getenv("EXPENSE_TRACKER_CURRENCY", "$")

# Logging
LOG_LEVEL = os.getenv("EXPENSE_TRACKER_LOG_LEVEL", "INFO").upper()


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging; unknown level names fall back to INFO."""
    numeric = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=numeric if isinstance(numeric, int) else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
