"""Runtime configuration, read from the environment."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

DEFAULT_SEATS = int(os.getenv("SENATE_DEFAULT_SEATS", "12"))
NOMINATION_MARKER = os.getenv("SENATE_NOMINATION_MARKER", "S")
HTTP_TIMEOUT = float(os.getenv("SENATE_HTTP_TIMEOUT", "30.0"))
LOG_LEVEL = os.getenv("SENATE_LOG_LEVEL", "WARNING")
DEFAULT_TALLY_ENGINE = os.getenv("SENATE_TALLY_ENGINE", "Senate STV")
