"""Configuration management for the LunchPick admin console."""
import os
from typing import Final
from pathlib import Path

# Load environment variables from .env file if it exists
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Data source: "memory" (fixture-backed mock responder) or "http" (network API)
DATA_SOURCE: Final[str] = os.getenv('DATA_SOURCE', 'memory').lower()
API_BASE_URL: Final[str] = os.getenv('API_BASE_URL', 'http://localhost:8000/api')
API_TOKEN: Final[str] = os.getenv('API_TOKEN', 'mock-jwt-token')
HTTP_TIMEOUT_SECONDS: Final[float] = float(os.getenv('HTTP_TIMEOUT_SECONDS', '10'))
MOCK_LATENCY_MS: Final[int] = int(os.getenv('MOCK_LATENCY_MS', '0'))
