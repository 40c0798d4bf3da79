"""
Configuration Module
This module handles application configuration, initialization of the Gemini
client, and the fallback values used when a model response is incomplete.
It centralizes all configuration settings.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple

from dotenv import load_dotenv
from google import genai

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s: %(message)s',
    handlers=[
        logging.FileHandler("aqi_dashboard.log"),
        logging.StreamHandler()
    ]
)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


class Config:
    """Application configuration class."""

    # Flask settings
    DEBUG = os.getenv("FLASK_DEBUG", "false").lower() in ("1", "true", "yes")
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = _env_int("PORT", 8001)
    THREADED = True

    # Gemini settings
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # Search settings
    MIN_QUERY_LENGTH = _env_int("MIN_QUERY_LENGTH", 3)
    MAX_SEARCH_RESULTS = 5

    # Parsing settings
    MAX_RECOMMENDATIONS = 5

    @classmethod
    def validate(cls):
        """Validate required configuration."""
        if not cls.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY not found in environment variables")


@dataclass(frozen=True)
class FallbackDefaults:
    """
    Placeholder values substituted when a field cannot be read from the
    model's text. None of these are measurements; they only keep the
    dashboard renderable.
    """

    aqi_min: int = 10
    aqi_max: int = 50  # exclusive
    status: str = "Good"
    description: str = "Estimated via grounding tools."
    confidence: str = "High"
    location_name: str = "Search Location"
    pollutants: Dict[str, float] = field(default_factory=lambda: {
        'pm25': 12.0,
        'pm10': 20.0,
        'no2': 15.0,
        'so2': 5.0,
        'o3': 30.0,
        'co': 0.5,
    })
    recommendations: Tuple[str, ...] = (
        "Sensitive groups should reduce outdoor exercise.",
        "Keep windows closed if possible.",
    )


class AIModels:
    """Manages Gemini client initialization."""

    def __init__(self):
        """Initialize the Gemini client from the environment."""
        Config.validate()

        self.client = genai.Client(api_key=Config.GEMINI_API_KEY)
        self.model = Config.GEMINI_MODEL
        logging.info(f"Initialized Gemini client: {Config.GEMINI_MODEL}")

    def get_client(self):
        """Get the Gemini client instance."""
        return self.client

    def get_model(self) -> str:
        """Get the configured model name."""
        return self.model
