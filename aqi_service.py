"""
AQI Service Module
The two pipelines behind the dashboard:

- search_locations: free-text place search, returns pick-able candidates
- fetch_aqi_data: five-provider AQI estimate for a coordinate

Both build a prompt, call Gemini with grounding, and parse the free text
back into aqi_models types.
"""

import logging
import random
import re
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional

from aqi_models import PROVIDER_NAMES, AQIData, LocationSearchResult
from config import AIModels, Config, FallbackDefaults
from detectors.location_line_detector import LocationLineDetector
from detectors.provider_section_detector import ProviderSectionDetector
from detectors.text_extraction import extract_bullet_list, extract_line, segment_by_provider
from gemini_analyzer import GeminiAnalyzer, extract_sources, grounding_chunks, response_text
from prompts import build_aqi_prompt, build_location_search_prompt

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%I:%M:%S %p"

# Heading that introduces the recommendation bullets, e.g. "**Health Recommendations:**"
# or "### 6. Health Recommendations"
_RECOMMENDATION_HEADING = re.compile(r'^[#*\s]*(?:\d+[.)]\s*)?[*\s]*(?:overall\s+|health\s+)*recommendations?\b', re.IGNORECASE | re.MULTILINE)


def _recommendation_scope(text: str) -> str:
    """Text after a recommendations heading, or the whole text when there is none."""
    match = _RECOMMENDATION_HEADING.search(text)
    return text[match.end():] if match else text


def parse_aqi_response(
    text: str,
    chunks: Iterable[Any] = (),
    fallbacks: Optional[FallbackDefaults] = None,
    rng: Optional[random.Random] = None,
    now: Optional[Callable[[], datetime]] = None,
    providers: Iterable[str] = PROVIDER_NAMES,
    max_recommendations: int = Config.MAX_RECOMMENDATIONS,
) -> AQIData:
    """
    Build an AQIData from a raw AQI response.

    Never raises on malformed or empty text: each field that cannot be read
    is replaced by its fallback, so the result always has one entry per
    provider with every pollutant filled.
    """
    fallbacks = fallbacks or FallbackDefaults()
    now = now or datetime.now
    text = text or ""

    detector = ProviderSectionDetector(fallbacks=fallbacks, rng=rng)
    sections = segment_by_provider(text, providers)
    provider_data = tuple(detector.detect(name, section) for name, section in sections.items())

    recommendations = extract_bullet_list(_recommendation_scope(text), max_recommendations)
    if not recommendations:
        recommendations = list(fallbacks.recommendations)

    return AQIData(
        location_name=extract_line(text, 'Location') or fallbacks.location_name,
        providers=provider_data,
        recommendations=tuple(recommendations),
        sources=tuple(extract_sources(list(chunks))),
        timestamp=now().strftime(TIMESTAMP_FORMAT),
    )


class AirQualityService:
    """
    Runs the search and AQI pipelines against an injected Gemini client.
    """

    def __init__(
        self,
        client,
        model: str = Config.GEMINI_MODEL,
        fallbacks: Optional[FallbackDefaults] = None,
        rng: Optional[random.Random] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.analyzer = GeminiAnalyzer(client, model)
        self.fallbacks = fallbacks or FallbackDefaults()
        self.rng = rng or random.Random()
        self.now = now or datetime.now
        self.location_detector = LocationLineDetector()

    @classmethod
    def from_config(cls) -> "AirQualityService":
        """Service backed by the real Gemini client from the environment."""
        models = AIModels()
        return cls(models.get_client(), model=models.get_model())

    async def search_locations(self, query: str) -> List[LocationSearchResult]:
        """
        Find places matching ``query``.

        Never raises: a failed call is logged and yields an empty list, so
        typeahead keeps working.
        """
        query = (query or "").strip()
        if len(query) < Config.MIN_QUERY_LENGTH:
            return []

        try:
            prompt = build_location_search_prompt(query, Config.MAX_SEARCH_RESULTS)
            response = await self.analyzer.generate(prompt)
            results = self.location_detector.parse(response_text(response))
            logger.info(f"Location search '{query}': {len(results)} result(s)")
            return results
        except Exception as e:
            logger.exception(f"Error searching locations: {e}")
            return []

    async def fetch_aqi_data(self, lat: float, lng: float) -> AQIData:
        """
        Estimate AQI for a coordinate from all five providers.

        Errors from the Gemini call propagate unchanged; gaps in the text
        never do.
        """
        prompt = build_aqi_prompt(lat, lng)
        try:
            response = await self.analyzer.generate(prompt, lat=lat, lng=lng)
        except Exception as e:
            logger.error(f"Error fetching multi-source AQI data: {e}")
            raise

        data = parse_aqi_response(
            response_text(response),
            grounding_chunks(response),
            fallbacks=self.fallbacks,
            rng=self.rng,
            now=self.now,
        )
        logger.info(f"AQI lookup ({lat}, {lng}): {data.location_name}, avg AQI {data.avg_aqi}")
        return data
