"""
Gemini Analyzer Module - Grounded Generation
Sends prompts to Gemini with Google Maps and Google Search grounding and
exposes the two things the pipelines read back: the response text and the
grounding citations.
"""

import asyncio
import logging
from typing import Any, List, Optional

from google.genai import types

from aqi_models import SourceCitation

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_TITLE = "Data Source"
DEFAULT_SOURCE_URI = "#"


def build_grounding_config(lat: Optional[float] = None, lng: Optional[float] = None) -> types.GenerateContentConfig:
    """
    Generation config with maps + search grounding.

    When coordinates are given, retrieval is biased toward them.
    """
    tools = [
        types.Tool(google_maps=types.GoogleMaps()),
        types.Tool(google_search=types.GoogleSearch()),
    ]
    if lat is None or lng is None:
        return types.GenerateContentConfig(tools=tools)

    return types.GenerateContentConfig(
        tools=tools,
        tool_config=types.ToolConfig(
            retrieval_config=types.RetrievalConfig(
                lat_lng=types.LatLng(latitude=lat, longitude=lng)
            )
        ),
    )


def response_text(response: Any) -> str:
    """Generated text, or an empty string when the model returned none."""
    return getattr(response, 'text', None) or ""


def grounding_chunks(response: Any) -> List[Any]:
    """Citation chunks of the first candidate; empty when any level is missing."""
    candidates = getattr(response, 'candidates', None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], 'grounding_metadata', None)
    if metadata is None:
        return []
    return list(getattr(metadata, 'grounding_chunks', None) or [])


def extract_sources(chunks: List[Any]) -> List[SourceCitation]:
    """
    Turn grounding chunks into citations.

    Maps references win over web references; chunks carrying neither are
    dropped.
    """
    sources = []
    for chunk in chunks:
        maps = getattr(chunk, 'maps', None)
        web = getattr(chunk, 'web', None)
        if maps is None and web is None:
            continue
        title = (
            getattr(maps, 'title', None)
            or getattr(web, 'title', None)
            or DEFAULT_SOURCE_TITLE
        )
        uri = (
            getattr(maps, 'uri', None)
            or getattr(web, 'uri', None)
            or DEFAULT_SOURCE_URI
        )
        sources.append(SourceCitation(title=title, uri=uri))
    return sources


class GeminiAnalyzer:
    """
    Async wrapper over the sync ``client.models.generate_content``.

    The client is injected so tests can hand in a fake one.
    """

    def __init__(self, client, model: str):
        self.client = client
        self.model = model

    async def generate(self, prompt: str, lat: Optional[float] = None, lng: Optional[float] = None):
        """
        Run one grounded generation call.

        Errors from the service are not caught here; each pipeline decides
        whether to absorb or propagate them.
        """
        config = build_grounding_config(lat, lng)
        logger.info(f"Gemini request: model={self.model} biased={lat is not None and lng is not None}")
        # sync client only; each Flask request runs on its own event loop
        response = await asyncio.to_thread(
            self.client.models.generate_content,
            model=self.model,
            contents=prompt,
            config=config,
        )
        logger.info(f"Gemini response: {len(response_text(response))} chars, {len(grounding_chunks(response))} grounding chunk(s)")
        return response
