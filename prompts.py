"""
Prompts Module
This module contains the prompt templates sent to Gemini.
It centralizes all LLM prompts for easy modification and maintenance.

The detectors depend on the output formats requested here; change the
label names in both places together.
"""

from typing import Iterable

from aqi_models import POLLUTANT_LABELS, PROVIDER_NAMES

LOCATION_SEARCH_PROMPT = """
Search for locations matching: "{query}".
For up to {max_results} specific results, provide:
1. Title/Name
2. Full Address
3. Approximate Latitude and Longitude coordinates.
4. CURRENT estimated Air Quality Index (AQI) value and Status (e.g., 45, Good).

Format each result strictly like this, one result per line:
Place: [Name] | Address: [Address] | Lat: [Lat] | Lng: [Lng] | AQI: [AQI] | Status: [Status]
"""

AQI_LOOKUP_PROMPT = """
Analyze the air quality at latitude {lat}, longitude {lng}.
I need comparative data from these specific providers:
{provider_list}

For each provider, provide:
- Current AQI Value
- Qualitative Status (Good, Moderate, etc.)
- Pollutant levels ({pollutant_list})
- A one-line description of how the provider measures or estimates it

Structure the response provider by provider.
Also provide overall health recommendations as a bulleted list under a
"Recommendations" heading, and the location name on a line starting with
"Location:".

Output format hint:
Location: [Location Name]

[Provider Name]
AQI: [Value]
Status: [Status]
{pollutant_format}
Description: [Brief methodology note]

Recommendations:
- [Recommendation]
"""


def build_location_search_prompt(query: str, max_results: int = 5) -> str:
    """Prompt asking for pipe-delimited place candidates."""
    return LOCATION_SEARCH_PROMPT.format(query=query.strip(), max_results=max_results)


def build_aqi_prompt(lat: float, lng: float, providers: Iterable[str] = PROVIDER_NAMES) -> str:
    """Prompt asking for one block per provider, in roster order."""
    provider_list = "\n".join(f"{i}. {name}" for i, name in enumerate(providers, start=1))
    labels = list(POLLUTANT_LABELS.values())
    return AQI_LOOKUP_PROMPT.format(
        lat=lat,
        lng=lng,
        provider_list=provider_list,
        pollutant_list=", ".join(labels),
        pollutant_format="\n".join(f"{label}: [Value]" for label in labels),
    )
