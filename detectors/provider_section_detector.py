"""
Provider Section Detector
=========================

This detector turns one provider's slice of an AQI response into a
ProviderData. The model is asked to write each provider as:

    [Provider Name]
    AQI: [Value]
    Status: [Status]
    PM2.5: [Value]
    ...
    Description: [Brief methodology note]

Developer Notes:
---------------
Every field falls back on its own. A negative reading counts as absent. An
empty section still produces a complete ProviderData built entirely from
FallbackDefaults.
"""

import logging
import random
from typing import Optional

from aqi_models import POLLUTANT_LABELS, Pollutants, ProviderData, round_half_up
from config import FallbackDefaults
from detectors.text_extraction import extract_line, extract_number


def _non_negative(value: Optional[float], fallback: Optional[float]) -> Optional[float]:
    """The reading, or the fallback when it is missing or below zero."""
    if value is None or value < 0:
        return fallback
    return value


class ProviderSectionDetector:
    """
    Detector for a single provider's block of fields.
    """

    def __init__(self, fallbacks: Optional[FallbackDefaults] = None, rng: Optional[random.Random] = None):
        """
        Args:
            fallbacks: Placeholder values for missing fields
            rng: Source of the placeholder AQI; seed it for reproducible output
        """
        self.field_name = 'provider_section'
        self.logger = logging.getLogger('detector.provider_section')
        self.fallbacks = fallbacks or FallbackDefaults()
        self.rng = rng or random.Random()

    def detect(self, provider_name: str, section: str) -> ProviderData:
        """
        Build the provider reading from its section text.

        Args:
            provider_name (str): Canonical provider name
            section (str): Text belonging to this provider (may be empty)

        Returns:
            ProviderData: Always complete; missing fields use fallbacks
        """
        aqi = _non_negative(extract_number(section, 'AQI', None), None)
        if aqi is None:
            aqi = self.rng.randrange(self.fallbacks.aqi_min, self.fallbacks.aqi_max)
            self.logger.info(f"NOT_FOUND: AQI for {provider_name}, using placeholder {aqi}")

        pollutants = Pollutants(**{
            key: _non_negative(
                extract_number(section, label, None), self.fallbacks.pollutants[key]
            )
            for key, label in POLLUTANT_LABELS.items()
        })

        return ProviderData(
            provider_name=provider_name,
            aqi_value=round_half_up(aqi),
            status=extract_line(section, 'Status') or self.fallbacks.status,
            pollutants=pollutants,
            confidence=self.fallbacks.confidence,
            description=extract_line(section, 'Description') or self.fallbacks.description,
        )
