"""
Response Detection Package
==========================

This package reads typed fields out of free-form Gemini responses for the
location search and multi-provider AQI lookups.
"""

from .location_line_detector import LocationLineDetector
from .provider_section_detector import ProviderSectionDetector
from .text_extraction import (
    extract_bullet_list,
    extract_line,
    extract_number,
    segment_by_provider,
)

__all__ = [
    'LocationLineDetector',
    'ProviderSectionDetector',
    'extract_bullet_list',
    'extract_line',
    'extract_number',
    'segment_by_provider',
]
