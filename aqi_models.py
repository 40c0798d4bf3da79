"""
aqi_models.py - Domain types shared by the search and AQI pipelines.

Every type here is an immutable value object built once per request and
serialized with camelCase keys for the dashboard frontend.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

# Canonical provider roster. Order drives the tab index in the UI.
PROVIDER_NAMES: Tuple[str, ...] = (
    "IQAir AirVisual",
    "OpenAQ",
    "OpenWeatherMap",
    "AQICN",
    "Google Air Quality",
)

# Labels the model is asked to use for each pollutant, keyed by field name.
POLLUTANT_LABELS: Dict[str, str] = {
    'pm25': "PM2.5",
    'pm10': "PM10",
    'no2': "NO2",
    'so2': "SO2",
    'o3': "O3",
    'co': "CO",
}


@dataclass(frozen=True)
class Pollutants:
    pm25: float
    pm10: float
    no2: float
    so2: float
    o3: float
    co: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'pm25': self.pm25,
            'pm10': self.pm10,
            'no2': self.no2,
            'so2': self.so2,
            'o3': self.o3,
            'co': self.co,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Pollutants":
        return cls(**{key: float(data[key]) for key in POLLUTANT_LABELS})


@dataclass(frozen=True)
class ProviderData:
    """One provider's reading for the requested location."""

    provider_name: str
    aqi_value: int
    status: str
    pollutants: Pollutants
    confidence: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'providerName': self.provider_name,
            'aqiValue': self.aqi_value,
            'status': self.status,
            'pollutants': self.pollutants.to_dict(),
            'confidence': self.confidence,
            'description': self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProviderData":
        return cls(
            provider_name=data['providerName'],
            aqi_value=int(data['aqiValue']),
            status=data['status'],
            pollutants=Pollutants.from_dict(data['pollutants']),
            confidence=data['confidence'],
            description=data['description'],
        )


@dataclass(frozen=True)
class SourceCitation:
    title: str
    uri: str = "#"

    def to_dict(self) -> Dict[str, str]:
        return {'title': self.title, 'uri': self.uri}


def round_half_up(value: float) -> int:
    """Round like the browser's Math.round (halves go up)."""
    return int(math.floor(value + 0.5))


LATITUDE_RANGE: Tuple[float, float] = (-90.0, 90.0)
LONGITUDE_RANGE: Tuple[float, float] = (-180.0, 180.0)


def in_range(value: float, bounds: Tuple[float, float]) -> bool:
    """True for a finite value within the inclusive bounds."""
    low, high = bounds
    return not math.isnan(value) and low <= value <= high


@dataclass(frozen=True)
class AQIData:
    """
    Aggregate result of one AQI lookup.

    avg_aqi is derived from providers on every access, so it can never
    drift from the readings it summarizes.
    """

    location_name: str
    providers: Tuple[ProviderData, ...]
    recommendations: Tuple[str, ...]
    sources: Tuple[SourceCitation, ...]
    timestamp: str

    @property
    def avg_aqi(self) -> int:
        if not self.providers:
            return 0
        total = sum(p.aqi_value for p in self.providers)
        return round_half_up(total / len(self.providers))

    def with_location_name(self, name: str) -> "AQIData":
        """Copy with the location name the user actually selected."""
        return replace(self, location_name=name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'locationName': self.location_name,
            'providers': [p.to_dict() for p in self.providers],
            'recommendations': list(self.recommendations),
            'sources': [s.to_dict() for s in self.sources],
            'timestamp': self.timestamp,
            'avgAqi': self.avg_aqi,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AQIData":
        return cls(
            location_name=data['locationName'],
            providers=tuple(ProviderData.from_dict(p) for p in data['providers']),
            recommendations=tuple(data.get('recommendations', [])),
            sources=tuple(
                SourceCitation(title=s['title'], uri=s.get('uri') or "#")
                for s in data.get('sources', [])
            ),
            timestamp=data.get('timestamp', ""),
        )


@dataclass(frozen=True)
class LocationSearchResult:
    """
    A place the user can pick. Only built once title, address and both
    coordinates were read; partial candidates never get this far.
    """

    title: str
    address: str
    lat: float
    lng: float
    aqi: Optional[int] = None
    status: Optional[str] = None

    def __str__(self):
        return f"{self.title} ({self.lat}, {self.lng})"

    @classmethod
    def from_dict(cls, data: dict) -> "LocationSearchResult":
        aqi = data.get('aqi')
        return cls(
            title=data['title'],
            address=data['address'],
            lat=float(data['lat']),
            lng=float(data['lng']),
            aqi=int(aqi) if aqi is not None else None,
            status=data.get('status'),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'title': self.title,
            'address': self.address,
            'lat': self.lat,
            'lng': self.lng,
        }
        if self.aqi is not None:
            result['aqi'] = self.aqi
        if self.status is not None:
            result['status'] = self.status
        return result


# =============================================================================
# AQI categories
# =============================================================================

class AQICategory(Enum):
    GOOD = "Good"
    MODERATE = "Moderate"
    UNHEALTHY_SENSITIVE = "Unhealthy for Sensitive Groups"
    UNHEALTHY = "Unhealthy"
    VERY_UNHEALTHY = "Very Unhealthy"
    HAZARDOUS = "Hazardous"


# Upper bounds are inclusive.
AQI_BREAKPOINTS: Tuple[Tuple[float, AQICategory], ...] = (
    (50, AQICategory.GOOD),
    (100, AQICategory.MODERATE),
    (150, AQICategory.UNHEALTHY_SENSITIVE),
    (200, AQICategory.UNHEALTHY),
    (300, AQICategory.VERY_UNHEALTHY),
)

# text / background / border palette used by status pills
CATEGORY_COLORS: Dict[AQICategory, str] = {
    AQICategory.GOOD: "text-green-500 bg-green-50 border-green-200",
    AQICategory.MODERATE: "text-yellow-600 bg-yellow-50 border-yellow-200",
    AQICategory.UNHEALTHY_SENSITIVE: "text-orange-500 bg-orange-50 border-orange-200",
    AQICategory.UNHEALTHY: "text-red-500 bg-red-50 border-red-200",
    AQICategory.VERY_UNHEALTHY: "text-purple-500 bg-purple-50 border-purple-200",
    AQICategory.HAZARDOUS: "text-rose-900 bg-rose-50 border-rose-200",
}

# solid dot / badge colour
CATEGORY_BADGES: Dict[AQICategory, str] = {
    AQICategory.GOOD: "bg-green-500",
    AQICategory.MODERATE: "bg-yellow-500",
    AQICategory.UNHEALTHY_SENSITIVE: "bg-orange-500",
    AQICategory.UNHEALTHY: "bg-red-500",
    AQICategory.VERY_UNHEALTHY: "bg-purple-500",
    AQICategory.HAZARDOUS: "bg-rose-900",
}


def _categorize(value: float) -> AQICategory:
    for upper, category in AQI_BREAKPOINTS:
        if value <= upper:
            return category
    return AQICategory.HAZARDOUS


def classify_aqi_color(value: float) -> AQICategory:
    """Category driving the colored status pill; see CATEGORY_COLORS."""
    return _categorize(value)


def classify_aqi_badge(value: float) -> AQICategory:
    """Category driving the solid badge; see CATEGORY_BADGES."""
    return _categorize(value)


# =============================================================================
# Dashboard helpers
# =============================================================================

@dataclass(frozen=True)
class PollutantInfo:
    label: str
    unit: str
    full_name: str
    threshold: float


POLLUTANT_INFO: Dict[str, PollutantInfo] = {
    'pm25': PollutantInfo("PM2.5", "μg/m³", "Fine Particulates", 25),
    'pm10': PollutantInfo("PM10", "μg/m³", "Coarse Particulates", 50),
    'no2': PollutantInfo("NO2", "μg/m³", "Nitrogen Dioxide", 40),
    'so2': PollutantInfo("SO2", "μg/m³", "Sulfur Dioxide", 20),
    'o3': PollutantInfo("O3", "μg/m³", "Ozone", 100),
    'co': PollutantInfo("CO", "mg/m³", "Carbon Monoxide", 4),
}


def pollutant_gauge(value: float, threshold: float) -> Dict[str, Any]:
    """Fill percentage (capped at 100) and band for a pollutant bar."""
    percentage = min((value / threshold) * 100, 100) if threshold > 0 else 100
    if percentage > 80:
        band = "high"
    elif percentage > 50:
        band = "elevated"
    else:
        band = "low"
    return {'percentage': round(percentage, 1), 'band': band}


def aqi_gauge_position(aqi: float) -> float:
    """Marker offset (percent) on the 0-300 AQI scale bar."""
    return min(max(aqi, 0) / 3, 100)


def comparison_series(data: AQIData) -> List[Dict[str, Any]]:
    """Bar chart rows: first word of each provider name and its AQI."""
    return [
        {'name': p.provider_name.split(' ')[0], 'aqi': p.aqi_value}
        for p in data.providers
    ]


def dashboard_view(data: AQIData) -> Dict[str, Any]:
    """Everything the dashboard derives from an AQIData, precomputed."""
    providers = []
    for p in data.providers:
        category = classify_aqi_color(p.aqi_value)
        values = p.pollutants.to_dict()
        providers.append({
            'providerName': p.provider_name,
            'category': category.value,
            'color': CATEGORY_COLORS[category],
            'badge': CATEGORY_BADGES[classify_aqi_badge(p.aqi_value)],
            'gaugePosition': aqi_gauge_position(p.aqi_value),
            'pollutants': {
                key: {
                    'label': info.label,
                    'unit': info.unit,
                    'fullName': info.full_name,
                    'value': values[key],
                    **pollutant_gauge(values[key], info.threshold),
                }
                for key, info in POLLUTANT_INFO.items()
            },
        })

    avg_category = classify_aqi_color(data.avg_aqi)
    return {
        'avgCategory': avg_category.value,
        'avgColor': CATEGORY_COLORS[avg_category],
        'comparison': comparison_series(data),
        'providers': providers,
    }
