import dataclasses

import pytest

from aqi_models import (
    AQICategory,
    AQIData,
    LATITUDE_RANGE,
    LONGITUDE_RANGE,
    LocationSearchResult,
    Pollutants,
    ProviderData,
    PROVIDER_NAMES,
    aqi_gauge_position,
    classify_aqi_badge,
    classify_aqi_color,
    comparison_series,
    dashboard_view,
    in_range,
    pollutant_gauge,
)


def _provider(name, aqi):
    return ProviderData(
        provider_name=name,
        aqi_value=aqi,
        status="Good",
        pollutants=Pollutants(pm25=12, pm10=20, no2=15, so2=5, o3=30, co=0.5),
        confidence="High",
        description="Test reading.",
    )


def _data(values):
    return AQIData(
        location_name="Testville",
        providers=tuple(_provider(n, v) for n, v in zip(PROVIDER_NAMES, values)),
        recommendations=("Stay inside.",),
        sources=(),
        timestamp="12:00:00 PM",
    )


class TestAQIData:
    def test_avg_aqi_is_rounded_mean(self):
        assert _data([42, 58, 39, 61, 50]).avg_aqi == 50

    def test_avg_aqi_rounds_halves_up(self):
        # mean 50.6 -> 51, mean 50.4 -> 50
        assert _data([51, 51, 51, 51, 49]).avg_aqi == 51
        assert _data([50, 50, 50, 51, 51]).avg_aqi == 50

    def test_with_location_name_copies(self):
        data = _data([10, 20, 30, 40, 50])
        renamed = data.with_location_name("Central Park")

        assert renamed.location_name == "Central Park"
        assert data.location_name == "Testville"
        assert renamed.providers == data.providers

    def test_frozen(self):
        data = _data([10, 20, 30, 40, 50])
        with pytest.raises(dataclasses.FrozenInstanceError):
            data.location_name = "Elsewhere"

    def test_to_dict_uses_frontend_keys(self):
        payload = _data([42, 58, 39, 61, 50]).to_dict()

        assert payload['avgAqi'] == 50
        assert payload['locationName'] == "Testville"
        assert payload['providers'][0]['providerName'] == "IQAir AirVisual"
        assert set(payload['providers'][0]['pollutants']) == {'pm25', 'pm10', 'no2', 'so2', 'o3', 'co'}

    def test_from_dict_restores(self):
        data = _data([42, 58, 39, 61, 50])
        assert AQIData.from_dict(data.to_dict()) == data


class TestLocationSearchResult:
    def test_optional_fields_left_out(self):
        result = LocationSearchResult(title="Home", address="1 Main St", lat=1.5, lng=2.5)
        assert result.to_dict() == {'title': "Home", 'address': "1 Main St", 'lat': 1.5, 'lng': 2.5}

    def test_round_trip_with_aqi(self):
        result = LocationSearchResult(title="Home", address="1 Main St", lat=1.5, lng=2.5, aqi=40, status="Good")
        assert LocationSearchResult.from_dict(result.to_dict()) == result


class TestCoordinateRanges:
    @pytest.mark.parametrize("value, bounds, expected", [
        (90, LATITUDE_RANGE, True),
        (-90.0001, LATITUDE_RANGE, False),
        (400, LATITUDE_RANGE, False),
        (-180, LONGITUDE_RANGE, True),
        (180.5, LONGITUDE_RANGE, False),
        (float("nan"), LONGITUDE_RANGE, False),
    ])
    def test_in_range(self, value, bounds, expected):
        assert in_range(value, bounds) is expected


class TestClassification:
    @pytest.mark.parametrize("value,category", [
        (0, AQICategory.GOOD),
        (50, AQICategory.GOOD),
        (51, AQICategory.MODERATE),
        (100, AQICategory.MODERATE),
        (101, AQICategory.UNHEALTHY_SENSITIVE),
        (150, AQICategory.UNHEALTHY_SENSITIVE),
        (151, AQICategory.UNHEALTHY),
        (200, AQICategory.UNHEALTHY),
        (201, AQICategory.VERY_UNHEALTHY),
        (300, AQICategory.VERY_UNHEALTHY),
        (301, AQICategory.HAZARDOUS),
        (999, AQICategory.HAZARDOUS),
    ])
    def test_breakpoints(self, value, category):
        assert classify_aqi_color(value) is category
        assert classify_aqi_badge(value) is category


class TestDashboardHelpers:
    def test_pollutant_gauge_bands(self):
        assert pollutant_gauge(5, 25) == {'percentage': 20.0, 'band': "low"}
        assert pollutant_gauge(20, 25) == {'percentage': 80.0, 'band': "elevated"}
        assert pollutant_gauge(30, 25) == {'percentage': 100, 'band': "high"}

    def test_aqi_gauge_position(self):
        assert aqi_gauge_position(150) == 50
        assert aqi_gauge_position(600) == 100

    def test_comparison_series_short_names(self):
        series = comparison_series(_data([42, 58, 39, 61, 50]))
        assert [row['name'] for row in series] == ["IQAir", "OpenAQ", "OpenWeatherMap", "AQICN", "Google"]
        assert [row['aqi'] for row in series] == [42, 58, 39, 61, 50]

    def test_dashboard_view(self):
        view = dashboard_view(_data([42, 58, 39, 61, 160]))

        assert view['avgCategory'] == "Moderate"
        assert view['providers'][0]['badge'] == "bg-green-500"
        assert view['providers'][4]['category'] == "Unhealthy"
        assert view['providers'][0]['pollutants']['co']['unit'] == "mg/m³"
