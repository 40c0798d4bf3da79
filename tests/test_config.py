import pytest

from config import AIModels, Config, FallbackDefaults


def test_validate_requires_api_key(monkeypatch):
    monkeypatch.setattr(Config, "GEMINI_API_KEY", None)
    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        Config.validate()


def test_ai_models_refuses_to_start_without_key(monkeypatch):
    monkeypatch.setattr(Config, "GEMINI_API_KEY", "")
    with pytest.raises(ValueError):
        AIModels()


def test_fallback_defaults():
    fallbacks = FallbackDefaults()
    assert (fallbacks.aqi_min, fallbacks.aqi_max) == (10, 50)
    assert fallbacks.pollutants == {'pm25': 12.0, 'pm10': 20.0, 'no2': 15.0, 'so2': 5.0, 'o3': 30.0, 'co': 0.5}
    assert len(fallbacks.recommendations) == 2
