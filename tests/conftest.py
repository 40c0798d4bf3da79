import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


SAMPLE_AQI_TEXT = """Location: Kraków, Poland

Here is the comparison you asked for.

**IQAir AirVisual**
AQI: 42
Status: Good
PM2.5: 10.1
PM10: 18
NO2: 12
SO2: 3
O3: 40
CO: 0.3
Description: Sensor network blended with satellite data.

**OpenAQ**
AQI: 58
Status: Moderate
PM2.5: 14
PM10: 25
NO2: 20
SO2: 4
O3: 35
CO: 0.4
Description: Aggregated government monitor readings.

**OpenWeatherMap**
AQI: 39
Status: Good
PM2.5: 9
PM10: 16
NO2: 11
SO2: 2
O3: 44
CO: 0.2
Description: Modelled concentrations on a global grid.

**AQICN (World Air Quality Index Project)**
AQI: 61
Status: Moderate
PM2.5 (µg/m³): 17
PM10: 29
NO2: 22
SO2: 5
O3: 31
CO: 0.5
Description: Nearest official station, US EPA scale.

**Google Air Quality**
AQI: 50
Status: Good
PM2.5: 12
PM10: 21
NO2: 16
SO2: 3
O3: 38
CO: 0.4
Description: Universal AQI converted to the US scale.

**Health Recommendations:**
* Limit prolonged outdoor exertion in the afternoon.
* Ventilate rooms in the early morning.
"""

SAMPLE_SEARCH_TEXT = """Here are the matching places:
Place: Central Park | Address: New York, NY 10024, USA | Lat: 40.7829 | Lng: -73.9654 | AQI: 38 | Status: Good
Place: Central Park Zoo | Address: East 64th Street, New York, NY 10065, USA | Lat: 40.7678 | AQI: 41 | Status: Good
"""


def make_response(text, chunks=()):
    """Shape of a google-genai GenerateContentResponse, as far as the pipelines read it."""
    metadata = SimpleNamespace(grounding_chunks=list(chunks))
    return SimpleNamespace(text=text, candidates=[SimpleNamespace(grounding_metadata=metadata)])


def web_chunk(title, uri):
    return SimpleNamespace(web=SimpleNamespace(title=title, uri=uri), maps=None)


def maps_chunk(title, uri):
    return SimpleNamespace(maps=SimpleNamespace(title=title, uri=uri), web=None)


class FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, model, contents, config=None):
        self.calls.append({'model': model, 'contents': contents, 'config': config})
        if self.error is not None:
            raise self.error
        return self.response


class FakeClient:
    """Stands in for google.genai.Client; only client.models is used."""

    def __init__(self, response=None, error=None):
        self.models = FakeModels(response=response, error=error)

    @property
    def calls(self):
        return self.models.calls


@pytest.fixture
def sample_aqi_text():
    return SAMPLE_AQI_TEXT


@pytest.fixture
def sample_search_text():
    return SAMPLE_SEARCH_TEXT


@pytest.fixture
def fake_client():
    """Factory: fake_client(text=..., chunks=..., error=...)."""
    def _make(text="", chunks=(), error=None):
        return FakeClient(response=make_response(text, chunks), error=error)
    return _make


@pytest.fixture
def chunks():
    return [
        maps_chunk("Kraków", "https://maps.google.com/?cid=1"),
        web_chunk("AQICN Kraków", "https://aqicn.org/city/krakow"),
        SimpleNamespace(maps=None, web=None),
        web_chunk(None, None),
    ]
