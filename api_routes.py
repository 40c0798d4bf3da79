"""
API Routes Module
Flask route handlers for the air quality dashboard.
Handles location search, multi-provider AQI lookups, and lookups for the
browser's current position.
"""

from __future__ import annotations

import asyncio
import logging

from flask import jsonify, request

from aqi_models import LATITUDE_RANGE, LONGITUDE_RANGE, AQIData, dashboard_view, in_range

FETCH_FAILURE_MESSAGE = "Failed to fetch air quality data. Please try another location."
GEOLOCATION_UNSUPPORTED_MESSAGE = "Geolocation is not supported by your browser."
GEOLOCATION_DENIED_MESSAGE = "Location access denied. Please search manually."

CURRENT_LOCATION_TITLE = "My Current Location"
CURRENT_LOCATION_ADDRESS = "Based on your GPS coordinates"


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _parse_coordinate(raw, bounds) -> float | None:
    """Float within bounds, or None for missing/non-numeric/out-of-range input."""
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if in_range(value, bounds) else None


def _aqi_payload(data: AQIData) -> dict:
    payload = data.to_dict()
    payload["view"] = dashboard_view(data)
    return payload


def _fetch_payload(service, lat: float, lng: float, title: str | None) -> dict | None:
    """
    Run the AQI pipeline for one request.

    Returns the JSON payload, or None when the Gemini call failed.
    """
    try:
        data = asyncio.run(service.fetch_aqi_data(lat, lng))
    except Exception as e:
        logging.exception(f"AQI lookup failed for ({lat}, {lng}): {e}")
        return None

    if title:
        # keep the name the user picked rather than the model's wording
        data = data.with_location_name(title)
    return _aqi_payload(data)


def _fetch_failed():
    return jsonify({"error": FETCH_FAILURE_MESSAGE, "retry": True}), 502


# -----------------------------------------------------------------------------
# Route factory
# -----------------------------------------------------------------------------

def create_routes(app, service):
    """
    Register Flask routes on the provided app.
    """

    @app.route('/')
    def home():
        """Describes the available endpoints."""
        return jsonify({
            "service": "Grounded multi-provider AQI dashboard",
            "endpoints": {
                "search": "GET /api/search?q=<query>",
                "aqi": "GET /api/aqi?lat=<lat>&lng=<lng>[&title=<name>]",
                "locate": "POST /api/locate {latitude, longitude}",
            },
        })

    @app.route('/api/search', methods=['GET'])
    def search():
        """
        Location typeahead. Always 200; failures come back as no results.
        """
        query = (request.args.get('q') or "").strip()
        results = asyncio.run(service.search_locations(query))
        return jsonify({"query": query, "results": [r.to_dict() for r in results]})

    @app.route('/api/aqi', methods=['GET'])
    def aqi():
        """
        Five-provider AQI comparison for a coordinate.
        """
        lat = _parse_coordinate(request.args.get('lat'), LATITUDE_RANGE)
        lng = _parse_coordinate(request.args.get('lng'), LONGITUDE_RANGE)
        if lat is None or lng is None:
            return jsonify({'error': 'lat and lng must be valid coordinates.'}), 400

        title = (request.args.get('title') or "").strip() or None
        payload = _fetch_payload(service, lat, lng, title)
        if payload is None:
            return _fetch_failed()
        return jsonify(payload)

    @app.route('/api/locate', methods=['POST'])
    def locate():
        """
        AQI for the browser's reported position.

        The frontend posts {"latitude", "longitude"} on success, or
        {"error": "unsupported" | "denied"} when geolocation failed.
        """
        data = request.get_json(silent=True) or {}

        if data.get("error") == "unsupported":
            return jsonify({"error": GEOLOCATION_UNSUPPORTED_MESSAGE}), 400

        lat = _parse_coordinate(data.get("latitude"), LATITUDE_RANGE)
        lng = _parse_coordinate(data.get("longitude"), LONGITUDE_RANGE)
        if data.get("error") or lat is None or lng is None:
            return jsonify({"error": GEOLOCATION_DENIED_MESSAGE}), 400

        payload = _fetch_payload(service, lat, lng, CURRENT_LOCATION_TITLE)
        if payload is None:
            return _fetch_failed()
        payload["address"] = CURRENT_LOCATION_ADDRESS
        return jsonify(payload)
