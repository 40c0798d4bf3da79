"""
Location Line Detector
======================

This detector reads place candidates out of a location-search response.
The model is asked to answer one place per line:

    Place: <name> | Address: <addr> | Lat: <lat> | Lng: <lng> | AQI: <aqi> | Status: <status>

Developer Notes:
---------------
Every line is read on its own. A line only becomes a result when Place,
Address, Lat and Lng were all found on that same line and the coordinates
lie within latitude and longitude bounds. AQI and Status are optional
extras.
"""

import logging
from typing import Any, Dict, List

from aqi_models import LATITUDE_RANGE, LONGITUDE_RANGE, LocationSearchResult, in_range
from detectors.text_extraction import extract_line, extract_number


class LocationLineDetector:
    """
    Detector for pipe-delimited location lines.
    """

    def __init__(self):
        """Initialize the location line detector."""
        self.field_name = 'location'
        self.logger = logging.getLogger('detector.location')

    def detect(self, line: str) -> Dict[str, Any]:
        """
        Read one response line.

        Args:
            line (str): A single line of model output

        Returns:
            Dict[str, Any]: Detection result; ``content`` holds a
            LocationSearchResult when ``found`` is True
        """
        title = extract_line(line, 'Place')
        address = extract_line(line, 'Address')
        lat = extract_number(line, 'Lat', None)
        lng = extract_number(line, 'Lng', None)

        missing = [
            name for name, value in (
                ('title', title), ('address', address), ('lat', lat), ('lng', lng)
            )
            if value is None
        ]
        invalid = [
            name for name, value, bounds in (
                ('lat', lat, LATITUDE_RANGE), ('lng', lng, LONGITUDE_RANGE)
            )
            if value is not None and not in_range(value, bounds)
        ]
        if missing or invalid:
            return {
                'field_name': self.field_name,
                'found': False,
                'content': None,
                'metadata': {'missing': missing, 'invalid': invalid},
            }

        aqi = extract_number(line, 'AQI', None)
        result = LocationSearchResult(
            title=title,
            address=address,
            lat=lat,
            lng=lng,
            aqi=int(aqi) if aqi is not None else None,
            status=extract_line(line, 'Status'),
        )
        return {
            'field_name': self.field_name,
            'found': True,
            'content': result,
            'metadata': {'missing': [], 'invalid': []},
        }

    def parse(self, text: str) -> List[LocationSearchResult]:
        """
        Read every line of a response and keep the complete candidates.

        Returns:
            List[LocationSearchResult]: Results in the order the lines appeared
        """
        results = []
        for line in (text or "").splitlines():
            if not line.strip():
                continue
            detection = self.detect(line)
            if detection['found']:
                results.append(detection['content'])
            elif detection['metadata']['invalid']:
                self.logger.info(
                    f"Dropped location line with out-of-range {', '.join(detection['metadata']['invalid'])}"
                )
            elif len(detection['metadata']['missing']) < 4:
                # partially formed candidate, not just prose
                self.logger.info(
                    f"Dropped location line missing {', '.join(detection['metadata']['missing'])}"
                )

        self.logger.info(f"Detection complete for {self.field_name}: {len(results)} result(s)")
        return results
