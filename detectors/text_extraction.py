"""
Text Extraction Helpers
=======================

Pattern-based field readers for free-form model output. Each helper takes
the raw text plus a field label and returns a best-effort value, or the
caller's fallback when the label is missing.

Developer Notes:
---------------
The model is asked for a format but does not always follow it: fields move
around, punctuation changes, markdown bold shows up around labels, and
some fields are skipped entirely. None of these helpers raise on absence.
A missing field is a normal outcome, never an error.
"""

import re
import logging
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger('detector.text_extraction')

# A label must not be glued to other letters/digits ("CO" vs "CO2").
_LABEL_START = r'(?<![A-Za-z0-9])'
_LABEL_END = r'(?![A-Za-z0-9])'

# Separators tolerated between a label and its number: "AQI: 42",
# "**AQI:** 42", "AQI = 42", "AQI 42".
_NUMBER_SEPARATOR = r'[\s:=*]*'
# Optional unit or qualifier in parentheses: "PM2.5 (µg/m³): 12".
_PARENTHETICAL = r'(?:[ \t]*\([^)\n]*\))?'
_SIGNED_DECIMAL = r'([-+]?(?:\d+(?:\.\d*)?|\.\d+))'

_BULLET_MARKERS = ('*', '-')


def extract_number(text: str, label: str, fallback: Optional[float]) -> Optional[float]:
    """
    Read the first number that follows ``label`` in ``text``.

    Args:
        text (str): Text to search
        label (str): Field label, e.g. "PM2.5" or "Lat"
        fallback: Value returned when no number follows the label

    Returns:
        float parsed from the text, or ``fallback``
    """
    if not text or not label:
        return fallback

    pattern = (
        _LABEL_START + re.escape(label) + _LABEL_END + _PARENTHETICAL
        + _NUMBER_SEPARATOR + _SIGNED_DECIMAL
    )
    match = re.search(pattern, text, re.IGNORECASE)
    if not match:
        return fallback

    try:
        return float(match.group(1))
    except ValueError:
        return fallback


def extract_line(text: str, label: str) -> Optional[str]:
    """
    Capture what follows ``label:`` up to the end of the line or the next
    ``|`` field separator.

    Returns:
        Optional[str]: Trimmed value, or None when the label is missing or
        has nothing after it
    """
    if not text or not label:
        return None

    pattern = (
        _LABEL_START + re.escape(label) + _LABEL_END
        + r'\**[ \t]*:[ \t]*\**[ \t]*([^\n|]*)'
    )
    match = re.search(pattern, text, re.IGNORECASE)
    if not match:
        return None

    value = match.group(1).strip().strip('*').strip()
    return value or None


def segment_by_provider(text: str, provider_names: Iterable[str]) -> Dict[str, str]:
    """
    Split ``text`` into one slice per provider.

    A provider's slice starts at the first occurrence of its name and runs
    to the next provider name that appears later in the text (or the end
    of the text). Providers that never appear get an empty slice and do
    not act as boundaries.

    Returns:
        Dict[str, str]: provider name -> slice, in the order of
        ``provider_names``
    """
    names = list(provider_names)
    if not text:
        return {name: "" for name in names}

    lowered = text.lower()
    starts = {}
    for name in names:
        index = lowered.find(name.lower()) if name else -1
        if index != -1:
            starts[name] = index

    ordered = sorted(set(starts.values()))
    sections = {}
    for name in names:
        if name not in starts:
            sections[name] = ""
            logger.info(f"NOT_FOUND: provider section '{name}'")
            continue
        start = starts[name]
        end = next((pos for pos in ordered if pos > start), len(text))
        sections[name] = text[start:end]

    return sections


def extract_bullet_list(text: str, max_items: int) -> List[str]:
    """
    Collect bulleted lines (``*`` or ``-``) in document order.

    Args:
        text (str): Text to scan line by line
        max_items (int): Maximum number of items to return

    Returns:
        List[str]: Bullet text with the marker removed, at most
        ``max_items`` entries; empty when nothing is bulleted
    """
    items: List[str] = []
    if not text or max_items <= 0:
        return items

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped.startswith(_BULLET_MARKERS):
            continue
        item = stripped.lstrip('*- \t').strip()
        if not item:
            # markdown rules like "---" or "***"
            continue
        items.append(item)
        if len(items) >= max_items:
            break

    return items
