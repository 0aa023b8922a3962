"""Utility functions for the Hue CLIP CLI.

This module contains helper functions used by the command modules:
- build_client: Create a Client from resolved settings
- describe_light: One-line summary of a light for terminal output
- similarity_score: Canonical fuzzy string matching algorithm
"""

from core.client import Client, new_client, new_insecure_client
from core.config import Settings
from models.types import Light


def build_client(settings: Settings) -> Client:
    """Create a client for the configured bridge.

    Uses the insecure client when settings.insecure is set, since bridges
    serve a self-signed certificate.
    """
    if settings.insecure:
        return new_insecure_client(settings.host, settings.api_key)
    return new_client(settings.host, settings.api_key)


def describe_light(light: Light) -> str:
    """Format a light as ``name  state  brightness``."""
    state = 'ON' if light.is_on else 'OFF'
    parts = [light.name or '(unnamed)', state]
    if light.dimming is not None:
        parts.append(f"{light.dimming.brightness:.0f}%")
    return '  '.join(parts)


def similarity_score(s1: str, s2: str) -> int:
    """Calculate similarity score between two strings.

    Used for command typo suggestions.

    Returns:
        Similarity score:
        - 100: Exact match (case-insensitive)
        - 80: Prefix match
        - 60: Substring match
        - 0-50: Character sequence match (proportional to matching characters)
        - 0: No match
    """
    s1_lower = s1.lower()
    s2_lower = s2.lower()

    if s1_lower == s2_lower:
        return 100

    if s2_lower.startswith(s1_lower) or s1_lower.startswith(s2_lower):
        return 80

    if s1_lower in s2_lower or s2_lower in s1_lower:
        return 60

    # Character sequence matching
    matches = 0
    j = 0
    for char in s1_lower:
        while j < len(s2_lower):
            if s2_lower[j] == char:
                matches += 1
                j += 1
                break
            j += 1

    if matches > 0:
        score = int((matches / max(len(s1_lower), len(s2_lower))) * 50)
        return score if score > 20 else 0

    return 0
