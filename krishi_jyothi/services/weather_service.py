# krishi_jyothi/services/weather_service.py
"""
Hard-coded weather payloads for the home page widget.

No weather provider is called; one of five city payloads is returned,
Mumbai when the city is unknown.
"""
from typing import Any

DEFAULT_CITY = "Mumbai"


def _forecast(*days: tuple[str, int, str]) -> list[dict[str, Any]]:
    return [{"day": d, "temp": t, "icon": i} for d, t, i in days]


WEATHER_DATA: dict[str, dict[str, Any]] = {
    "Mumbai": {
        "current": {"temp": 32, "condition": "Partly Cloudy", "humidity": 75, "wind": 12, "icon": "cloud-sun"},
        "forecast": _forecast(
            ("Mon", 33, "sun"), ("Tue", 32, "cloud-sun"), ("Wed", 31, "cloud"),
            ("Thu", 30, "cloud-rain"), ("Fri", 31, "cloud-sun"),
        ),
        "farmingTips": [
            "Consider early morning or evening irrigation to reduce water loss due to evaporation.",
            "Monitor for increased pest activity due to high humidity levels.",
            "Good time to plant leafy vegetables before the rain on Thursday.",
            "Ensure proper drainage systems are in place for the upcoming rainfall.",
        ],
    },
    "Delhi": {
        "current": {"temp": 38, "condition": "Sunny", "humidity": 45, "wind": 8, "icon": "sun"},
        "forecast": _forecast(
            ("Mon", 39, "sun"), ("Tue", 40, "sun"), ("Wed", 39, "sun"),
            ("Thu", 37, "cloud-sun"), ("Fri", 36, "cloud-sun"),
        ),
        "farmingTips": [
            "Increase frequency of irrigation due to high temperatures.",
            "Consider shade cloth for sensitive crops to prevent sun damage.",
            "Early morning harvesting recommended to maintain produce freshness.",
            "Monitor soil moisture levels closely in these dry conditions.",
        ],
    },
    "Bangalore": {
        "current": {"temp": 26, "condition": "Pleasant", "humidity": 65, "wind": 10, "icon": "cloud-sun"},
        "forecast": _forecast(
            ("Mon", 27, "cloud-sun"), ("Tue", 28, "sun"), ("Wed", 27, "cloud-sun"),
            ("Thu", 26, "cloud"), ("Fri", 25, "cloud-rain"),
        ),
        "farmingTips": [
            "Ideal conditions for planting most vegetables and flowering plants.",
            "Good time for grafting and propagation activities.",
            "Light irrigation recommended for established plants.",
            "Prepare for light rainfall expected by end of week.",
        ],
    },
    "Kolkata": {
        "current": {"temp": 34, "condition": "Humid", "humidity": 80, "wind": 6, "icon": "cloud"},
        "forecast": _forecast(
            ("Mon", 34, "cloud"), ("Tue", 35, "cloud-sun"), ("Wed", 33, "cloud-rain"),
            ("Thu", 32, "cloud-rain"), ("Fri", 33, "cloud"),
        ),
        "farmingTips": [
            "High humidity may increase fungal disease risk - monitor crops closely.",
            "Consider fungicide application before expected rainfall.",
            "Ensure adequate spacing between plants for air circulation.",
            "Good time for rice paddy preparation with upcoming rain.",
        ],
    },
    "Chennai": {
        "current": {"temp": 35, "condition": "Hot and Humid", "humidity": 70, "wind": 14, "icon": "sun"},
        "forecast": _forecast(
            ("Mon", 35, "sun"), ("Tue", 36, "sun"), ("Wed", 34, "cloud-sun"),
            ("Thu", 33, "cloud-rain"), ("Fri", 34, "cloud-sun"),
        ),
        "farmingTips": [
            "Mulch vegetable beds to keep soil moisture in the afternoon heat.",
            "Irrigate coconut and banana plantations in the early morning.",
            "Watch paddy fields for leaf folder activity in humid spells.",
            "Harvest ripe vegetables before Thursday's showers.",
        ],
    },
}


def get_weather(location: str) -> dict[str, Any]:
    """Return the payload for `location` (exact city name), else Mumbai's."""
    return WEATHER_DATA.get(location, WEATHER_DATA[DEFAULT_CITY])
