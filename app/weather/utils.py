"""Current weather lookup (Open-Meteo) and the game each condition suggests."""
import logging

import httpx

from app import config
from app.errors import NotFoundError, UpstreamError
from app.utils import round_half_up

logger = logging.getLogger(__name__)

# (lowest code, highest code, condition, icon, recommended game)
WEATHER_TABLE = [
    (2, 3, "Cloudy", "☁️", "Bear Panic"),
    (51, 67, "Rain", "🌧️", "Meteor Mayhem"),
    (71, 77, "Snow", "❄️", "Tarzan Rumble"),
    (95, 99, "Thunderstorm", "⛈️", "Bear Panic"),
]
CLEAR_SKY = ("Clear Sky", "☀️", "Snowball Showdown")


def describe_weather(code) -> dict:
    """Map a WMO weather code to a condition, an icon and a recommended game."""
    condition, icon, game = CLEAR_SKY
    for low, high, row_condition, row_icon, row_game in WEATHER_TABLE:
        if low <= code <= high:
            condition, icon, game = row_condition, row_icon, row_game
            break
    return {"condition": condition, "icon": icon, "recommendedGame": game}


async def get_weather_by_city(client: httpx.AsyncClient, city: str) -> dict:
    try:
        geocode = await client.get(config.GEOCODING_URL, params={"name": city, "count": 1})
        geocode.raise_for_status()
        results = geocode.json().get("results") or []
        if not results:
            raise NotFoundError("City not found")
        location = results[0]
        place = f"{location['name']}, {location.get('country', '')}".rstrip(", ")

        forecast = await client.get(
            config.FORECAST_URL,
            params={
                "latitude": location["latitude"],
                "longitude": location["longitude"],
                "current_weather": "true",
            },
        )
        forecast.raise_for_status()
        current = forecast.json()["current_weather"]
        code = int(current["weathercode"])
        temperature = float(current["temperature"])
    except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
        logger.error(f"Weather lookup failed for {city}: {exc}")
        raise UpstreamError("Failed to fetch weather") from exc

    details = describe_weather(code)
    return {
        "location": place,
        "temperature": round_half_up(temperature),
        "icon": details["icon"],
        "condition": details["condition"],
        "recommendedGame": details["recommendedGame"],
        "suggestion": f"Perfect weather for {details['recommendedGame']}!",
    }
