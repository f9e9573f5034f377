from typing import AsyncGenerator

import httpx
from fastapi import APIRouter, Depends

from app import config
from app.weather.utils import get_weather_by_city

router = APIRouter()


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(timeout=config.WEATHER_TIMEOUT) as client:
        yield client


@router.get("", summary="Weather for the default city")
async def default_weather(client: httpx.AsyncClient = Depends(get_http_client)):
    weather = await get_weather_by_city(client, config.WEATHER_DEFAULT_CITY)
    return {"success": True, "data": weather}


@router.get("/{city}", summary="Weather for a city")
async def city_weather(city: str, client: httpx.AsyncClient = Depends(get_http_client)):
    weather = await get_weather_by_city(client, city)
    return {"success": True, "data": weather}
