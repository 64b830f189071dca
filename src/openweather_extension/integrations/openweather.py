from typing import Any

import httpx

from openweather_extension.config import settings


class OpenWeatherError(Exception):
    """OpenWeather request failure. The message never includes the request URL."""


def create_openweather_client(
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.openweather.api_url,
        follow_redirects=True,
        transport=transport,
    )


def location_query(city: str, state: str | None = None, country: str | None = None) -> str:
    """Join the location parts that are present, in city, state, country order"""
    return ",".join(part for part in (city, state, country) if part)


def _provider_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "no details"

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])

    return "no details"


async def request(
    client: httpx.AsyncClient,
    endpoint: str,
    location: str,
    lang: str,
    units: str,
    api_key: str,
) -> Any:
    """GET an OpenWeather endpoint and return the JSON body unmodified"""
    try:
        response = await client.get(
            endpoint,
            params={
                "q": location,
                "lang": lang,
                "units": units,
                "appid": api_key,
            },
        )
    except httpx.HTTPError as e:
        # httpx errors can carry the request, and with it the appid
        raise OpenWeatherError(f"{endpoint}: {type(e).__name__}: {e}") from None

    if not response.is_success:
        raise OpenWeatherError(
            f"{endpoint}: {response.status_code} {response.reason_phrase}: "
            f"{_provider_message(response)}"
        )

    try:
        return response.json()
    except ValueError:
        raise OpenWeatherError(f"{endpoint}: malformed JSON response") from None
