from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

import httpx

from openweather_extension.extension import OpenWeatherExtension
from openweather_extension.integrations.openweather import create_openweather_client
from openweather_extension.logging_context import configure_logging
from openweather_extension.schemas.extension import ExtensionTables


@asynccontextmanager
async def lifespan(
    parameter_values: dict[str, str | None] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    logger: logging.Logger | None = None,
) -> AsyncGenerator[OpenWeatherExtension, None]:
    """Set up logging and the HTTP client, then yield a bootstrapped extension."""
    configure_logging()

    # Fail fast on malformed tables before opening any connection
    tables = ExtensionTables.load()

    openweather_httpx_client = create_openweather_client(transport)

    try:
        extension = OpenWeatherExtension(openweather_httpx_client, tables, logger)
        for name, value in (parameter_values or {}).items():
            extension.parameter(name).value = value
        extension.bootstrap()

        yield extension
    finally:
        await openweather_httpx_client.aclose()
